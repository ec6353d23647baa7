"""Rule spec parsing for field annotations."""

from .constants import IGNORE_SENTINEL, REQUIRED_KEY, RULE_SEPARATOR

RuleSpec = tuple[str, ...]


def parse_rule_spec(raw: str | None) -> RuleSpec:
    """Extract the rule names declared by one field annotation.

    Names keep their declaration order with duplicates collapsed. Rule
    parameters are not parsed, so ``min=3`` is just a name.

    Args:
        raw: Annotation string found under the tag key, or None when absent

    Returns:
        Tuple of rule names; empty when the field must be skipped
    """
    if not raw or raw == IGNORE_SENTINEL:
        return ()

    names: dict[str, None] = {}
    for token in raw.split(RULE_SEPARATOR):
        token = token.strip()
        if token:
            names[token] = None

    return tuple(names)


def split_required(spec: RuleSpec) -> tuple[bool, RuleSpec]:
    """Pull ``required`` out of a spec so it can be checked first."""
    if REQUIRED_KEY not in spec:
        return False, spec
    return True, tuple(name for name in spec if name != REQUIRED_KEY)
