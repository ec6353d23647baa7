"""Recursive traversal and rule dispatch.

``validate_record`` walks the declared fields of a record; ``type_check``
applies one field's rule spec to a value and dispatches on its structural
kind, recursing into sequences, optionals and nested records. Every failure
is appended to the collector and traversal always runs to completion.
"""

import logging
from typing import Any

from .checkers import Rule
from .collector import ErrorCollector
from .constants import DEFAULT_MAX_DEPTH, OBJECT_FIELD, REQUIRED_KEY
from .errors import (
    MaxDepthExceededError,
    OnlyRecordSupportedError,
    RequiredError,
    RuleNotFoundError,
    RuleViolation,
    UnsupportedTypeError,
)
from .kinds import Kind, classify, element_type
from .records import SelfValidating, is_record, record_fields
from .registry import RuleRegistry
from .rulespec import RuleSpec, parse_rule_spec, split_required

logger = logging.getLogger(__name__)


def run_rule(name: str, rule: Rule, value: Any) -> Exception | None:
    """Invoke a rule, turning whatever it reports into None or a failure."""
    try:
        result = rule(value)
    except Exception as e:
        logger.debug(f"Rule [{name}] raised {type(e).__name__}: {e}")
        return e
    if isinstance(result, Exception):
        return result
    if result is False:
        return RuleViolation(f"check [{name}] failed")
    return None


class TraversalEngine:
    """Walks one value at a time against a registry, filling a collector."""

    def __init__(
        self,
        registry: RuleRegistry,
        collector: ErrorCollector,
        indexed_paths: bool = False,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self.registry = registry
        self.collector = collector
        self.indexed_paths = indexed_paths
        self.max_depth = max_depth
        self._active: set[int] = set()
        self._depth = 0
        self._handlers = {
            Kind.SCALAR: self._check_scalar,
            Kind.SEQUENCE: self._check_sequence,
            Kind.POINTER: self._check_pointer,
            Kind.INTERFACE: self._check_interface,
            Kind.RECORD: self._check_record,
            Kind.UNSUPPORTED: self._check_unsupported,
        }

    def validate_record(self, value: Any, prefix: str = "") -> None:
        """Validate a record: self-check first, then every tagged field.

        Args:
            value: Record instance, or None (vacuously valid)
            prefix: Path of the record when indexed paths are enabled
        """
        if value is None:
            return

        label = prefix or OBJECT_FIELD
        if not is_record(value):
            self.collector.add(label, value, OnlyRecordSupportedError(type(value)))
            return

        if not self._enter(value, label):
            return
        try:
            logger.debug(f"Check record [{type(value).__name__}]")

            if isinstance(value, SelfValidating):
                try:
                    error = value.self_validate()
                except Exception as e:
                    error = e
                if error is not None:
                    self.collector.add(label, value, error)

            for field in record_fields(value):
                if field.private:
                    continue

                spec = parse_rule_spec(field.tag)
                if not spec:
                    continue

                logger.debug(f"\tCheck field [{field.name}] rules {list(spec)}")
                field_label = f"{prefix}.{field.name}" if prefix else field.name
                self.type_check(field.value, spec, field_label, declared=field.declared_type)
        finally:
            self._leave(value)

    def type_check(
        self,
        value: Any,
        spec: RuleSpec,
        label: str,
        ignore_required: bool = False,
        declared: Any = None,
    ) -> None:
        """Apply a rule spec to a value and recurse according to its kind.

        Args:
            value: Value to check
            spec: Rule names declared on the owning field
            label: Field name failures are recorded under
            ignore_required: Drop ``required`` unchecked; set when following
                an optional to its target, whose presence was already checked
            declared: Declared type of the value, if known
        """
        kind, inner = classify(value, declared)
        has_required, remaining = split_required(spec)

        if has_required and not ignore_required:
            error = self._check_required(value, kind)
            if error is not None:
                self.collector.add(label, value, error)

        # Elements are checked against the whole spec, required included
        handler_spec = spec if kind is Kind.SEQUENCE else remaining
        self._handlers[kind](value, handler_spec, inner, label)

    def _check_required(self, value: Any, kind: Kind) -> Exception | None:
        # An optional is present as soon as it is not None, whatever it holds
        if kind is Kind.POINTER:
            return RequiredError() if value is None else None
        return run_rule(REQUIRED_KEY, self.registry.resolve(REQUIRED_KEY), value)

    def _check_scalar(self, value: Any, spec: RuleSpec, inner: Any, label: str) -> None:
        for name in spec:
            logger.debug(f"CheckerName: [{name}]")

            rule = self.registry.resolve(name)
            if rule is None:
                logger.debug(f"can't find checker for [{name}]")
                self.collector.add(label, value, RuleNotFoundError(name))
                continue

            error = run_rule(name, rule, value)
            if error is not None:
                self.collector.add(label, value, error)

    def _check_sequence(self, value: Any, spec: RuleSpec, declared: Any, label: str) -> None:
        if not self._enter(value, label):
            return
        try:
            for i, item in enumerate(value):
                item_label = f"{label}[{i}]" if self.indexed_paths else label
                if is_record(item):
                    self.validate_record(item, self._prefix(item_label))
                else:
                    self.type_check(item, spec, item_label, declared=element_type(declared, i))
        finally:
            self._leave(value)

    def _check_pointer(self, value: Any, spec: RuleSpec, target: Any, label: str) -> None:
        if value is not None:
            self.type_check(value, spec, label, ignore_required=True, declared=target)

    def _check_interface(self, value: Any, spec: RuleSpec, inner: Any, label: str) -> None:
        if value is not None:
            self.validate_record(value, self._prefix(label))

    def _check_record(self, value: Any, spec: RuleSpec, inner: Any, label: str) -> None:
        self.validate_record(value, self._prefix(label))

    def _check_unsupported(self, value: Any, spec: RuleSpec, inner: Any, label: str) -> None:
        self.collector.add(label, value, UnsupportedTypeError(type(value)))

    def _prefix(self, label: str) -> str:
        return label if self.indexed_paths else ""

    def _enter(self, value: Any, label: str) -> bool:
        if id(value) in self._active:
            logger.debug(f"Skip [{label}]: already being validated")
            return False
        if self._depth >= self.max_depth:
            self.collector.add(label, value, MaxDepthExceededError(self.max_depth))
            return False
        self._active.add(id(value))
        self._depth += 1
        return True

    def _leave(self, value: Any) -> None:
        self._active.discard(id(value))
        self._depth -= 1
