"""Two-tier rule registry.

The built-in tier is fixed when the registry is built and is read without
locking. The custom tier is guarded by a reader/writer lock: lookups share
it, registrations take it exclusively. A name lives in at most one tier.
"""

import logging
import threading
from collections.abc import Callable
from types import MappingProxyType
from typing import Any

from .checkers import Rule, builtin_checkers
from .errors import NilRuleError, RuleConflictError
from .locks import ReadWriteLock

logger = logging.getLogger(__name__)

BUILTIN_TIER = "built-in"
CUSTOM_TIER = "custom"


class RuleRegistry:
    """Resolves rule names to rule callables."""

    def __init__(self):
        self._builtin = MappingProxyType(self.builtin_rules())
        self._custom: dict[str, Rule] = {}
        self._lock = ReadWriteLock()

    def builtin_rules(self) -> dict[str, Rule]:
        """Rules making up the built-in tier. Called once, at construction."""
        return builtin_checkers()

    def register(self, name: str, rule: Rule | None) -> None:
        """Add a custom rule.

        Args:
            name: Rule name as used in field tags
            rule: Callable returning None or the failure

        Raises:
            NilRuleError: If rule is None or not callable
            RuleConflictError: If name is already taken by either tier
        """
        if rule is None or not callable(rule):
            raise NilRuleError(name)

        if name in self._builtin:
            raise RuleConflictError(name, BUILTIN_TIER)

        with self._lock.write_locked():
            if name in self._custom:
                raise RuleConflictError(name, CUSTOM_TIER)
            self._custom[name] = rule

        logger.debug(f"Registered custom rule [{name}]")

    def rule(self, name: str) -> Callable[[Rule], Rule]:
        """Decorator form of ``register``."""
        def decorator(func: Rule) -> Rule:
            self.register(name, func)
            return func
        return decorator

    def resolve(self, name: str) -> Rule | None:
        """Find the rule for a name, custom tier first."""
        with self._lock.read_locked():
            rule = self._custom.get(name)
        if rule is None:
            rule = self._builtin.get(name)
        return rule

    def tier_of(self, name: str) -> str | None:
        if name in self._builtin:
            return BUILTIN_TIER
        with self._lock.read_locked():
            if name in self._custom:
                return CUSTOM_TIER
        return None

    def names(self) -> list[tuple[str, str]]:
        """Registered names with their tier, built-ins first."""
        entries = [(name, BUILTIN_TIER) for name in self._builtin]
        with self._lock.read_locked():
            entries.extend((name, CUSTOM_TIER) for name in self._custom)
        return entries

    def __contains__(self, name: Any) -> bool:
        return self.tier_of(name) is not None

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._builtin) + len(self._custom)


_default_registry: RuleRegistry | None = None
_default_lock = threading.Lock()


def get_default_registry() -> RuleRegistry:
    """Process-wide registry used by sessions built without one."""
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            _default_registry = RuleRegistry()
        return _default_registry


def add_rule(name: str, rule: Rule | None) -> None:
    """Register a custom rule in the process-wide registry."""
    get_default_registry().register(name, rule)
