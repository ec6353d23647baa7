"""Validation sessions.

A session owns the failures of one validation pass. It is created by the
caller, shared by any number of ``validate`` calls, and emptied with
``reset``.
"""

import logging
from typing import Any

from .collector import ErrorCollector, ValidationError
from .config import TagvalidConfig, ValidationConfig
from .engine import TraversalEngine
from .registry import RuleRegistry, get_default_registry

logger = logging.getLogger(__name__)


class ValidationSession:
    """Validates records against a rule registry, accumulating failures.

    Example:
        session = ValidationSession()
        if not session.validate(person):
            print(session.error_message())
    """

    def __init__(
        self,
        registry: RuleRegistry | None = None,
        config: ValidationConfig | None = None,
    ):
        self.registry = registry if registry is not None else get_default_registry()
        self.config = config if config is not None else ValidationConfig()
        self.collector = ErrorCollector()
        self._engine = TraversalEngine(
            self.registry,
            self.collector,
            indexed_paths=self.config.indexed_paths,
            max_depth=self.config.max_depth,
        )

    @classmethod
    def from_config(cls, config: TagvalidConfig, registry: RuleRegistry | None = None) -> "ValidationSession":
        return cls(registry=registry, config=config.validation)

    def validate(self, obj: Any) -> bool:
        """Validate a record.

        Failures are added to the session; nothing is raised.

        Args:
            obj: Dataclass or pydantic model instance (None is valid)

        Returns:
            True when the session holds no failures
        """
        before = len(self.collector)
        self._engine.validate_record(obj)
        logger.debug(f"Validation added {len(self.collector) - before} error(s)")
        return not self.collector.has_error

    @property
    def errors(self) -> list[ValidationError]:
        return self.collector.errors

    @property
    def has_error(self) -> bool:
        return self.collector.has_error

    def error_message(self) -> str:
        """Human-readable report of every failure."""
        return self.collector.report()

    def reset(self) -> None:
        """Forget all failures so the session can be reused."""
        self.collector.reset()

    def to_dict(self) -> dict:
        return self.collector.to_dict()
