"""Ordered collection of validation failures for one session."""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any


@dataclass
class ValidationError:
    """A single failure: which field, which value, what went wrong."""
    field_name: str
    value: Any
    error: Exception

    @property
    def message(self) -> str:
        return str(self.error)

    def __str__(self) -> str:
        return f"[{self.field_name}] check failed [{self.message}] [{self.value!r}]"

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field_name,
            "error_type": type(self.error).__name__,
            "message": self.message,
            "value": repr(self.value),
        }


class ErrorCollector:
    """Append-only list of failures kept in encounter order."""

    def __init__(self):
        self._errors: list[ValidationError] = []

    def add(self, field_name: str, value: Any, error: Exception) -> ValidationError:
        """Record one failure."""
        entry = ValidationError(field_name, value, error)
        self._errors.append(entry)
        return entry

    def reset(self) -> None:
        self._errors = []

    clear = reset

    @property
    def has_error(self) -> bool:
        return len(self._errors) != 0

    @property
    def errors(self) -> list[ValidationError]:
        return list(self._errors)

    def report(self) -> str:
        """Render every failure, one per line, in accumulation order."""
        return "\n".join(str(entry) for entry in self._errors)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "passed": not self.has_error,
            "total_errors": len(self._errors),
            "errors": [entry.to_dict() for entry in self._errors],
        }

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self) -> Iterator[ValidationError]:
        return iter(list(self._errors))
