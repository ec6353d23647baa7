"""Record introspection.

A record is a dataclass instance or a pydantic model instance. Its fields
are read in declaration order together with their rule tag and declared
type; nothing on the record is ever modified.
"""

import dataclasses
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Protocol, get_type_hints, runtime_checkable

from pydantic import BaseModel

from .constants import TAG_KEY

logger = logging.getLogger(__name__)


@runtime_checkable
class SelfValidating(Protocol):
    """Records exposing a record-level check run before field checks."""

    def self_validate(self) -> Exception | None:
        ...


@dataclass(frozen=True)
class FieldInfo:
    """One declared field of a record, as seen during traversal."""
    name: str
    value: Any
    tag: str | None
    declared_type: Any = None

    @property
    def private(self) -> bool:
        return self.name.startswith("_")


def valid(rules: str, **kwargs: Any) -> Any:
    """Declare a dataclass field carrying a rule tag.

    Example:
        @dataclass
        class Person:
            name: str = valid("required")
            email: str = valid("required;email", default="")
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[TAG_KEY] = rules
    return dataclasses.field(metadata=metadata, **kwargs)


def is_record(value: Any) -> bool:
    """Whether a value is a record instance (not a record class)."""
    if isinstance(value, type):
        return False
    return isinstance(value, BaseModel) or dataclasses.is_dataclass(value)


@lru_cache(maxsize=256)
def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return get_type_hints(cls)
    except Exception as e:
        # Unresolvable forward references; classification falls back to values
        logger.debug(f"Could not resolve type hints of {cls.__name__}: {e}")
        return {}


def record_fields(record: Any) -> list[FieldInfo]:
    """List the declared fields of a record in declaration order."""
    cls = type(record)

    if isinstance(record, BaseModel):
        fields = []
        for name, info in cls.model_fields.items():
            extra = info.json_schema_extra
            tag = extra.get(TAG_KEY) if isinstance(extra, dict) else None
            fields.append(FieldInfo(name, getattr(record, name), tag, info.annotation))
        return fields

    hints = _type_hints(cls)
    return [
        FieldInfo(
            f.name,
            getattr(record, f.name),
            f.metadata.get(TAG_KEY),
            hints.get(f.name, f.type),
        )
        for f in dataclasses.fields(record)
    ]
