"""Built-in rule checkers.

A rule is any callable taking the field value and returning ``None`` on
success or an exception instance describing the failure. The built-ins are
``Checker`` subclasses so they share one calling convention.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sized
from typing import Any
from urllib.parse import urlparse

from email_validator import EmailNotValidError, validate_email

from .errors import EmailFormatError, RequiredError, URLFormatError, wrong_type

Rule = Callable[[Any], Exception | None]


class Checker(ABC):
    """Base class for rules implemented as objects."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Rule name used in tags."""
        pass

    @abstractmethod
    def check(self, value: Any) -> Exception | None:
        """Check one value.

        Args:
            value: Runtime value of the field (or of one sequence element)

        Returns:
            None when valid, otherwise the failure
        """
        pass

    def __call__(self, value: Any) -> Exception | None:
        return self.check(value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def is_zero(value: Any) -> bool:
    """Whether a value is the zero value of its type."""
    if value is None:
        return True
    if isinstance(value, bool):
        return value is False
    if isinstance(value, (int, float, complex)):
        return value == 0
    if isinstance(value, (str, bytes, bytearray, Mapping)):
        return len(value) == 0
    if isinstance(value, Sized):
        return len(value) == 0
    return False


class RequiredChecker(Checker):
    """Value must be present: not None, not zero, not empty."""

    @property
    def name(self) -> str:
        return "required"

    def check(self, value: Any) -> Exception | None:
        if is_zero(value):
            return RequiredError()
        return None


class EmailChecker(Checker):
    """Value must be a syntactically valid email address; DNS is never consulted."""

    @property
    def name(self) -> str:
        return "email"

    def check(self, value: Any) -> Exception | None:
        if not isinstance(value, str):
            return wrong_type("str", value)
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            return EmailFormatError()
        return None


class URLChecker(Checker):
    """Value must be an absolute URL with a scheme and a host."""

    @property
    def name(self) -> str:
        return "url"

    def check(self, value: Any) -> Exception | None:
        if not isinstance(value, str):
            return wrong_type("str", value)
        try:
            parsed = urlparse(value)
        except ValueError:
            return URLFormatError()
        if not parsed.scheme or not parsed.netloc:
            return URLFormatError()
        return None


def builtin_checkers() -> dict[str, Rule]:
    """Fresh mapping of the built-in rules keyed by name."""
    checkers: list[Checker] = [RequiredChecker(), EmailChecker(), URLChecker()]
    return {checker.name: checker for checker in checkers}
