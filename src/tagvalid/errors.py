"""Exception taxonomy for tagvalid.

Rule and structural failures are exception *instances* that rules return and
the engine records; they are never raised out of ``ValidationSession.validate``.
Registration failures are raised to the caller of ``RuleRegistry.register``.
"""

from typing import Any


class TagValidError(Exception):
    """Base class for every tagvalid error."""


class RuleViolation(TagValidError):
    """A rule ran and reported the value invalid."""


class RequiredError(RuleViolation):
    def __init__(self, message: str = "field can't be empty or zero"):
        super().__init__(message)


class EmailFormatError(RuleViolation):
    def __init__(self, message: str = "email format is not valid"):
        super().__init__(message)


class URLFormatError(RuleViolation):
    def __init__(self, message: str = "url format is not valid"):
        super().__init__(message)


class WrongTypeError(RuleViolation):
    """A rule received a value of a type it cannot check."""

    def __init__(self, expected: str, value: Any):
        self.expected = expected
        self.value = value
        super().__init__(f"expect type {expected}, but got {type(value).__name__}")


def wrong_type(expected: str, value: Any) -> WrongTypeError:
    """Build the failure a rule returns when handed an unexpected type."""
    return WrongTypeError(expected, value)


class RuleNotFoundError(TagValidError):
    """A field declares a rule name that no tier knows about."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"can't find checker for [{name}]")


class StructuralError(TagValidError):
    """The shape of a value cannot be validated."""


class OnlyRecordSupportedError(StructuralError):
    def __init__(self, value_type: type):
        self.value_type = value_type
        super().__init__(
            f"validation only supports records, but got type: {value_type.__name__}"
        )


class UnsupportedTypeError(StructuralError):
    def __init__(self, value_type: type):
        self.value_type = value_type
        super().__init__(f"validation unsupported type: {value_type.__name__}")


class MaxDepthExceededError(StructuralError):
    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        super().__init__(f"maximum nesting depth {max_depth} exceeded")


class RegistrationError(TagValidError):
    """Registering a custom rule failed."""


class RuleConflictError(RegistrationError):
    def __init__(self, name: str, tier: str):
        self.name = name
        self.tier = tier
        super().__init__(f"rule [{name}] already exists in the {tier} tier")


class NilRuleError(RegistrationError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"rule [{name}] should not be None and must be callable")
