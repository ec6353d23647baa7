"""tagvalid - Tag-driven validation for dataclasses and pydantic models.

Fields declare rule names in a tag; a session walks the record recursively
and collects every failure instead of stopping at the first one.

Basic usage:
    from dataclasses import dataclass
    from tagvalid import ValidationSession, valid

    @dataclass
    class Person:
        name: str = valid("required")
        email: str = valid("required;email")

    session = ValidationSession()
    if not session.validate(Person(name="", email="a@b.com")):
        print(session.error_message())
"""

__version__ = "0.1.0"
__author__ = "tagvalid contributors"
__description__ = "Tag-driven recursive validation for Python records"

from tagvalid.checkers import Checker, EmailChecker, RequiredChecker, Rule, URLChecker
from tagvalid.collector import ErrorCollector, ValidationError
from tagvalid.config import TagvalidConfig, ValidationConfig, load_config
from tagvalid.errors import (
    EmailFormatError,
    MaxDepthExceededError,
    NilRuleError,
    OnlyRecordSupportedError,
    RegistrationError,
    RequiredError,
    RuleConflictError,
    RuleNotFoundError,
    RuleViolation,
    TagValidError,
    UnsupportedTypeError,
    URLFormatError,
    WrongTypeError,
    wrong_type,
)
from tagvalid.logs import enable_debug
from tagvalid.records import SelfValidating, valid
from tagvalid.registry import RuleRegistry, add_rule, get_default_registry
from tagvalid.session import ValidationSession

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    # Sessions and results
    "ValidationSession",
    "ValidationError",
    "ErrorCollector",
    # Rules
    "RuleRegistry",
    "get_default_registry",
    "add_rule",
    "Rule",
    "Checker",
    "RequiredChecker",
    "EmailChecker",
    "URLChecker",
    # Records
    "valid",
    "SelfValidating",
    # Configuration
    "TagvalidConfig",
    "ValidationConfig",
    "load_config",
    "enable_debug",
    # Errors
    "TagValidError",
    "RuleViolation",
    "RequiredError",
    "EmailFormatError",
    "URLFormatError",
    "WrongTypeError",
    "wrong_type",
    "RuleNotFoundError",
    "OnlyRecordSupportedError",
    "UnsupportedTypeError",
    "MaxDepthExceededError",
    "RegistrationError",
    "RuleConflictError",
    "NilRuleError",
]
