"""Pytest configuration and fixtures for tagvalid tests."""

import pytest

from tagvalid import RuleRegistry, ValidationSession, wrong_type


def upper_checker(value):
    """Custom rule: first letter must be upper case."""
    if not isinstance(value, str):
        return wrong_type("str", value)
    if not value or not value[0].isupper():
        return ValueError("name first letter should be upper case")
    return None


def age_checker(value):
    """Custom rule: age between 1 and 140."""
    if not isinstance(value, int):
        return wrong_type("int", value)
    if value <= 0 or value > 140:
        return ValueError(f"age check failed. should be between [1-140], now {value}")
    return None


@pytest.fixture
def registry():
    """Independent registry per test."""
    return RuleRegistry()


@pytest.fixture
def session(registry):
    """Session bound to the per-test registry."""
    return ValidationSession(registry=registry)


@pytest.fixture
def upper_rule():
    return upper_checker


@pytest.fixture
def age_rule():
    return age_checker
