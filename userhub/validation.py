"""
Input checks that run before anything touches the store.

All rules are evaluated independently so a client sees every problem with
its request at once.  Uniqueness is *not* checked here; the store's unique
indexes are the only authority on that.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from email_validator import EmailNotValidError, validate_email as _check_email_syntax

USERNAME_MIN_LENGTH = 3


@dataclass(frozen=True)
class Violation:
    field: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class ValidatedInput:
    username: str
    email: str


@dataclass(frozen=True)
class ValidationResult:
    """Either ``value`` is set (accepted) or ``violations`` is non-empty."""

    value: Optional[ValidatedInput] = None
    violations: List[Violation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.value is not None and not self.violations


def validate_username(value: Any) -> Optional[Violation]:
    if not isinstance(value, str) or len(value) < USERNAME_MIN_LENGTH:
        return Violation(
            "username",
            f"Username must be at least {USERNAME_MIN_LENGTH} characters long.",
        )
    return None


def validate_email(value: Any) -> Optional[Violation]:
    """Syntax-only check: local part, ``@``, and a dotted domain. No DNS lookups."""
    if not isinstance(value, str) or not value:
        return Violation("email", "Email is required.")
    try:
        _check_email_syntax(value, check_deliverability=False)
    except EmailNotValidError:
        return Violation("email", "Email must be a valid email address.")
    return None


def validate_user_input(data: Any) -> ValidationResult:
    """Check a raw request body for ``username`` and ``email``."""
    if not isinstance(data, dict):
        data = {}

    username = data.get("username")
    email = data.get("email")

    violations = [
        v for v in (validate_username(username), validate_email(email)) if v is not None
    ]
    if violations:
        return ValidationResult(violations=violations)
    return ValidationResult(value=ValidatedInput(username=username, email=email))
