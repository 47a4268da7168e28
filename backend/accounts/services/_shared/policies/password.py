"""Password-strength policy applied before an account reaches the provider."""

from __future__ import annotations

import string
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class PasswordPolicy:
    """
    Character-class and length requirements for new passwords.

    :param min_length: Shortest accepted password.
    :param max_length: Longest accepted password.
    :param require_upper: At least one ASCII uppercase letter.
    :param require_lower: At least one ASCII lowercase letter.
    :param require_digit: At least one digit.
    :param require_symbol: At least one punctuation character.
    """

    min_length: int = 8
    max_length: int = 128
    require_upper: bool = True
    require_lower: bool = True
    require_digit: bool = True
    require_symbol: bool = False

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> PasswordPolicy:
        """Build a policy from ``PASSWORD_*`` settings, keeping defaults for missing keys."""
        defaults = cls()
        return cls(
            min_length=int(config.get("PASSWORD_MIN_LENGTH", defaults.min_length)),
            max_length=int(config.get("PASSWORD_MAX_LENGTH", defaults.max_length)),
            require_upper=bool(config.get("PASSWORD_REQUIRE_UPPER", defaults.require_upper)),
            require_lower=bool(config.get("PASSWORD_REQUIRE_LOWER", defaults.require_lower)),
            require_digit=bool(config.get("PASSWORD_REQUIRE_DIGIT", defaults.require_digit)),
            require_symbol=bool(config.get("PASSWORD_REQUIRE_SYMBOL", defaults.require_symbol)),
        )

    def violations(self, password: str) -> list[str]:
        """Return one message per unmet requirement; empty when the password passes."""
        problems: list[str] = []
        if len(password) < self.min_length:
            problems.append(f"Password must be at least {self.min_length} characters long.")
        if len(password) > self.max_length:
            problems.append(f"Password must be at most {self.max_length} characters long.")
        if self.require_upper and not any(ch in string.ascii_uppercase for ch in password):
            problems.append("Password must contain an uppercase letter.")
        if self.require_lower and not any(ch in string.ascii_lowercase for ch in password):
            problems.append("Password must contain a lowercase letter.")
        if self.require_digit and not any(ch.isdigit() for ch in password):
            problems.append("Password must contain a digit.")
        if self.require_symbol and not any(ch in string.punctuation for ch in password):
            problems.append("Password must contain a symbol.")
        return problems

    def is_satisfied_by(self, password: str) -> bool:
        return not self.violations(password)
