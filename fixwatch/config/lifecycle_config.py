"""Report lifecycle configuration.

This module defines the judge thresholds and secret generation settings,
with environment variable overrides for deployment tuning.

Environment Variables (Judge):
- FIXWATCH_CONFIRM_THRESHOLD: Approve votes needed to confirm (default: 5)
- FIXWATCH_CONTEST_THRESHOLD: Challenge votes needed to contest (default: 5)

Environment Variables (Secrets):
- FIXWATCH_SECRET_LENGTH: Characters in a reporter secret (default: 8)
- FIXWATCH_REPORT_ID_LENGTH: Characters in a public report id (default: 8)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_CONFIRM_THRESHOLD = 5
DEFAULT_CONTEST_THRESHOLD = 5
DEFAULT_SECRET_LENGTH = 8
DEFAULT_REPORT_ID_LENGTH = 8

MIN_TOKEN_LENGTH = 6
MAX_TOKEN_LENGTH = 32

ENVIRONMENT_ENV = "ENVIRONMENT"
DEFAULT_ENVIRONMENT = "production"


def get_environment() -> str:
    """Deployment environment name, shared by logging and metrics labels."""
    return os.environ.get(ENVIRONMENT_ENV, DEFAULT_ENVIRONMENT)


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class JudgeThresholdConfig:
    """Vote thresholds used by the threshold judge.

    Attributes:
        confirm_threshold: Minimum approve votes for confirmation. Approval
            also needs a strict majority over challenges.
        contest_threshold: Minimum challenge votes for contesting.
    """

    confirm_threshold: int = DEFAULT_CONFIRM_THRESHOLD
    contest_threshold: int = DEFAULT_CONTEST_THRESHOLD

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.confirm_threshold < 1:
            raise ValueError(
                f"confirm_threshold must be at least 1, got {self.confirm_threshold}"
            )
        if self.contest_threshold < 1:
            raise ValueError(
                f"contest_threshold must be at least 1, got {self.contest_threshold}"
            )

    @classmethod
    def from_environment(cls) -> JudgeThresholdConfig:
        """Create config from environment variables with defaults."""
        return cls(
            confirm_threshold=_get_int_env(
                "FIXWATCH_CONFIRM_THRESHOLD", DEFAULT_CONFIRM_THRESHOLD
            ),
            contest_threshold=_get_int_env(
                "FIXWATCH_CONTEST_THRESHOLD", DEFAULT_CONTEST_THRESHOLD
            ),
        )


@dataclass(frozen=True)
class SecretConfig:
    """Lengths of generated secrets and report ids.

    Both are drawn from the uppercase alphanumeric alphabet so they can be
    read aloud or copied by hand.
    """

    secret_length: int = DEFAULT_SECRET_LENGTH
    report_id_length: int = DEFAULT_REPORT_ID_LENGTH

    def __post_init__(self) -> None:
        """Validate configuration values."""
        for name, value in (
            ("secret_length", self.secret_length),
            ("report_id_length", self.report_id_length),
        ):
            if not MIN_TOKEN_LENGTH <= value <= MAX_TOKEN_LENGTH:
                raise ValueError(
                    f"{name} must be between {MIN_TOKEN_LENGTH} and "
                    f"{MAX_TOKEN_LENGTH}, got {value}"
                )

    @classmethod
    def from_environment(cls) -> SecretConfig:
        """Create config from environment variables with defaults."""
        return cls(
            secret_length=_get_int_env(
                "FIXWATCH_SECRET_LENGTH", DEFAULT_SECRET_LENGTH
            ),
            report_id_length=_get_int_env(
                "FIXWATCH_REPORT_ID_LENGTH", DEFAULT_REPORT_ID_LENGTH
            ),
        )


# Default configurations
DEFAULT_JUDGE_THRESHOLD_CONFIG = JudgeThresholdConfig()
DEFAULT_SECRET_CONFIG = SecretConfig()
