"""Configuration for the report lifecycle."""

from fixwatch.config.lifecycle_config import (
    DEFAULT_JUDGE_THRESHOLD_CONFIG,
    DEFAULT_SECRET_CONFIG,
    JudgeThresholdConfig,
    SecretConfig,
)

__all__ = [
    "DEFAULT_JUDGE_THRESHOLD_CONFIG",
    "DEFAULT_SECRET_CONFIG",
    "JudgeThresholdConfig",
    "SecretConfig",
]
