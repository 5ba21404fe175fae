"""Unit tests for lifecycle configuration."""

import pytest

from fixwatch.config.lifecycle_config import (
    DEFAULT_JUDGE_THRESHOLD_CONFIG,
    DEFAULT_SECRET_CONFIG,
    JudgeThresholdConfig,
    SecretConfig,
)


class TestJudgeThresholdConfig:
    """Tests for JudgeThresholdConfig."""

    def test_defaults(self) -> None:
        assert DEFAULT_JUDGE_THRESHOLD_CONFIG.confirm_threshold == 5
        assert DEFAULT_JUDGE_THRESHOLD_CONFIG.contest_threshold == 5

    @pytest.mark.parametrize("field", ["confirm_threshold", "contest_threshold"])
    def test_threshold_must_be_positive(self, field: str) -> None:
        with pytest.raises(ValueError, match=field):
            JudgeThresholdConfig(**{field: 0})

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FIXWATCH_CONFIRM_THRESHOLD", "3")
        monkeypatch.setenv("FIXWATCH_CONTEST_THRESHOLD", "7")

        config = JudgeThresholdConfig.from_environment()

        assert config.confirm_threshold == 3
        assert config.contest_threshold == 7

    def test_from_environment_ignores_garbage(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("FIXWATCH_CONFIRM_THRESHOLD", "five")
        monkeypatch.delenv("FIXWATCH_CONTEST_THRESHOLD", raising=False)

        config = JudgeThresholdConfig.from_environment()

        assert config == DEFAULT_JUDGE_THRESHOLD_CONFIG

    def test_from_environment_rejects_zero(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("FIXWATCH_CONTEST_THRESHOLD", "0")

        with pytest.raises(ValueError):
            JudgeThresholdConfig.from_environment()


class TestSecretConfig:
    """Tests for SecretConfig."""

    def test_defaults(self) -> None:
        assert DEFAULT_SECRET_CONFIG.secret_length == 8
        assert DEFAULT_SECRET_CONFIG.report_id_length == 8

    @pytest.mark.parametrize("length", [5, 33])
    def test_length_bounds(self, length: int) -> None:
        with pytest.raises(ValueError, match="between 6 and 32"):
            SecretConfig(secret_length=length)

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FIXWATCH_SECRET_LENGTH", "12")
        monkeypatch.setenv("FIXWATCH_REPORT_ID_LENGTH", "10")

        config = SecretConfig.from_environment()

        assert config.secret_length == 12
        assert config.report_id_length == 10
