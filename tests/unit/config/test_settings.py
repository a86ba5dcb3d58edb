import pytest
from pydantic import ValidationError

from menuflow.config.settings import Settings


def test_defaults():
    settings = Settings()

    assert settings.log_level == "INFO"
    assert settings.max_attempts == 3
    assert settings.store_path == "chatbots"


def test_from_env_reads_prefixed_variables():
    settings = Settings.from_env(
        {"MENUFLOW_LOG_LEVEL": "debug", "MENUFLOW_MAX_ATTEMPTS": "5", "OTHER": "x"}
    )

    assert settings.log_level == "DEBUG"
    assert settings.max_attempts == 5


def test_from_env_rejects_bad_level():
    with pytest.raises(ValidationError):
        Settings.from_env({"MENUFLOW_LOG_LEVEL": "loud"})
