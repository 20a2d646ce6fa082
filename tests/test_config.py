import pytest

from humandiff.config import Settings


def test_defaults_when_environment_is_empty() -> None:
    settings = Settings.from_env({})

    assert settings.api_url == "http://localhost:5000"
    assert settings.api_key is None
    assert settings.timeout == 30.0
    assert settings.history_path == "datasets/history.parquet"
    assert settings.lookahead_window == 3
    assert settings.log_level == "INFO"


def test_values_are_read_from_environment() -> None:
    settings = Settings.from_env(
        {
            "HUMANDIFF_API_URL": "https://rewrite.example.com",
            "HUMANDIFF_API_KEY": "token",
            "HUMANDIFF_TIMEOUT": "2.5",
            "HUMANDIFF_HISTORY_PATH": "/tmp/h.parquet",
            "HUMANDIFF_LOOKAHEAD_WINDOW": "5",
            "HUMANDIFF_LOG_LEVEL": "debug",
        }
    )

    assert settings.api_url == "https://rewrite.example.com"
    assert settings.api_key == "token"
    assert settings.timeout == 2.5
    assert settings.history_path == "/tmp/h.parquet"
    assert settings.lookahead_window == 5
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    "env, message",
    [
        ({"HUMANDIFF_LOOKAHEAD_WINDOW": "three"}, "HUMANDIFF_LOOKAHEAD_WINDOW must be an integer"),
        ({"HUMANDIFF_LOOKAHEAD_WINDOW": "-1"}, "HUMANDIFF_LOOKAHEAD_WINDOW must be non-negative"),
        ({"HUMANDIFF_TIMEOUT": "soon"}, "HUMANDIFF_TIMEOUT must be a number"),
        ({"HUMANDIFF_TIMEOUT": "0"}, "HUMANDIFF_TIMEOUT must be positive"),
    ],
)
def test_invalid_values_name_the_variable(env, message) -> None:
    with pytest.raises(ValueError, match=message):
        Settings.from_env(env)


def test_reads_os_environ_by_default(monkeypatch) -> None:
    monkeypatch.setenv("HUMANDIFF_LOOKAHEAD_WINDOW", "1")

    assert Settings.from_env().lookahead_window == 1
