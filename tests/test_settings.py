from user_service.settings import Settings, get_settings


def test_settings_read_from_env(monkeypatch):
    monkeypatch.setenv("API_TOKEN", "  from-env  ")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    s = get_settings()
    assert s.api_token == "from-env"
    assert s.log_level == "DEBUG"


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("API_TOKEN", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    s = Settings(_env_file=None)
    assert s.api_token == "my-secret-token"
    assert s.log_level == "INFO"
