from teamplan.config import Settings, get_settings


def test_defaults():
    settings = Settings()

    assert settings.ollama_base_url == "http://localhost:11434"
    assert settings.ollama_model == "llama2"
    assert settings.ollama_timeout_seconds == 30
    assert settings.ollama_temperature == 0.7
    assert settings.ollama_max_tokens == 2048
    assert settings.api_port == 8888


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("OLLAMA_BASE_URL", "http://gpu-box:11434")
    monkeypatch.setenv("OLLAMA_MODEL", "mistral")
    monkeypatch.setenv("OLLAMA_TIMEOUT_SECONDS", "5")

    settings = Settings()

    assert settings.ollama_base_url == "http://gpu-box:11434"
    assert settings.ollama_model == "mistral"
    assert settings.ollama_timeout_seconds == 5


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
