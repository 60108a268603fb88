from groq_chat.config.settings import Settings


def test_api_key_from_env(monkeypatch):
    monkeypatch.delenv("VITE_GROQ_API_KEY", raising=False)
    monkeypatch.setenv("GROQ_API_KEY", "gsk_from_env")
    assert Settings().groq_api_key == "gsk_from_env"


def test_api_key_from_vite_name(monkeypatch):
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    monkeypatch.setenv("VITE_GROQ_API_KEY", "gsk_from_vite")
    assert Settings().groq_api_key == "gsk_from_vite"


def test_blank_api_key_is_missing():
    assert Settings(groq_api_key="   ").groq_api_key is None


def test_yaml_config_is_read(monkeypatch, tmp_path):
    cfg = tmp_path / "chat.yaml"
    cfg.write_text("default_language: fr\nhttp_timeout: 12\n", encoding="utf-8")
    monkeypatch.setenv("GROQ_CHAT_CONFIG_FILE", str(cfg))
    monkeypatch.delenv("DEFAULT_LANGUAGE", raising=False)
    s = Settings()
    assert s.default_language == "fr"
    assert s.http_timeout == 12.0


def test_log_options():
    s = Settings(log_level=" debug ", log_file="session.log")
    assert s.log_level == "DEBUG"
    assert s.log_file == "session.log"
