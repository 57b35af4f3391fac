import pytest

from business_faq_chat.utils.config_loader import load_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("CONFIG_PATH", "STORAGE_BACKEND", "CHAT_MODEL", "ANALYSIS_MODEL"):
        monkeypatch.delenv(var, raising=False)


def test_default_config_has_every_section():
    config = load_config()
    for section in ("llm", "chunking", "retrieval", "scraper", "upload", "storage", "client_cache"):
        assert section in config
    assert config["retrieval"]["similarity_threshold"] == 0.1
    assert config["retrieval"]["top_k"] == 5
    assert config["scraper"]["max_content_chars"] == 8000


def test_env_overrides_win(monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "sql")
    monkeypatch.setenv("CHAT_MODEL", "gemini-test")

    config = load_config()

    assert config["storage"]["backend"] == "sql"
    assert config["llm"]["chat"]["model_name"] == "gemini-test"


def test_config_path_env(monkeypatch, tmp_path):
    custom = tmp_path / "custom.yaml"
    custom.write_text("retrieval:\n  top_k: 2\n", encoding="utf-8")
    monkeypatch.setenv("CONFIG_PATH", str(custom))

    assert load_config() == {"retrieval": {"top_k": 2}}


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.yaml"))
