import pytest

from business_faq_chat.exception.custom_exception import ProviderError, ProviderErrorKind
from business_faq_chat.utils.config_loader import load_config
from business_faq_chat.utils.model_loader import ModelLoader
from orchestrator.client_manager import ChatClientManager


class StubModelLoader(ModelLoader):
    def __init__(self, error=None):
        super().__init__(load_config())
        self.error = error
        self.loaded = []

    def load_llm(self, role, credential):
        if self.error:
            raise self.error
        self.loaded.append((role, credential))
        return object()


@pytest.fixture(autouse=True)
def no_env_credentials(monkeypatch):
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)


def test_missing_credential_is_a_credential_error():
    manager = ChatClientManager(StubModelLoader())

    with pytest.raises(ProviderError) as exc_info:
        manager.get_client("")
    assert exc_info.value.kind == ProviderErrorKind.CREDENTIAL


def test_clients_are_cached_per_credential():
    loader = StubModelLoader()
    manager = ChatClientManager(loader)

    first = manager.get_client("key-a")
    assert manager.get_client("key-a") is first
    assert manager.get_client("key-b") is not first
    assert loader.loaded == [
        ("chat", "key-a"),
        ("analysis", "key-a"),
        ("chat", "key-b"),
        ("analysis", "key-b"),
    ]


def test_cache_keys_do_not_contain_the_credential():
    manager = ChatClientManager(StubModelLoader())
    manager.get_client("AIzaSuperSecret")
    assert all("AIzaSuperSecret" not in key for key in manager.cache.keys())


def test_env_credential_is_used_as_fallback(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    loader = StubModelLoader()

    ChatClientManager(loader).get_client(None)

    assert loader.loaded[0] == ("chat", "env-key")


def test_construction_errors_are_classified():
    manager = ChatClientManager(StubModelLoader(error=ValueError("API_KEY rejected")))

    with pytest.raises(ProviderError) as exc_info:
        manager.get_client("bad")
    assert exc_info.value.kind == ProviderErrorKind.CREDENTIAL
