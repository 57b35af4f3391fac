import pytest
import pytest_asyncio

from db.chat_repository import SqlChatRepository
from db.database import build_engine, build_session_factory, init_db, resolve_database_url
from db.repository_factory import build_repository
from business_faq_chat.storage import InMemoryChatRepository
from business_faq_chat.utils.embedding import EMBEDDING_VERSION


@pytest_asyncio.fixture
async def sql_repository(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'chat.db'}")
    await init_db(engine)
    yield SqlChatRepository(build_session_factory(engine))
    await engine.dispose()


@pytest.mark.asyncio
async def test_session_round_trip(sql_repository):
    created = await sql_repository.create_chat_session(
        "s1", "secret-key", website_url="https://acme.test", document_ids=["d1"]
    )
    fetched = await sql_repository.get_chat_session("s1")

    assert fetched.session_id == created.session_id == "s1"
    assert fetched.api_key.get_secret_value() == "secret-key"
    assert fetched.website_url == "https://acme.test"
    assert fetched.document_ids == ["d1"]
    assert await sql_repository.get_chat_session("missing") is None


@pytest.mark.asyncio
async def test_documents_start_unembedded_and_accept_embedding(sql_repository):
    await sql_repository.create_chat_session("s1", "key")
    doc = await sql_repository.create_document("s1", "faq.txt", "Shipping is free.")
    assert doc.embedding is None

    await sql_repository.update_document_embedding(doc.id, [0.6, 0.8])

    [stored] = await sql_repository.get_documents_by_session_id("s1")
    assert stored.embedding == [0.6, 0.8]
    assert stored.embedding_version == EMBEDDING_VERSION
    assert await sql_repository.get_documents_by_session_id("other") == []


@pytest.mark.asyncio
async def test_website_content_is_scoped_to_session(sql_repository):
    await sql_repository.create_chat_session("s1", "key")
    await sql_repository.create_chat_session("s2", "key")
    content = await sql_repository.create_website_content("s1", "https://acme.test", "Acme", "Widgets")
    await sql_repository.update_website_content_embedding(content.id, [1.0])

    [stored] = await sql_repository.get_website_content_by_session_id("s1")
    assert stored.title == "Acme"
    assert stored.embedding == [1.0]
    assert await sql_repository.get_website_content_by_session_id("s2") == []


@pytest.mark.asyncio
async def test_history_is_in_creation_order(sql_repository):
    await sql_repository.create_chat_session("s1", "key")
    for role, text in [("user", "Hi"), ("assistant", "Hello!"), ("user", "Hours?")]:
        await sql_repository.create_chat_message("s1", role, text)

    history = await sql_repository.get_chat_messages_by_session_id("s1")

    assert [(m.role, m.content) for m in history] == [
        ("user", "Hi"),
        ("assistant", "Hello!"),
        ("user", "Hours?"),
    ]


def test_database_url_resolution(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    assert resolve_database_url({"storage": {"database_url": "sqlite+aiosqlite:///x.db"}}) == (
        "sqlite+aiosqlite:///x.db"
    )

    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///env.db")
    assert resolve_database_url({"storage": {"database_url": "sqlite+aiosqlite:///x.db"}}) == (
        "sqlite+aiosqlite:///env.db"
    )


def test_repository_factory_backends():
    repository, engine = build_repository({"storage": {"backend": "memory"}})
    assert isinstance(repository, InMemoryChatRepository)
    assert engine is None

    with pytest.raises(ValueError):
        build_repository({"storage": {"backend": "mongo"}})
