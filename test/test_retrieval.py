import pytest

from business_faq_chat.src.document_chat.retrieval import RelevanceSelector


async def _session(repository, session_id="s1"):
    await repository.create_chat_session(session_id, "key")
    return session_id


@pytest.mark.asyncio
async def test_only_entries_above_threshold_are_returned(repository, unit_vector):
    sid = await _session(repository)
    weak = await repository.create_document(sid, "weak.txt", "weak content")
    strong = await repository.create_document(sid, "strong.txt", "strong content")
    await repository.update_document_embedding(weak.id, unit_vector(0.05))
    await repository.update_document_embedding(strong.id, unit_vector(0.4))

    selected = await RelevanceSelector(repository).select(sid, "a")

    assert [c.source for c in selected] == ["Document: strong.txt"]
    assert selected[0].content == "strong content"
    assert selected[0].similarity == pytest.approx(0.4)


@pytest.mark.asyncio
async def test_at_most_five_entries_documents_first(repository, unit_vector):
    sid = await _session(repository)
    for i in range(4):
        doc = await repository.create_document(sid, f"doc{i}.txt", f"doc {i}")
        await repository.update_document_embedding(doc.id, unit_vector(0.9))
    for i in range(2):
        page = await repository.create_website_content(
            sid, f"https://acme.test/{i}", None, f"page {i}"
        )
        await repository.update_website_content_embedding(page.id, unit_vector(0.9))

    selected = await RelevanceSelector(repository).select(sid, "a")

    assert len(selected) == 5
    assert [c.source for c in selected] == [
        "Document: doc0.txt",
        "Document: doc1.txt",
        "Document: doc2.txt",
        "Document: doc3.txt",
        "Website: https://acme.test/0",
    ]


@pytest.mark.asyncio
async def test_content_without_embedding_is_not_searchable(repository):
    sid = await _session(repository)
    await repository.create_document(sid, "pending.txt", "a a a")

    assert await RelevanceSelector(repository).select(sid, "a") == []


@pytest.mark.asyncio
async def test_other_sessions_are_not_searched(repository, unit_vector):
    await _session(repository, "mine")
    other = await _session(repository, "theirs")
    doc = await repository.create_document(other, "secret.txt", "secret")
    await repository.update_document_embedding(doc.id, unit_vector(1.0))

    assert await RelevanceSelector(repository).select("mine", "a") == []


@pytest.mark.asyncio
async def test_threshold_and_top_k_come_from_config(repository, unit_vector):
    sid = await _session(repository)
    for i in range(3):
        doc = await repository.create_document(sid, f"d{i}.txt", "x")
        await repository.update_document_embedding(doc.id, unit_vector(0.3))

    strict = RelevanceSelector(repository, {"similarity_threshold": 0.5})
    narrow = RelevanceSelector(repository, {"top_k": 2})

    assert await strict.select(sid, "a") == []
    assert len(await narrow.select(sid, "a")) == 2


@pytest.mark.asyncio
async def test_vectors_from_another_embedder_version_are_skipped(repository, unit_vector):
    sid = await _session(repository)
    stale = await repository.create_document(sid, "stale.txt", "old vectors")
    fresh = await repository.create_document(sid, "fresh.txt", "new vectors")
    await repository.update_document_embedding(stale.id, unit_vector(0.9), "letterfreq-v0")
    await repository.update_document_embedding(fresh.id, unit_vector(0.9))

    selected = await RelevanceSelector(repository).select(sid, "a")

    assert [c.source for c in selected] == ["Document: fresh.txt"]
