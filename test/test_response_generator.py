import pytest
from conftest import FakeClientProvider, RecordingLLM

from business_faq_chat.exception.custom_exception import ProviderError, ProviderErrorKind
from business_faq_chat.graph.orchestrator import ResponseGenerator
from business_faq_chat.prompts.prompt_library import (
    BUSINESS_ASSISTANT_INSTRUCTION,
    CREDENTIAL_ERROR_MESSAGE,
    EMPTY_RESPONSE_MESSAGE,
    HANDOFF_SUFFIX,
    TECHNICAL_DIFFICULTY_MESSAGE,
)
from business_faq_chat.src.document_chat.retrieval import RelevanceSelector
from business_faq_chat.utils.embedding import embed_text


def _generator(repository, llm=None, provider=None):
    provider = provider or FakeClientProvider(llm or RecordingLLM())
    return ResponseGenerator(RelevanceSelector(repository), provider)


async def _session_with_hours_doc(repository):
    await repository.create_chat_session("s1", "key")
    doc = await repository.create_document("s1", "hours.txt", "Our hours are 9 to 5.")
    await repository.update_document_embedding(doc.id, embed_text(doc.content))
    return "s1"


@pytest.mark.asyncio
async def test_credential_error_maps_to_fixed_message(repository):
    llm = RecordingLLM(RuntimeError("400 API key not valid [reason: API_KEY_INVALID]"))
    out = await _generator(repository, llm).generate("s1", "Hi", "bad-key")
    assert out == CREDENTIAL_ERROR_MESSAGE


@pytest.mark.asyncio
async def test_other_provider_errors_map_to_technical_difficulty(repository):
    llm = RecordingLLM(RuntimeError("503 model overloaded"))
    out = await _generator(repository, llm).generate("s1", "Hi", "key")
    assert out == TECHNICAL_DIFFICULTY_MESSAGE


@pytest.mark.asyncio
async def test_missing_credential_maps_to_credential_message(repository):
    provider = FakeClientProvider(
        RecordingLLM(),
        error=ProviderError("Missing API_KEY", ProviderErrorKind.CREDENTIAL),
    )
    out = await _generator(repository, provider=provider).generate("s1", "Hi", "")
    assert out == CREDENTIAL_ERROR_MESSAGE


@pytest.mark.asyncio
async def test_empty_reply_becomes_apology(repository):
    out = await _generator(repository, RecordingLLM("")).generate("s1", "Hi", "key")
    assert out == EMPTY_RESPONSE_MESSAGE


@pytest.mark.asyncio
async def test_uncertain_reply_gets_handoff_sentence(repository):
    reply = "I'm not sure what our warranty covers."
    out = await _generator(repository, RecordingLLM(reply)).generate("s1", "Warranty?", "key")
    assert out == reply + HANDOFF_SUFFIX


@pytest.mark.asyncio
async def test_uncertain_reply_already_offering_handoff_is_unchanged(repository):
    reply = "I'm not sure. Would you like a human agent to help?"
    out = await _generator(repository, RecordingLLM(reply)).generate("s1", "Warranty?", "key")
    assert out == reply


@pytest.mark.asyncio
async def test_confident_reply_is_unchanged(repository):
    out = await _generator(repository, RecordingLLM("We open at 9.")).generate("s1", "Hours?", "key")
    assert out == "We open at 9."


@pytest.mark.asyncio
async def test_context_is_appended_to_system_instruction(repository):
    sid = await _session_with_hours_doc(repository)
    llm = RecordingLLM("We are open from 9 to 5.")

    await _generator(repository, llm).generate(sid, "What are your hours?", "key")

    system = llm.last_system
    assert system.startswith(BUSINESS_ASSISTANT_INSTRUCTION)
    assert system.endswith("Source: Document: hours.txt\nContent: Our hours are 9 to 5.")
    assert llm.calls[-1]["user"] == "What are your hours?"


@pytest.mark.asyncio
async def test_no_context_sends_bare_instruction(repository):
    await repository.create_chat_session("s1", "key")
    llm = RecordingLLM("Hello!")

    await _generator(repository, llm).generate("s1", "Hello", "key")

    assert llm.last_system == BUSINESS_ASSISTANT_INSTRUCTION


@pytest.mark.asyncio
async def test_session_credential_is_passed_to_provider(repository, client_provider):
    await _generator(repository, provider=client_provider).generate("s1", "Hello", "session-key")
    assert client_provider.credentials == ["session-key"]


@pytest.mark.asyncio
async def test_retrieval_failure_becomes_apology(repository, recording_llm):
    class BrokenSelector:
        async def select(self, session_id, query):
            raise ConnectionError("storage unavailable")

    generator = ResponseGenerator(BrokenSelector(), FakeClientProvider(recording_llm))

    assert await generator.generate("s1", "Hi", "key") == EMPTY_RESPONSE_MESSAGE
    assert recording_llm.calls == []
