from business_faq_chat.exception.custom_exception import ProviderError, ProviderErrorKind
from business_faq_chat.logger import GLOBAL_LOGGER as log
from business_faq_chat.prompts.prompt_library import (
    CREDENTIAL_ERROR_MESSAGE,
    EMPTY_RESPONSE_MESSAGE,
    HANDOFF_MARKER,
    HANDOFF_SUFFIX,
    TECHNICAL_DIFFICULTY_MESSAGE,
)
from business_faq_chat.src.document_chat.llm_client import ReplyTag, tag_reply

"""
Each node is an async function that returns a partial state update.
Graph wiring is done in builder.
"""


# Appends the current step into existing steps in the state
def _append_step(state, step):
    steps = state.get("steps", [])
    return steps + [step]


def build_context(relevant) -> str:
    return "\n\n".join(f"Source: {c.source}\nContent: {c.content}" for c in relevant)


async def retrieve_node(state):
    generator = state["generator"]
    session_id = state["session_id"]

    try:
        relevant = await generator.selector.select(session_id, state["input"])
    except Exception as e:
        log.error("Retrieval failed | session_id=%s | error=%s", session_id, str(e))
        return {"failure": "retrieval", "steps": _append_step(state, "retrieve")}

    return {
        "relevant": relevant,
        "context": build_context(relevant),
        "steps": _append_step(state, "retrieve"),
    }


async def generate_node(state):
    generator = state["generator"]

    try:
        raw = await generator.call_model(
            state.get("credential"), state.get("context", ""), state["input"]
        )
    except ProviderError as e:
        failure = "credential" if e.kind == ProviderErrorKind.CREDENTIAL else "provider"
        log.warning("Model call mapped to fallback | failure=%s", failure)
        return {"failure": failure, "steps": _append_step(state, "generate")}

    return {"raw_response": raw, "steps": _append_step(state, "generate")}


async def review_node(state):
    """
    Confidence policy on the raw model output:
    - empty -> apology + handoff offer
    - uncertain and no handoff mentioned -> append handoff sentence
    """
    raw = state.get("raw_response")
    tag = tag_reply(raw)

    if tag == ReplyTag.EMPTY:
        output = EMPTY_RESPONSE_MESSAGE
    elif tag == ReplyTag.UNCERTAIN and HANDOFF_MARKER not in raw:
        output = raw + HANDOFF_SUFFIX
    else:
        output = raw

    log.info("Reply reviewed | tag=%s", tag.value)
    return {"output": output, "steps": _append_step(state, "review")}


async def fallback_node(state):
    failure = state.get("failure")

    if failure == "credential":
        output = CREDENTIAL_ERROR_MESSAGE
    elif failure == "provider":
        output = TECHNICAL_DIFFICULTY_MESSAGE
    else:
        output = EMPTY_RESPONSE_MESSAGE

    return {"output": output, "steps": _append_step(state, "fallback")}


def route_after_step(state) -> str:
    return "fallback" if state.get("failure") else "continue"
