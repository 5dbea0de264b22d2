"""Streaming coverage chat.

Plain free-text replies, so no schema and no invoker: a failed stream is
reported to the client as-is.
"""

from typing import Any, AsyncIterator, Callable

from src import config
from src.llm import get_chat_model, message_text, to_langchain_messages
from src.prompts.insurance import CHAT_SYSTEM
from src.schemas.api import ChatRequest
from src.utils.logging import log, get_logger

MODULE = "chat"
logger = get_logger()


def build_system_prompt(body: ChatRequest) -> str:
    policy_json = body.policy.model_dump_json(exclude_none=True) if body.policy else "(no policy uploaded)"
    extra = f"System prompt: {body.system}" if body.system else ""
    return CHAT_SYSTEM.format(
        network=body.context.network_label,
        deductible_spent=body.context.deductible_spent,
        out_of_pocket_spent=body.context.out_of_pocket_spent,
        policy_json=policy_json,
        extra=extra,
    )


async def stream_chat_reply(
    body: ChatRequest,
    client_factory: Callable[..., Any] = get_chat_model,
) -> AsyncIterator[str]:
    """Yield reply text chunks as the chat model produces them."""
    messages = to_langchain_messages(
        [m.model_dump() for m in body.messages],
        system=build_system_prompt(body),
    )
    llm = client_factory(config.CHAT_MODEL, temperature=0.5, streaming=True)

    log.info(logger, MODULE, "chat_start", "Streaming chat reply",
             messages=len(body.messages), model=config.CHAT_MODEL)
    chunks = 0
    try:
        async for chunk in llm.astream(messages):
            text = message_text(chunk.content)
            if text:
                chunks += 1
                yield text
    except Exception as e:
        log.error(logger, MODULE, "chat_failed", "Chat stream failed",
                  error=str(e), error_type=type(e).__name__, chunks=chunks)
        raise
    log.info(logger, MODULE, "chat_done", "Chat reply streamed", chunks=chunks)
