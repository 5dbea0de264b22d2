"""Streaming chat endpoint.

The first chunk is pulled before the response starts, so a model that
fails up front (bad key, unknown provider) is reported as a 502 instead of
an empty 200 body. Failures after that point cut the stream short.
"""

from typing import Any, AsyncIterator, Callable

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from src.api.deps import get_chat_client_factory
from src.schemas.api import ChatRequest
from src.services.chat import stream_chat_reply

router = APIRouter()


async def _replay(first: str, rest: AsyncIterator[str]) -> AsyncIterator[str]:
    if first:
        yield first
    async for chunk in rest:
        yield chunk


@router.post("")
async def chat(
    body: ChatRequest,
    client_factory: Callable[..., Any] = Depends(get_chat_client_factory),
):
    stream = stream_chat_reply(body, client_factory)
    try:
        first = await stream.__anext__()
    except StopAsyncIteration:
        first = ""
    except Exception as e:
        raise HTTPException(status_code=502, detail=f"Chat model failed: {e}")

    return StreamingResponse(
        _replay(first, stream),
        media_type="text/plain; charset=utf-8",
    )
