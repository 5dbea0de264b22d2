"""Resilient structured generation.

Every schema-constrained model call in the service goes through here:

  1. INVOKE: call the primary model at the next temperature in the list
  2. PARSE: extract JSON from the raw reply
  3. VALIDATE: check it against the pydantic schema
  4. RETRY: on any failure, back off (base_delay × attempt) and try the
     next temperature
  5. FALLBACK: once the primary's attempts are used up, one last call to
     the fallback model at a conservative temperature

Only the terminal GenerationExhaustedError ever reaches the caller; single
attempt failures are logged and reported through the optional on_retry
callback. Attempts are strictly sequential.

  result = await invoke_structured(
      CategoriesOutput,
      model=config.PRIMARY_MODEL,
      fallback_model=config.FALLBACK_MODEL,
      system=CATEGORIES_SYSTEM.format(...),
      messages=[{"role": "user", "content": "..."}],
  )
"""

import asyncio
import json
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import (
    Any,
    Awaitable,
    Callable,
    Generic,
    Mapping,
    Optional,
    Sequence,
    Type,
    TypeVar,
)

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from pydantic import BaseModel

from src import config
from src.llm.client import get_chat_model
from src.llm.parser import extract_json
from src.utils.logging import log, get_logger

MODULE = "llm.invoker"
logger = get_logger()

T = TypeVar("T", bound=BaseModel)
R = TypeVar("R")

RetryObserver = Callable[[int, float, Exception], None]
Sleeper = Callable[[float], Awaitable[Any]]


class GenerationExhaustedError(Exception):
    """Raised when every attempt, including the fallback, has failed."""

    def __init__(
        self,
        message: str,
        *,
        attempts: int,
        fallback_used: bool,
        last_error: Optional[BaseException] = None,
        context: str = "",
    ):
        super().__init__(message)
        self.attempts = attempts
        self.fallback_used = fallback_used
        self.last_error = last_error
        self.context = context

    @property
    def total_calls(self) -> int:
        """Underlying model calls made, fallback included."""
        return self.attempts + (1 if self.fallback_used else 0)


@dataclass(frozen=True)
class GenerationRequest(Generic[T]):
    """One structured-generation job.

    Either prompt or messages must be given. max_attempts defaults to the
    number of temperatures; attempts beyond the list are never made.
    """

    schema: Type[T]
    model: str
    prompt: Optional[str] = None
    messages: Sequence[Mapping[str, str]] = ()
    system: Optional[str] = None
    fallback_model: Optional[str] = None
    temperatures: Sequence[float] = config.DEFAULT_TEMPERATURES
    max_attempts: Optional[int] = None
    delay: float = config.DEFAULT_RETRY_DELAY
    context: str = "generation"

    def __post_init__(self):
        if not (self.prompt and self.prompt.strip()) and not self.messages:
            raise ValueError("GenerationRequest needs a non-empty prompt or messages")
        if not self.temperatures:
            raise ValueError("temperatures must not be empty")
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.delay < 0:
            raise ValueError("delay must be >= 0")
        # Freeze caller-owned sequences
        object.__setattr__(self, "temperatures", tuple(self.temperatures))
        object.__setattr__(self, "messages", tuple(dict(m) for m in self.messages))

    @property
    def attempt_limit(self) -> int:
        if self.max_attempts is None:
            return len(self.temperatures)
        return min(self.max_attempts, len(self.temperatures))


class StructuredGenerator(ABC):
    """Capability: produce a schema-validated object from one model call."""

    @abstractmethod
    async def generate(
        self,
        request: GenerationRequest[T],
        *,
        model: str,
        temperature: float,
    ) -> T:
        """Make exactly one call. Raise on any failure, including invalid output."""


def to_langchain_messages(
    messages: Sequence[Mapping[str, str]] = (),
    system: Optional[str] = None,
    prompt: Optional[str] = None,
) -> list[BaseMessage]:
    """Build a LangChain message list: system, then messages, then prompt."""
    out: list[BaseMessage] = []
    if system:
        out.append(SystemMessage(content=system))
    for message in messages:
        role = message.get("role", "user")
        content = message.get("content", "")
        if role == "system":
            out.append(SystemMessage(content=content))
        elif role == "assistant":
            out.append(AIMessage(content=content))
        else:
            out.append(HumanMessage(content=content))
    if prompt:
        out.append(HumanMessage(content=prompt))
    return out


def schema_instruction(schema: Type[BaseModel]) -> str:
    """Tell the model which JSON shape to produce."""
    return (
        "Respond with a single JSON object that validates against this JSON Schema. "
        "No markdown, no commentary.\n"
        + json.dumps(schema.model_json_schema(), separators=(",", ":"))
    )


def message_text(content: Any) -> str:
    """Flatten LangChain message content (str or list of parts) to text."""
    if isinstance(content, str):
        return content
    parts = []
    for part in content or []:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


class ChatModelGenerator(StructuredGenerator):
    """StructuredGenerator backed by LangChain chat models."""

    def __init__(self, client_factory: Callable[..., Any] = get_chat_model):
        self.client_factory = client_factory

    async def generate(
        self,
        request: GenerationRequest[T],
        *,
        model: str,
        temperature: float,
    ) -> T:
        llm = self.client_factory(model, temperature=temperature)
        messages = to_langchain_messages(request.messages, request.system, request.prompt)
        messages.append(SystemMessage(content=schema_instruction(request.schema)))

        _t0 = time.monotonic()
        response = await llm.ainvoke(messages)
        latency_ms = int((time.monotonic() - _t0) * 1000)

        raw = message_text(response.content).strip()
        log.debug(logger, MODULE, "llm_response",
                  f"Model call complete for {request.context}",
                  model=model, temperature=temperature,
                  latency_ms=latency_ms, raw_length=len(raw))

        parsed = extract_json(raw)
        return request.schema.model_validate(parsed)


async def _backoff(seconds: float) -> None:
    await asyncio.sleep(seconds)


async def with_retry(
    fn: Callable[[float, Optional[str]], Awaitable[R]],
    *,
    temperatures: Sequence[float] = config.DEFAULT_TEMPERATURES,
    max_attempts: Optional[int] = None,
    delay: float = config.DEFAULT_RETRY_DELAY,
    fallback_model: Optional[str] = None,
    fallback_temperature: float = config.FALLBACK_TEMPERATURE,
    context: str = "generation",
    on_retry: Optional[RetryObserver] = None,
    sleep: Optional[Sleeper] = None,
) -> R:
    """Run fn(temperature, model) until it succeeds.

    fn is called with model=None for primary attempts and with the fallback
    model reference for the single fallback attempt.

    Raises:
        ValueError: Empty temperatures, max_attempts < 1 or negative delay
        GenerationExhaustedError: All attempts and the fallback failed
    """
    if not temperatures:
        raise ValueError("temperatures must not be empty")
    if max_attempts is not None and max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")
    if delay < 0:
        raise ValueError("delay must be >= 0")

    limit = len(temperatures) if max_attempts is None else min(max_attempts, len(temperatures))
    last_error: Optional[Exception] = None
    attempt = 0

    for temperature in temperatures[:limit]:
        attempt += 1
        try:
            return await fn(temperature, None)
        except Exception as e:
            last_error = e
            log.warning(logger, MODULE, "attempt_failed",
                        f"{context} attempt {attempt}/{limit} failed",
                        attempt=attempt, temperature=temperature,
                        error=str(e), error_type=type(e).__name__)

        if attempt == limit:
            break

        if on_retry is not None:
            on_retry(attempt, temperature, last_error)
        backoff = delay * attempt
        log.info(logger, MODULE, "attempt_retry",
                 f"Retrying {context} with different parameters",
                 attempt=attempt, next_temperature=temperatures[attempt],
                 backoff_s=backoff)
        await (sleep or _backoff)(backoff)

    fallback_used = False
    if fallback_model:
        fallback_used = True
        log.info(logger, MODULE, "model_fallback",
                 f"Primary attempts exhausted for {context}, trying fallback model",
                 attempts=attempt, fallback_model=fallback_model,
                 temperature=fallback_temperature)
        try:
            return await fn(fallback_temperature, fallback_model)
        except Exception as e:
            last_error = e
            log.warning(logger, MODULE, "fallback_failed",
                        f"Fallback model failed for {context}",
                        fallback_model=fallback_model,
                        error=str(e), error_type=type(e).__name__)

    reason = str(last_error) if last_error is not None and str(last_error) else "Unknown error"
    message = (
        f"{context} failed after {attempt} attempts"
        f"{' and fallback model' if fallback_used else ''}: {reason}"
    )
    log.error(logger, MODULE, "invoke_failed", message,
              error=reason, error_type=type(last_error).__name__,
              attempts=attempt, fallback_used=fallback_used)
    raise GenerationExhaustedError(
        message,
        attempts=attempt,
        fallback_used=fallback_used,
        last_error=last_error,
        context=context,
    )


def _ensure_schema(result: Any, schema: Type[T]) -> T:
    if isinstance(result, schema):
        return result
    return schema.model_validate(result)


async def invoke(
    request: GenerationRequest[T],
    generator: Optional[StructuredGenerator] = None,
    *,
    on_retry: Optional[RetryObserver] = None,
    sleep: Optional[Sleeper] = None,
) -> T:
    """Obtain a schema-conforming result for a request.

    Args:
        request: What to generate and how hard to try
        generator: Backend; defaults to a ChatModelGenerator
        on_retry: Called as on_retry(attempt, temperature, cause) before
            each retry
        sleep: Awaitable used for backoff; defaults to asyncio.sleep

    Raises:
        GenerationExhaustedError: If all attempts and the fallback fail
    """
    generator = generator or ChatModelGenerator()

    async def attempt(temperature: float, model: Optional[str]) -> T:
        result = await generator.generate(
            request,
            model=model or request.model,
            temperature=temperature,
        )
        # A generator that skips validation still cannot leak bad output
        return _ensure_schema(result, request.schema)

    result = await with_retry(
        attempt,
        temperatures=request.temperatures,
        max_attempts=request.attempt_limit,
        delay=request.delay,
        fallback_model=request.fallback_model,
        context=request.context,
        on_retry=on_retry,
        sleep=sleep,
    )
    log.debug(logger, MODULE, "invoke_done",
              f"Structured generation succeeded for {request.context}",
              schema=request.schema.__name__)
    return result


async def invoke_structured(
    schema: Type[T],
    *,
    model: str,
    prompt: Optional[str] = None,
    messages: Sequence[Mapping[str, str]] = (),
    system: Optional[str] = None,
    fallback_model: Optional[str] = None,
    temperatures: Sequence[float] = config.DEFAULT_TEMPERATURES,
    max_attempts: Optional[int] = None,
    delay: float = config.DEFAULT_RETRY_DELAY,
    context: str = "generation",
    generator: Optional[StructuredGenerator] = None,
    on_retry: Optional[RetryObserver] = None,
) -> T:
    """Keyword-argument shortcut for invoke(GenerationRequest(...))."""
    request = GenerationRequest(
        schema=schema,
        model=model,
        prompt=prompt,
        messages=messages,
        system=system,
        fallback_model=fallback_model,
        temperatures=temperatures,
        max_attempts=max_attempts,
        delay=delay,
        context=context,
    )
    return await invoke(request, generator, on_retry=on_retry)


def create_fallback(schema: Type[T], fallback_data: dict, reason: str) -> T:
    """Validate a default payload to return once generation is exhausted."""
    log.warning(logger, MODULE, "using_fallback",
                f"Using default payload for {schema.__name__}",
                reason=reason)
    return schema.model_validate(fallback_data)
