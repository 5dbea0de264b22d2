"""LLM client configuration.

Model references are "provider:model" strings. Each provider is reached
through its OpenAI-compatible /chat/completions endpoint, so one LangChain
client class (ChatOpenAI) covers all of them:

  get_chat_model("anthropic:claude-sonnet-4-20250514", temperature=0.5)
  get_chat_model("groq:meta-llama/llama-4-scout-17b-16e-instruct")

A new client is built per call and carries its own temperature.
"""

import os
from dataclasses import dataclass

from langchain_openai import ChatOpenAI

from src import config
from src.utils.logging import log, get_logger

MODULE = "llm"
logger = get_logger()


class ModelConfigError(ValueError):
    """Raised when a model reference cannot be resolved to a provider."""


@dataclass(frozen=True)
class ModelRef:
    provider: str
    name: str

    def __str__(self) -> str:
        return f"{self.provider}:{self.name}"


def parse_model_ref(ref: str) -> ModelRef:
    """Split "provider:model" into a ModelRef.

    Only the first colon separates the provider; model names may contain
    slashes or further colons.
    """
    provider, sep, name = ref.strip().partition(":")
    if not sep or not provider or not name:
        raise ModelConfigError(
            f"Model reference '{ref}' must look like 'provider:model'"
        )
    provider = provider.lower()
    if provider not in config.PROVIDERS:
        raise ModelConfigError(
            f"Unknown provider '{provider}' (known: {', '.join(sorted(config.PROVIDERS))})"
        )
    return ModelRef(provider=provider, name=name)


def get_chat_model(
    model: str,
    temperature: float = 0.5,
    *,
    streaming: bool = False,
) -> ChatOpenAI:
    """Build a chat client for a model reference.

    Args:
        model: "provider:model" reference
        temperature: Sampling temperature for this client
        streaming: Enable token streaming (chat endpoint)
    """
    ref = parse_model_ref(model)
    provider = config.PROVIDERS[ref.provider]
    api_key = os.getenv(provider["api_key_env"], "")
    if not api_key:
        log.warning(logger, MODULE, "api_key_missing",
                    "No API key configured for provider",
                    provider=ref.provider, env_var=provider["api_key_env"])

    client = ChatOpenAI(
        base_url=provider["base_url"],
        api_key=api_key or "not-set",
        model=ref.name,
        temperature=temperature,
        max_tokens=config.LLM_MAX_TOKENS,
        timeout=config.LLM_TIMEOUT_SECONDS,
        max_retries=0,  # retries are handled by the invoker
        streaming=streaming,
    )
    log.debug(logger, MODULE, "client_init", "Chat client created",
              provider=ref.provider, model=ref.name, temperature=temperature)
    return client
