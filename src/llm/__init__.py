"""LLM invocation package.

  from src.llm import invoke_structured, GenerationExhaustedError

  result = await invoke_structured(
      ServicesPage,
      model=config.EXTRACTION_MODEL,
      fallback_model=config.FALLBACK_MODEL,
      system=EXTRACTION_SYSTEM,
      prompt=SERVICES_PAGE_USER.format(page_text=text, service_types=types),
  )

Architecture:
  client.py   → model reference parsing, ChatOpenAI construction
  parser.py   → JSON extraction from raw model output
  invoker.py  → temperature-varied retry with one fallback-model attempt
"""

from src.llm.client import ModelConfigError, ModelRef, get_chat_model, parse_model_ref
from src.llm.invoker import (
    ChatModelGenerator,
    GenerationExhaustedError,
    GenerationRequest,
    StructuredGenerator,
    create_fallback,
    invoke,
    invoke_structured,
    message_text,
    to_langchain_messages,
    with_retry,
)
from src.llm.parser import JSONExtractionError, extract_json

__all__ = [
    # Client
    "ModelConfigError",
    "ModelRef",
    "get_chat_model",
    "parse_model_ref",
    # Invoker
    "ChatModelGenerator",
    "GenerationExhaustedError",
    "GenerationRequest",
    "StructuredGenerator",
    "create_fallback",
    "invoke",
    "invoke_structured",
    "message_text",
    "to_langchain_messages",
    "with_retry",
    # Parser
    "JSONExtractionError",
    "extract_json",
]
