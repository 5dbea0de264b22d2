"""FastAPI dependencies. Tests override these with app.dependency_overrides."""

from typing import Any, Callable

from src.documents import partition_pdf
from src.llm import ChatModelGenerator, StructuredGenerator, get_chat_model
from src.services.sbc_parser import Partitioner


def get_generator() -> StructuredGenerator:
    return ChatModelGenerator()


def get_partitioner() -> Partitioner:
    return partition_pdf


def get_chat_client_factory() -> Callable[..., Any]:
    return get_chat_model
