"""Runtime configuration.

All settings come from environment variables. Model references use the
"provider:model" form, e.g. "anthropic:claude-sonnet-4-20250514" or
"groq:meta-llama/llama-4-scout-17b-16e-instruct".

  PRIMARY_MODEL      → category and situation suggestions
  EXTRACTION_MODEL   → SBC page structuring
  ANALYSIS_MODEL     → cost scenarios
  SITUATION_MODEL    → single-situation cost analysis
  FALLBACK_MODEL     → used once, after a primary model's attempts run out
  CHAT_MODEL         → streaming chat replies and price checks
"""

import os

PRIMARY_MODEL = os.getenv("PRIMARY_MODEL", "groq:meta-llama/llama-4-scout-17b-16e-instruct")
EXTRACTION_MODEL = os.getenv("EXTRACTION_MODEL", "anthropic:claude-sonnet-4-20250514")
ANALYSIS_MODEL = os.getenv("ANALYSIS_MODEL", "anthropic:claude-sonnet-4-20250514")
SITUATION_MODEL = os.getenv("SITUATION_MODEL", "openai:gpt-4o")
FALLBACK_MODEL = os.getenv("FALLBACK_MODEL", "groq:meta-llama/llama-4-scout-17b-16e-instruct")
CHAT_MODEL = os.getenv("CHAT_MODEL", "groq:compound-beta")

# Provider endpoints. Every provider is reached through its
# OpenAI-compatible chat completions API.
PROVIDERS = {
    "openai": {
        "base_url": os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1"),
        "api_key_env": "OPENAI_API_KEY",
    },
    "anthropic": {
        "base_url": os.getenv("ANTHROPIC_BASE_URL", "https://api.anthropic.com/v1/"),
        "api_key_env": "ANTHROPIC_API_KEY",
    },
    "groq": {
        "base_url": os.getenv("GROQ_BASE_URL", "https://api.groq.com/openai/v1"),
        "api_key_env": "GROQ_API_KEY",
    },
}

LLM_MAX_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "4096"))
LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "60"))

# Retry defaults, overridable per call
DEFAULT_TEMPERATURES = (0.5, 0.7, 0.9, 0.3)
DEFAULT_RETRY_DELAY = float(os.getenv("LLM_RETRY_DELAY", "1.0"))
FALLBACK_TEMPERATURE = 0.5

UNSTRUCTURED_API_URL = os.getenv(
    "UNSTRUCTURED_API_URL", "https://api.unstructuredapp.io/general/v0/general"
)
UNSTRUCTURED_API_KEY = os.getenv("UNSTRUCTURED_API_KEY", "")
UNSTRUCTURED_TIMEOUT_SECONDS = float(os.getenv("UNSTRUCTURED_TIMEOUT_SECONDS", "120"))

MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(20 * 1024 * 1024)))

SERVICE_NAME = "sbc-copilot"
VERSION = "0.1.0"
