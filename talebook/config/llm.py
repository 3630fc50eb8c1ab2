"""
LLM configuration for tale generation.

A single inference LM is used for writing tales. The provider is picked
from whichever API key is present in the environment, and can be pinned
with TALE_LLM_MODEL (any LiteLLM model string, e.g. "openai/gpt-4o").

Generation calls are not retried: a failure is reported to the caller.
"""

import os

import dspy
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Timeout for LLM calls (seconds)
LLM_TIMEOUT = 120

# Sampling settings for tale writing
MAX_TOKENS = 4000
TEMPERATURE = 0.7

# (env var, default model) in priority order
DEFAULT_MODELS = (
    ("ANTHROPIC_API_KEY", "anthropic/claude-sonnet-4-20250514"),
    ("OPENAI_API_KEY", "openai/gpt-4o"),
    ("GOOGLE_API_KEY", "gemini/gemini-2.5-flash"),
)


def _resolve_model() -> str:
    """Return the LiteLLM model string for the configured provider."""
    override = os.getenv("TALE_LLM_MODEL")
    if override:
        return override
    for env_var, model in DEFAULT_MODELS:
        if os.getenv(env_var):
            return model
    raise ValueError(
        "No API key found. Set ANTHROPIC_API_KEY, OPENAI_API_KEY, or GOOGLE_API_KEY in .env"
    )


def get_inference_lm() -> dspy.LM:
    """
    Get the inference LM for tale generation.

    Priority order:
    1. TALE_LLM_MODEL (explicit override, credentials read by LiteLLM)
    2. Claude (ANTHROPIC_API_KEY)
    3. GPT-4o (OPENAI_API_KEY)
    4. Gemini (GOOGLE_API_KEY)

    Includes 120s timeout per call.
    """
    return dspy.LM(
        _resolve_model(),
        max_tokens=MAX_TOKENS,
        temperature=TEMPERATURE,
        timeout=LLM_TIMEOUT,
    )


def get_inference_model_name() -> str:
    """Get the name of the inference model that will be used."""
    try:
        model = _resolve_model()
    except ValueError:
        return "unknown"
    return model.split("/", 1)[-1]
