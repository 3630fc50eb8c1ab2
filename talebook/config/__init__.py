"""
Configuration module for tale generation.

Re-exports LLM configuration.
"""

from .llm import LLM_TIMEOUT, get_inference_lm, get_inference_model_name

__all__ = [
    "LLM_TIMEOUT",
    "get_inference_lm",
    "get_inference_model_name",
]
