from .tale_generator import (
    DEFAULT_TITLE,
    TaleGenerator,
    build_instruction,
    parse_generated_tale,
)

__all__ = [
    "DEFAULT_TITLE",
    "TaleGenerator",
    "build_instruction",
    "parse_generated_tale",
]
