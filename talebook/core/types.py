"""
Domain types for tale generation.

Plain dataclasses shared between the generator module and the API
service layer, kept free of framework imports.
"""

from dataclasses import dataclass
from typing import Optional

# Longest title a tale may be saved with
TITLE_MAX_LENGTH = 100


@dataclass
class TaleRequest:
    """Parameters describing the tale a user wants written."""

    age_range: str
    topic: str
    main_character: Optional[str] = None
    setting: Optional[str] = None
    additional_details: Optional[str] = None


@dataclass
class GeneratedTale:
    """A generated tale split into title and body."""

    title: str
    content: str

    @property
    def word_count(self) -> int:
        return len(self.content.split())
