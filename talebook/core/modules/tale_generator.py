"""
DSPy Module for generating a children's tale from a structured request.

The request fields are composed into a plain-language instruction, the LM
writes the tale, and the reply is split into a title (the leading heading
or first line) and a body (everything after it).
"""

import re
from typing import Optional

import dspy

from ..signatures.tale_writer import TaleWriterSignature
from ..types import TITLE_MAX_LENGTH, GeneratedTale, TaleRequest

DEFAULT_TITLE = "Untitled Tale"

# Markdown heading on the first non-blank line: "# The Brave Fox"
_HEADING_RE = re.compile(r"^\s*#+[ \t]*(.*?)[ \t]*(?:\n|$)")
# Fallback: first non-blank line
_FIRST_LINE_RE = re.compile(r"^\s*(.*?)[ \t]*(?:\n|$)")
_TITLE_LABEL_RE = re.compile(r"^title\s*:\s*", re.IGNORECASE)


def build_instruction(request: TaleRequest) -> str:
    """Compose the request parameters into a natural-language instruction."""
    instruction = f"Create a children's story for ages {request.age_range} about {request.topic}."

    if request.main_character:
        instruction += f" The main character should be named {request.main_character}."

    if request.setting:
        instruction += f" The story should be set in {request.setting}."

    if request.additional_details:
        instruction += f" Additional details: {request.additional_details}"

    instruction += (
        " The story should be appropriate for the age range, engaging, and educational"
        " if possible. Include a creative title at the beginning."
        " Format the story with clear paragraphs."
    )
    return instruction


def _clean_title(raw: str) -> str:
    """Strip markdown emphasis, quotes and a 'Title:' label from a title line."""
    title = raw.strip().strip("*_").strip()
    title = _TITLE_LABEL_RE.sub("", title)
    title = title.strip().strip("\"'").strip()
    return title[:TITLE_MAX_LENGTH].rstrip()


def parse_generated_tale(text: str) -> GeneratedTale:
    """
    Split raw LM output into title and body.

    A leading markdown heading wins; otherwise the first non-blank line is
    the title. If nothing remains after the title, the whole text is kept
    as the body under the default title.
    """
    match = _HEADING_RE.match(text) or _FIRST_LINE_RE.match(text)
    title = _clean_title(match.group(1)) if match else ""
    content = text[match.end():].strip() if match else text.strip()

    if not content:
        return GeneratedTale(title=DEFAULT_TITLE, content=text.strip())

    return GeneratedTale(title=title or DEFAULT_TITLE, content=content)


class TaleGenerator(dspy.Module):
    """
    Generate a complete children's tale in a single LM call.

    Args:
        lm: Optional explicit LM. When omitted the globally configured
            DSPy LM is used.
    """

    def __init__(self, lm: Optional[dspy.LM] = None):
        super().__init__()
        self.generate = dspy.Predict(TaleWriterSignature)
        self._lm = lm

    def forward(self, request: TaleRequest) -> GeneratedTale:
        """
        Write a tale for the given request.

        Raises:
            ValueError: if the LM returned no text
        """
        instruction = build_instruction(request)

        if self._lm is not None:
            with dspy.context(lm=self._lm):
                result = self.generate(instruction=instruction)
        else:
            result = self.generate(instruction=instruction)

        raw = (result.tale or "").strip()
        if not raw:
            raise ValueError("LM returned an empty tale")

        return parse_generated_tale(raw)
