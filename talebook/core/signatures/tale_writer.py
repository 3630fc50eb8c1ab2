"""
DSPy Signature for writing a complete children's tale from an instruction.

The instruction is composed from the user's request (age range, topic and
optional details) by TaleGenerator; the signature itself carries the
author persona.
"""

import dspy


class TaleWriterSignature(dspy.Signature):
    """
    You are a skilled children's author who creates age-appropriate, engaging,
    and imaginative stories for children. Your stories should have a clear
    beginning, middle, and end, with a positive message or lesson.
    """

    instruction: str = dspy.InputField(
        desc="What to write: target ages, topic, and any requested characters, setting or details"
    )

    tale: str = dspy.OutputField(
        desc="""The complete story. First line is the title, then the story in clear paragraphs.
Format:
# [Title]

[Paragraph 1]

[Paragraph 2]
..."""
    )
