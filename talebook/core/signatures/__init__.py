from .tale_writer import TaleWriterSignature

__all__ = [
    "TaleWriterSignature",
]
