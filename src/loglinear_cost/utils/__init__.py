"""I/O utilities."""

from .async_writer import AsyncBufferedOutputStream, AsyncWriterError

__all__ = [
    'AsyncBufferedOutputStream',
    'AsyncWriterError'
]
