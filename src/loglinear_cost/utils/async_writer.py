"""Asynchronous buffered output stream.

Bytes are collected in an in-memory buffer; full buffers are handed to a
bounded queue that a background thread drains into the underlying sink.
Producers block when the queue is full, and ``close`` waits until every
queued chunk has been written before closing the sink.
"""

import logging
import queue
import threading
from typing import BinaryIO, Optional

logger = logging.getLogger(__name__)

_SENTINEL = object()


class AsyncWriterError(OSError):
    """Raised in the producer when the background writer has failed."""


class AsyncBufferedOutputStream:
    """Buffered binary writer that performs sink I/O on a background thread.

    Parameters
    ----------
    sink : BinaryIO
        Writable binary file object. Owned by the stream and closed by
        :meth:`close`.
    buffer_size : int, default=8192
        Number of bytes collected before a chunk is queued
    queue_capacity : int, default=5
        Maximum number of chunks waiting for the writer thread

    Examples
    --------
    >>> with AsyncBufferedOutputStream(open("out.bin", "wb"), 512 * 1024) as out:
    ...     out.write(b"\\x01" * 32)
    """

    def __init__(self, sink: BinaryIO, buffer_size: int = 8192, queue_capacity: int = 5):
        if buffer_size < 1:
            raise ValueError(f"buffer_size must be positive, got {buffer_size}")
        if queue_capacity < 1:
            raise ValueError(f"queue_capacity must be positive, got {queue_capacity}")

        self._sink = sink
        self._buffer_size = buffer_size
        self._buffer = bytearray()
        self._queue: "queue.Queue" = queue.Queue(maxsize=queue_capacity)
        self._error: Optional[BaseException] = None
        self._closed = False
        self._thread = threading.Thread(target=self._drain,
                                        name="async-buffered-writer",
                                        daemon=True)
        self._thread.start()

    @property
    def closed(self) -> bool:
        return self._closed

    def _drain(self) -> None:
        while True:
            chunk = self._queue.get()
            try:
                if chunk is _SENTINEL:
                    return
                if self._error is None:
                    self._sink.write(chunk)
            except Exception as exc:  # pylint: disable=broad-except
                # Keep consuming so producers blocked on put() are released
                logger.error("Background write failed: %s", exc)
                self._error = exc
            finally:
                self._queue.task_done()

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("I/O operation on closed stream")
        if self._error is not None:
            raise AsyncWriterError(f"Background writer failed: {self._error}") from self._error

    def _enqueue_buffer(self) -> None:
        if self._buffer:
            self._queue.put(bytes(self._buffer))
            self._buffer = bytearray()

    def write(self, data: bytes) -> int:
        """Append ``data``; blocks while the chunk queue is full.

        Returns
        -------
        int
            Number of bytes accepted, always ``len(data)``
        """
        self._check_open()
        self._buffer.extend(data)
        while len(self._buffer) >= self._buffer_size:
            chunk = bytes(self._buffer[:self._buffer_size])
            del self._buffer[:self._buffer_size]
            self._queue.put(chunk)
        return len(data)

    def flush(self) -> None:
        """Write out the partial buffer and wait until the queue is empty."""
        self._check_open()
        self._enqueue_buffer()
        self._queue.join()
        self._check_open()
        self._sink.flush()

    def close(self) -> None:
        """Drain all pending chunks, stop the writer thread and close the sink.

        Calling ``close`` more than once has no effect.
        """
        if self._closed:
            return
        try:
            self._enqueue_buffer()
            self._queue.put(_SENTINEL)
            self._thread.join()
        finally:
            self._closed = True
            self._sink.close()

        if self._error is not None:
            raise AsyncWriterError(f"Background writer failed: {self._error}") from self._error

    def __enter__(self) -> "AsyncBufferedOutputStream":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
