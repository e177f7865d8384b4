"""Single-shot scan sessions over a frame source and a decoder."""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Any, Optional, Protocol, TextIO

logger = logging.getLogger(__name__)


class ScanSessionClosed(RuntimeError):
    """Raised when a finished scan session is read again."""


class FrameSource(Protocol):
    """A capture device such as a camera. ``read`` may block."""

    def open(self) -> None: ...

    def read(self) -> Optional[Any]:
        """Return the next frame, or None once the source is exhausted."""

    def close(self) -> None: ...


class Decoder(Protocol):
    def decode(self, frame: Any) -> Optional[str]:
        """Return the text encoded in ``frame``, or None if nothing was found."""


def normalize_scanned_code(text: str) -> str:
    """Scanned codes are opaque; only surrounding whitespace is dropped."""

    return text.strip()


class ScanSession:
    """Read at most one code from ``source``.

    Usage::

        async with ScanSession(camera, decoder) as scan:
            code = await scan.read()

    ``cancel()`` (or cancelling the task awaiting ``read``) stops the scan,
    and the source is closed exactly once however the scan ends. Blocking
    device calls run in worker threads so the event loop stays responsive.
    """

    def __init__(self, source: FrameSource, decoder: Decoder, *, frame_interval: float = 0.0):
        self.source = source
        self.decoder = decoder
        self.frame_interval = frame_interval
        self._started = False
        self._opened = False
        self._closed = False
        self._cancel_requested = False
        self._cancel_event: asyncio.Event | None = None

    @property
    def closed(self) -> bool:
        return self._closed

    def cancel(self) -> None:
        """Stop the scan. Must be called from the event loop thread."""

        self._cancel_requested = True
        if self._cancel_event is not None:
            self._cancel_event.set()

    async def read(self) -> Optional[str]:
        """Return the first decoded code, or None if cancelled or exhausted."""

        if self._started:
            raise ScanSessionClosed("A scan session yields at most one code.")
        self._started = True
        self._cancel_event = asyncio.Event()

        try:
            if self._cancel_requested:
                return None
            # Opened on the loop thread: there is no await between acquiring
            # the device and entering the try block that releases it.
            self.source.open()
            self._opened = True
            code = await self._scan_frames(self._cancel_event)
            if code is None and self._cancel_requested:
                logger.debug("Scan cancelled")
            return code
        finally:
            self._release()

    async def _scan_frames(self, cancel_event: asyncio.Event) -> Optional[str]:
        while not cancel_event.is_set():
            frame_task = asyncio.ensure_future(asyncio.to_thread(self.source.read))
            cancel_task = asyncio.ensure_future(cancel_event.wait())
            try:
                done, _ = await asyncio.wait(
                    {frame_task, cancel_task},
                    return_when=asyncio.FIRST_COMPLETED,
                )
            finally:
                for task in (frame_task, cancel_task):
                    if not task.done():
                        task.cancel()

            if frame_task not in done:
                return None

            frame = frame_task.result()
            if frame is None:
                logger.debug("Frame source exhausted without a code")
                return None

            text = self.decoder.decode(frame)
            code = normalize_scanned_code(text) if text else ""
            if code:
                return code

            if self.frame_interval:
                await asyncio.sleep(self.frame_interval)
        return None

    def _release(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._opened:
            self.source.close()

    async def __aenter__(self) -> "ScanSession":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.cancel()
        self._release()


class LineSource:
    """Frame source for keyboard-wedge scanners that type one code per line."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream if stream is not None else sys.stdin
        self.is_open = False

    def open(self) -> None:
        self.is_open = True

    def read(self) -> Optional[str]:
        line = self.stream.readline()
        return line if line else None

    def close(self) -> None:
        # The stream belongs to the caller; only stop reading from it.
        self.is_open = False


class TextDecoder:
    """Identity decoder for sources that already deliver text."""

    def decode(self, frame: Any) -> Optional[str]:
        if not isinstance(frame, str):
            return None
        return frame.strip() or None
