"""Tests for single-shot scan sessions."""

from __future__ import annotations

import asyncio
import io
import threading

import pytest

from scanner import LineSource, ScanSession, ScanSessionClosed, TextDecoder


class FakeCamera:
    """Frame source that blocks once its frames run out, like a live camera."""

    def __init__(self, frames):
        self.frames = list(frames)
        self.open_calls = 0
        self.close_calls = 0
        self._released = threading.Event()

    def open(self) -> None:
        self.open_calls += 1

    def read(self):
        if self.frames:
            return self.frames.pop(0)
        self._released.wait(timeout=5)
        return None

    def close(self) -> None:
        self.close_calls += 1
        self._released.set()


class ListDecoder:
    def decode(self, frame):
        return frame.get("code") if isinstance(frame, dict) else None


def test_scan_returns_first_decoded_code_and_closes_camera():
    camera = FakeCamera([{}, {"code": ""}, {"code": " P-0001 \n"}, {"code": "P-0002"}])

    async def run():
        async with ScanSession(camera, ListDecoder()) as scan:
            return await scan.read()

    assert asyncio.run(run()) == "P-0001"
    assert camera.open_calls == 1
    assert camera.close_calls == 1
    # Frames after the first hit are never consumed.
    assert camera.frames == [{"code": "P-0002"}]


def test_scan_yields_at_most_one_value():
    camera = FakeCamera([{"code": "P-0001"}, {"code": "P-0002"}])
    scan = ScanSession(camera, ListDecoder())

    async def run():
        first = await scan.read()
        with pytest.raises(ScanSessionClosed):
            await scan.read()
        return first

    assert asyncio.run(run()) == "P-0001"
    assert camera.close_calls == 1


def test_cancel_stops_a_waiting_scan_and_releases_camera():
    camera = FakeCamera([])
    scan = ScanSession(camera, ListDecoder())

    async def run():
        reader = asyncio.create_task(scan.read())
        await asyncio.sleep(0.05)
        scan.cancel()
        return await asyncio.wait_for(reader, timeout=2)

    assert asyncio.run(run()) is None
    assert scan.closed is True
    assert camera.close_calls == 1


def test_cancelling_the_task_releases_camera():
    camera = FakeCamera([])
    scan = ScanSession(camera, ListDecoder())

    async def run():
        reader = asyncio.create_task(scan.read())
        await asyncio.sleep(0.05)
        reader.cancel()
        with pytest.raises(asyncio.CancelledError):
            await reader

    asyncio.run(run())
    assert camera.close_calls == 1


def test_cancel_before_read_never_opens_camera():
    camera = FakeCamera([{"code": "P-0001"}])
    scan = ScanSession(camera, ListDecoder())
    scan.cancel()

    assert asyncio.run(scan.read()) is None
    assert camera.open_calls == 0
    assert camera.close_calls == 0


def test_leaving_context_closes_camera_once():
    camera = FakeCamera([{"code": "P-0001"}])

    async def run():
        async with ScanSession(camera, ListDecoder()) as scan:
            await scan.read()
        await scan.__aexit__(None, None, None)

    asyncio.run(run())
    assert camera.close_calls == 1


def test_line_source_reads_keyboard_wedge_codes():
    stream = io.StringIO("\n   \nP-0042\nP-0043\n")

    async def run():
        async with ScanSession(LineSource(stream), TextDecoder()) as scan:
            return await scan.read()

    assert asyncio.run(run()) == "P-0042"


def test_line_source_exhausted_returns_none():
    source = LineSource(io.StringIO(""))

    assert asyncio.run(ScanSession(source, TextDecoder()).read()) is None
    assert source.is_open is False


def test_cancel_during_decoding_stops_before_next_frame():
    camera = FakeCamera([{}, {}, {"code": "P-0001"}])
    holder = {}

    class CancellingDecoder:
        def decode(self, frame):
            holder["scan"].cancel()
            return None

    scan = ScanSession(camera, CancellingDecoder())
    holder["scan"] = scan

    assert asyncio.run(scan.read()) is None
    assert camera.frames == [{}, {"code": "P-0001"}]
    assert camera.close_calls == 1
