"""Tests for the character-by-character streaming renderer"""
import asyncio

import pytest

from ghostwriter.document import InMemoryDocument
from ghostwriter.exceptions import ConcurrentStreamError
from ghostwriter.streaming import SENTINEL, StreamingRenderer


def test_emits_each_character_then_sentinel():
    async def scenario():
        document = InMemoryDocument()
        renderer = StreamingRenderer(document)
        completed = []

        assert list(renderer.units("abc")) == ["a", "b", "c", SENTINEL]

        handle = renderer.emit("abc", 0, on_complete=lambda: completed.append(True))
        assert renderer.in_progress
        assert await handle.wait() is True

        assert document.get_plain_text() == "abc" + SENTINEL
        assert completed == [True]
        assert not renderer.in_progress

    asyncio.run(scenario())


def test_empty_text_emits_only_sentinel():
    async def scenario():
        document = InMemoryDocument()
        await StreamingRenderer(document).emit("", 0).wait()
        assert document.get_plain_text() == SENTINEL

    asyncio.run(scenario())


def test_overlapping_emit_is_rejected():
    async def scenario():
        renderer = StreamingRenderer(InMemoryDocument())
        handle = renderer.emit("slow text", 10)

        with pytest.raises(ConcurrentStreamError):
            renderer.emit("second", 0)

        await handle.wait()
        await renderer.emit("third", 0).wait()

    asyncio.run(scenario())


def test_cancel_keeps_emitted_characters():
    async def scenario():
        document = InMemoryDocument()
        renderer = StreamingRenderer(document)
        completed = []

        handle = renderer.emit("hello", 1000, on_complete=lambda: completed.append(True))
        await asyncio.sleep(0.01)
        handle.cancel()

        assert await handle.wait() is False
        assert handle.cancelled
        assert document.get_plain_text() == "h"
        assert completed == []
        assert not renderer.in_progress

    asyncio.run(scenario())


def test_cancel_before_first_character():
    async def scenario():
        document = InMemoryDocument()
        renderer = StreamingRenderer(document)

        handle = renderer.emit("hello", 0)
        handle.cancel()

        assert await handle.wait() is False
        assert document.get_plain_text() == ""
        assert not renderer.in_progress

    asyncio.run(scenario())


def test_renderer_cancel_waits_for_pass_to_unwind():
    async def scenario():
        document = InMemoryDocument()
        renderer = StreamingRenderer(document)

        await renderer.cancel()

        handle = renderer.emit("hello", 1000)
        await asyncio.sleep(0.01)
        await renderer.cancel()

        assert handle.done
        assert not renderer.in_progress
        await renderer.emit("next", 0).wait()
        assert document.get_plain_text() == "hnext" + SENTINEL

    asyncio.run(scenario())
