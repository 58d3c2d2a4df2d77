"""Tests for the console front end's input handling"""
import asyncio

from ghostwriter.cli import LineReader


def test_line_reader_delivers_lines_then_end_of_input():
    lines = iter(["Once upon a time", "/quit"])

    def read_line():
        try:
            return next(lines)
        except StopIteration:
            raise EOFError

    async def scenario():
        reader = LineReader(read_line, asyncio.get_running_loop())
        assert reader.thread.daemon
        reader.start()
        return [await asyncio.wait_for(reader.get(), 2) for _ in range(3)]

    assert asyncio.run(scenario()) == ["Once upon a time", "/quit", None]


def test_line_reader_treats_interrupt_as_end_of_input():
    def read_line():
        raise KeyboardInterrupt

    async def scenario():
        reader = LineReader(read_line, asyncio.get_running_loop())
        reader.start()
        return await asyncio.wait_for(reader.get(), 2)

    assert asyncio.run(scenario()) is None
