"""Tests for the countdown timer"""
import asyncio

from ghostwriter.timer import CountdownTimer


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


async def settle():
    await asyncio.sleep(0.02)


def test_expires_once():
    async def scenario():
        clock = FakeClock()
        fired = []
        timer = CountdownTimer(3, on_expire=lambda: fired.append(True), tick_interval=0.001, clock=clock)

        timer.start()
        timer.start()  # already running, ignored
        clock.now = 1.2
        await settle()
        assert timer.remaining == 2
        assert timer.is_active()

        clock.now = 3.5
        await settle()
        assert fired == [True]
        assert timer.remaining == 0
        assert not timer.is_active()

        await settle()
        assert fired == [True]

    asyncio.run(scenario())


def test_stop_suppresses_expiry():
    async def scenario():
        clock = FakeClock()
        fired = []
        timer = CountdownTimer(2, on_expire=lambda: fired.append(True), tick_interval=0.001, clock=clock)

        timer.start()
        timer.stop()
        clock.now = 10
        await settle()
        assert fired == []
        assert timer.remaining == 2

    asyncio.run(scenario())


def test_restart_continues_from_remaining():
    async def scenario():
        clock = FakeClock()
        timer = CountdownTimer(5, tick_interval=0.001, clock=clock)

        timer.start()
        clock.now = 2
        await settle()
        timer.stop()
        assert timer.remaining == 3

        clock.now = 100
        timer.start()
        clock.now = 101
        await settle()
        assert timer.remaining == 2
        timer.stop()

    asyncio.run(scenario())


def test_reset_restores_duration():
    async def scenario():
        clock = FakeClock()
        ticks = []
        timer = CountdownTimer(4, on_tick=ticks.append, tick_interval=0.001, clock=clock)

        timer.start()
        clock.now = 3
        await settle()
        timer.reset()
        assert not timer.is_active()
        assert timer.remaining == 4
        assert ticks[-1].remaining_seconds == 4
        assert not ticks[-1].running

    asyncio.run(scenario())


def test_set_duration_and_format():
    timer = CountdownTimer(60)
    assert timer.format_remaining() == "01:00"
    timer.set_duration(125)
    assert timer.format_remaining() == "02:05"
    assert timer.state.duration_seconds == 125
