"""Tests for the timer registry."""

import asyncio
import logging
import time

import pytest

from core.timers import TimerRegistry


def run(coro):
    return asyncio.run(coro)


class TestTimeouts:
    def test_ids_are_sequential_from_one(self):
        async def scenario():
            timers = TimerRegistry()
            ids = [timers.set_timeout(lambda: None, 0) for _ in range(3)]
            await timers.wait_idle()
            return ids

        assert run(scenario()) == [1, 2, 3]

    def test_fires_once_and_not_before_delay(self):
        async def scenario():
            loop = asyncio.get_running_loop()
            timers = TimerRegistry()
            fired: list[float] = []
            start = loop.time()
            timers.set_timeout(lambda: fired.append(loop.time()), 40)
            await timers.wait_idle()
            await asyncio.sleep(0.05)
            return start, fired

        start, fired = run(scenario())
        assert len(fired) == 1
        assert fired[0] - start >= 0.040 - 1e-9

    def test_fires_in_deadline_order(self):
        async def scenario():
            timers = TimerRegistry()
            order: list[str] = []
            timers.set_timeout(order.append, 30, "late")
            timers.set_timeout(order.append, 5, "early")
            await timers.wait_idle()
            return order

        assert run(scenario()) == ["early", "late"]

    def test_negative_delay_counts_as_zero(self):
        async def scenario():
            timers = TimerRegistry()
            fired: list[int] = []
            timers.set_timeout(fired.append, -100, 1)
            await timers.wait_idle()
            return fired

        assert run(scenario()) == [1]

    def test_clear_prevents_firing(self):
        async def scenario():
            timers = TimerRegistry()
            fired: list[int] = []
            timer_id = timers.set_timeout(fired.append, 10, 1)
            timers.clear(timer_id)
            assert timers.pending == 0
            await asyncio.sleep(0.03)
            return fired

        assert run(scenario()) == []

    def test_clear_unknown_id_is_noop(self):
        async def scenario():
            timers = TimerRegistry()
            timers.clear(42)
            timers.clear(None)
            return timers.pending

        assert run(scenario()) == 0

    def test_pending_counts_only_unfired_timeouts(self):
        async def scenario():
            timers = TimerRegistry()
            timers.set_timeout(lambda: None, 5)
            timers.set_timeout(lambda: None, 5)
            interval_id = timers.set_interval(lambda: None, 5)
            before = timers.pending
            await timers.wait_idle()
            after = timers.pending
            timers.clear(interval_id)
            return before, after

        assert run(scenario()) == (2, 0)

    def test_wait_idle_includes_timers_scheduled_by_timers(self):
        async def scenario():
            timers = TimerRegistry()
            order: list[str] = []

            def first():
                order.append("first")
                timers.set_timeout(order.append, 5, "second")

            timers.set_timeout(first, 5)
            await timers.wait_idle()
            return order

        assert run(scenario()) == ["first", "second"]

    def test_async_callback_is_awaited(self):
        async def scenario():
            timers = TimerRegistry()
            done: list[str] = []

            async def callback():
                await asyncio.sleep(0)
                done.append("async")

            timers.set_timeout(callback, 0)
            await timers.wait_idle()
            return done

        assert run(scenario()) == ["async"]

    def test_failing_callback_is_logged_and_others_still_fire(self, caplog):
        async def scenario():
            timers = TimerRegistry()
            fired: list[int] = []

            def boom():
                raise ValueError("boom")

            timers.set_timeout(boom, 0)
            timers.set_timeout(fired.append, 5, 2)
            await timers.wait_idle()
            return fired

        with caplog.at_level(logging.ERROR, logger="core.timers"):
            assert run(scenario()) == [2]
        assert "Timer callback raised: id=1" in caplog.text

    def test_non_callable_is_rejected(self):
        async def scenario():
            TimerRegistry().set_timeout("not callable", 0)

        with pytest.raises(TypeError):
            run(scenario())


class TestIntervals:
    def test_interval_repeats_until_cleared(self):
        async def scenario():
            timers = TimerRegistry()
            ticks: list[int] = []
            timer_id = timers.set_interval(lambda: ticks.append(1), 5)
            await asyncio.sleep(0.06)
            timers.clear(timer_id)
            count = len(ticks)
            await asyncio.sleep(0.03)
            return count, len(ticks)

        count, later = run(scenario())
        assert count >= 2
        assert later == count

    def test_interval_can_clear_itself(self):
        async def scenario():
            timers = TimerRegistry()
            ticks: list[int] = []
            ids: list[int] = []

            def tick():
                ticks.append(len(ticks) + 1)
                if len(ticks) == 3:
                    timers.clear(ids[0])

            ids.append(timers.set_interval(tick, 2))
            await asyncio.sleep(0.08)
            return ticks

        assert run(scenario()) == [1, 2, 3]

    def test_slow_interval_clearing_itself_stops_at_the_clearing_tick(self):
        async def scenario():
            timers = TimerRegistry()
            ticks: list[int] = []
            ids: list[int] = []

            def tick():
                time.sleep(0.005)
                ticks.append(len(ticks) + 1)
                if len(ticks) == 3:
                    timers.clear(ids[0])

            ids.append(timers.set_interval(tick, 2))
            await asyncio.sleep(0.1)
            return ticks

        assert run(asyncio.wait_for(scenario(), 2)) == [1, 2, 3]

    def test_slow_interval_does_not_starve_other_timers(self):
        async def scenario():
            timers = TimerRegistry()
            fired: list[str] = []
            interval_id = timers.set_interval(lambda: time.sleep(0.003), 1)

            def stop():
                fired.append("timeout")
                timers.clear(interval_id)

            timers.set_timeout(stop, 20)
            await timers.wait_idle()
            await timers.shutdown()
            return fired

        assert run(asyncio.wait_for(scenario(), 2)) == ["timeout"]

    def test_missed_ticks_are_skipped(self):
        async def scenario():
            loop = asyncio.get_running_loop()
            timers = TimerRegistry()
            stamps: list[float] = []

            def tick():
                stamps.append(loop.time())
                if len(stamps) == 1:
                    time.sleep(0.03)

            timer_id = timers.set_interval(tick, 10)
            await asyncio.sleep(0.06)
            timers.clear(timer_id)
            return stamps

        stamps = run(scenario())
        assert len(stamps) >= 2
        # after the 30 ms stall, ticks resume 10 ms apart instead of catching up
        gaps = [b - a for a, b in zip(stamps[1:], stamps[2:])]
        assert all(gap >= 0.005 for gap in gaps)

    def test_shutdown_cancels_intervals(self):
        async def scenario():
            timers = TimerRegistry()
            ticks: list[int] = []
            timers.set_interval(lambda: ticks.append(1), 2)
            await timers.shutdown()
            count = len(ticks)
            await asyncio.sleep(0.02)
            return count, len(ticks)

        count, later = run(scenario())
        assert count == later
