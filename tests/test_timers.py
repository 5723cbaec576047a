"""Session and rest clocks: manual ticks, pause freezing, cancellation and cleanup."""

import asyncio

import pytest

from forge.services.timers import RestTimer, SessionTimer, _TickingTimer, format_clock


@pytest.mark.asyncio
async def test_session_timer_counts_ticks():
    async with SessionTimer(tick_interval=60) as timer:
        timer.start()
        timer.tick()
        timer.tick()
        assert timer.elapsed == 120
        assert timer.formatted == "2:00"


@pytest.mark.asyncio
async def test_session_timer_freezes_while_paused():
    async with SessionTimer(tick_interval=60) as timer:
        timer.start(elapsed=30)
        timer.tick()
        timer.pause()
        timer.tick()
        timer.tick()
        assert timer.elapsed == 90
        timer.resume()
        timer.tick()
        assert timer.elapsed == 150


@pytest.mark.asyncio
async def test_session_timer_runs_on_its_own_and_stops():
    timer = SessionTimer(tick_interval=0.01)
    timer.start()
    await asyncio.sleep(0.1)
    assert timer.elapsed > 0
    timer.stop()
    frozen = timer.elapsed
    await asyncio.sleep(0.05)
    assert timer.elapsed == frozen
    assert not timer.has_task
    timer.stop()
    await timer.close()


@pytest.mark.asyncio
async def test_session_timer_ignores_ticks_when_not_running():
    timer = SessionTimer(tick_interval=1)
    timer.tick()
    timer.pause()
    assert timer.elapsed == 0
    assert timer.is_paused is False


@pytest.mark.asyncio
async def test_rest_timer_counts_down_to_zero_and_stops():
    async with RestTimer(tick_interval=60) as rest:
        rest.start(180)
        assert rest.is_active
        rest.tick()
        assert rest.remaining == 120
        assert rest.progress == pytest.approx(1 / 3)
        rest.tick()
        rest.tick()
        assert rest.remaining == 0
        assert rest.is_active is False
        assert not rest.has_task
        rest.tick()
        assert rest.remaining == 0


@pytest.mark.asyncio
async def test_rest_timer_uses_default_duration():
    async with RestTimer(default_duration=120, tick_interval=60) as rest:
        rest.start()
        assert rest.remaining == 120
        assert rest.formatted == "2:00"
        assert rest.presets == (30, 60, 90, 120, 180)


@pytest.mark.asyncio
async def test_rest_timer_cancel_is_immediate_and_idempotent():
    async with RestTimer(tick_interval=60) as rest:
        rest.start(90)
        rest.cancel()
        assert rest.remaining == 0
        assert rest.is_active is False
        assert not rest.has_task
        rest.cancel()
        assert rest.remaining == 0


@pytest.mark.asyncio
async def test_rest_timer_restart_replaces_countdown():
    async with RestTimer(tick_interval=60) as rest:
        rest.start(90)
        rest.tick()
        rest.start(60)
        assert rest.remaining == 60
        assert rest.duration == 60
        assert rest.is_active


@pytest.mark.asyncio
async def test_rest_timer_zero_duration_does_not_start():
    rest = RestTimer(tick_interval=60)
    rest.start(0)
    assert rest.is_active is False
    assert not rest.has_task


@pytest.mark.asyncio
async def test_rest_timer_finishes_in_background():
    rest = RestTimer(tick_interval=0.01)
    rest.start(0.03)
    await asyncio.sleep(0.2)
    assert rest.is_active is False
    assert rest.remaining == 0
    await rest.close()


@pytest.mark.asyncio
async def test_leaving_context_cancels_tasks():
    async with SessionTimer(tick_interval=60) as session, RestTimer(tick_interval=60) as rest:
        session.start()
        rest.start()
        assert session.has_task and rest.has_task
    assert not session.has_task
    assert not rest.has_task


def test_invalid_tick_interval():
    with pytest.raises(ValueError):
        SessionTimer(tick_interval=0)


def test_base_timer_needs_a_tick():
    with pytest.raises(TypeError):
        _TickingTimer()

    class Silent(_TickingTimer):
        pass

    with pytest.raises(TypeError):
        Silent()


def test_format_clock():
    assert format_clock(0) == "0:00"
    assert format_clock(65) == "1:05"
    assert format_clock(3725) == "1:02:05"
    assert format_clock(-5) == "0:00"
