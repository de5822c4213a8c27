from __future__ import annotations

import pytest

from billing_client.application.services.notification_center import NotificationCenter
from billing_client.domain import InvariantViolation, NotificationKind
from billing_client.infrastructure.scheduling import AsyncioScheduler


@pytest.fixture()
def center(scheduler, clock, notification_config) -> NotificationCenter:
    return NotificationCenter(scheduler=scheduler, clock=clock, config=notification_config)


def _ids(center: NotificationCenter) -> list[int]:
    return [n.id for n in center.list()]


def test_success_toast_expires_after_default_duration(center, scheduler) -> None:
    toast_id = center.post("Saved", "success")

    entries = center.list()
    assert len(entries) == 1
    assert entries[0].id == toast_id
    assert entries[0].kind is NotificationKind.SUCCESS
    assert entries[0].duration_ms == 3000

    scheduler.advance(2999)
    assert _ids(center) == [toast_id]

    scheduler.advance(1)
    assert center.list() == ()


def test_kind_helpers_use_their_default_durations(center) -> None:
    center.success("a")
    center.error("b")
    center.info("c")
    center.warning("d")

    durations = {n.kind.value: n.duration_ms for n in center.list()}
    assert durations == {"success": 3000, "error": 5000, "info": 3000, "warning": 4000}


def test_explicit_duration_overrides_default(center, scheduler) -> None:
    toast_id = center.error("Slow", 1000)

    scheduler.advance(1000)

    assert center.get(toast_id) is None


def test_zero_duration_persists_until_dismissed(center, scheduler) -> None:
    toast_id = center.warning("Stay", 0)

    scheduler.advance(60_000)
    assert _ids(center) == [toast_id]
    assert scheduler.pending == []

    assert center.dismiss(toast_id) is True
    assert center.list() == ()


def test_post_then_dismiss_never_resurrects(center, scheduler) -> None:
    toast_id = center.post("Deleting failed", "error")

    center.dismiss(toast_id)
    assert center.list() == ()

    scheduler.advance(5000)
    assert center.list() == ()
    assert scheduler.pending == []


def test_dismiss_is_idempotent(center) -> None:
    toast_id = center.info("x")

    assert center.dismiss(toast_id) is True
    assert center.dismiss(toast_id) is False
    assert center.dismiss(12345) is False
    assert center.list() == ()


def test_insertion_order_is_stable(center) -> None:
    a = center.info("A")
    b = center.info("B")
    c = center.info("C")
    assert _ids(center) == [a, b, c]

    center.dismiss(b)
    assert _ids(center) == [a, c]

    d = center.info("D")
    assert _ids(center) == [a, c, d]


def test_ids_are_unique_for_same_instant_posts(center) -> None:
    ids = [center.info(str(i)) for i in range(50)]

    assert len(set(ids)) == 50


def test_removing_one_keeps_other_timers(center, scheduler) -> None:
    first = center.info("first", 1000)
    second = center.info("second", 2000)

    center.dismiss(first)
    scheduler.advance(1999)
    assert _ids(center) == [second]

    scheduler.advance(1)
    assert center.list() == ()


def test_expired_entry_hidden_even_if_timer_is_late(center, clock) -> None:
    center.success("late")

    clock.ms += 3000

    assert center.list() == ()


def test_remaining_ratio_tracks_elapsed_time(center, clock) -> None:
    toast_id = center.info("tick", 1000)

    assert center.remaining_ratio(toast_id) == pytest.approx(1.0)
    clock.ms += 250
    assert center.remaining_ratio(toast_id) == pytest.approx(0.75)
    clock.ms += 500
    assert center.remaining_ratio(toast_id) == pytest.approx(0.25)
    clock.ms += 250
    assert center.remaining_ratio(toast_id) is None


def test_close_removes_after_exit_delay(center, scheduler) -> None:
    toast_id = center.info("bye", 0)

    assert center.close(toast_id) is True
    entry = center.get(toast_id)
    assert entry is not None and entry.exiting is True
    assert center.close(toast_id) is False

    scheduler.advance(299)
    assert _ids(center) == [toast_id]
    scheduler.advance(1)
    assert center.list() == ()


def test_close_racing_expiry_resolves_to_gone(center, scheduler) -> None:
    toast_id = center.success("race", 3000)
    scheduler.advance(2900)

    center.close(toast_id)
    scheduler.advance(500)

    assert center.list() == ()
    assert scheduler.pending == []


def test_subscribers_receive_snapshots(center, scheduler) -> None:
    seen: list[list[str]] = []
    unsubscribe = center.subscribe(lambda items: seen.append([n.message for n in items]))

    toast_id = center.info("one", 1000)
    center.info("two", 0)
    scheduler.advance(1000)
    unsubscribe()
    center.dismiss(toast_id)

    assert seen == [["one"], ["one", "two"], ["two"]]


def test_failing_subscriber_does_not_break_post(center) -> None:
    def _boom(_items) -> None:
        raise RuntimeError("render failed")

    center.subscribe(_boom)

    toast_id = center.info("still here")

    assert _ids(center) == [toast_id]


def test_rejects_negative_duration_and_unknown_kind(center) -> None:
    with pytest.raises(InvariantViolation):
        center.info("bad", -1)
    with pytest.raises(InvariantViolation):
        center.post("bad", "fatal")
    assert center.list() == ()


def test_clear_cancels_all_timers(center, scheduler) -> None:
    center.info("a")
    center.error("b")

    center.clear()

    assert center.list() == ()
    assert scheduler.pending == []


@pytest.mark.asyncio
async def test_countdown_reaches_zero_and_removes(scheduler, clock, notification_config) -> None:
    async def _sleep(seconds: float) -> None:
        clock.ms += round(seconds * 1000)

    center = NotificationCenter(
        scheduler=scheduler, clock=clock, config=notification_config, sleep=_sleep
    )
    toast_id = center.info("progress", 200)

    ratios = [ratio async for ratio in center.countdown(toast_id)]

    assert ratios[0] == pytest.approx(1.0)
    assert ratios[-1] == 0.0
    assert len(ratios) == 5
    assert ratios == sorted(ratios, reverse=True)
    assert center.list() == ()


@pytest.mark.asyncio
async def test_countdown_stops_when_dismissed(scheduler, clock, notification_config) -> None:
    center: NotificationCenter

    async def _sleep(seconds: float) -> None:
        clock.ms += round(seconds * 1000)
        center.dismiss(toast_id)

    center = NotificationCenter(
        scheduler=scheduler, clock=clock, config=notification_config, sleep=_sleep
    )
    toast_id = center.info("progress", 1000)

    ratios = [ratio async for ratio in center.countdown(toast_id)]

    assert ratios == [pytest.approx(1.0)]


@pytest.mark.asyncio
async def test_countdown_ends_at_zero_when_timer_fires_first(
    scheduler, clock, notification_config
) -> None:
    async def _sleep(seconds: float) -> None:
        scheduler.advance(round(seconds * 1000))

    center = NotificationCenter(
        scheduler=scheduler, clock=clock, config=notification_config, sleep=_sleep
    )
    toast_id = center.info("progress", 120)

    ratios = [ratio async for ratio in center.countdown(toast_id)]

    assert ratios[0] == pytest.approx(1.0)
    assert ratios[-1] == 0.0
    assert len(ratios) == 4
    assert center.list() == ()


@pytest.mark.asyncio
async def test_countdown_on_event_loop_reaches_zero(notification_config) -> None:
    scheduler = AsyncioScheduler()
    center = NotificationCenter(
        scheduler=scheduler, clock=scheduler.time, config=notification_config
    )
    toast_id = center.info("progress", 120)

    ratios = [ratio async for ratio in center.countdown(toast_id)]

    assert ratios[-1] == 0.0
    assert ratios == sorted(ratios, reverse=True)
    assert center.list() == ()


class _BrokenScheduler:
    def call_later(self, delay, callback):
        raise RuntimeError("no running event loop")


def test_post_keeps_nothing_when_timer_cannot_be_scheduled(clock, notification_config) -> None:
    center = NotificationCenter(
        scheduler=_BrokenScheduler(), clock=clock, config=notification_config
    )
    seen: list[int] = []
    center.subscribe(lambda items: seen.append(len(items)))

    with pytest.raises(RuntimeError):
        center.info("hi")

    assert center.list() == ()
    assert seen == []
    assert center.warning("sticky", 0) > 0
