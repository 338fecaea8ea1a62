import pytest

from growth import Scheduler


def test_tasks_run_in_due_order():
    scheduler = Scheduler()
    calls = []
    scheduler.call_later(30, calls.append, 'c')
    scheduler.call_later(10, calls.append, 'a')
    scheduler.call_later(20, calls.append, 'b')

    assert scheduler.advance(25) == 2
    assert calls == ['a', 'b']
    assert scheduler.now == 25

    scheduler.advance(5)
    assert calls == ['a', 'b', 'c']


def test_same_due_time_keeps_insertion_order():
    scheduler = Scheduler()
    calls = []
    for name in 'xyz':
        scheduler.call_later(5, calls.append, name)

    scheduler.advance(5)

    assert calls == ['x', 'y', 'z']


def test_tasks_scheduled_while_running_also_run():
    scheduler = Scheduler()
    calls = []

    def chain(n):
        calls.append((n, scheduler.now))
        if n < 3:
            scheduler.call_later(0 if n == 0 else 10, chain, n + 1)

    scheduler.call_later(0, chain, 0)
    scheduler.advance(15)

    assert calls == [(0, 0.0), (1, 0.0), (2, 10.0)]
    assert scheduler.pending == 1


def test_call_every_repeats_until_cancelled():
    scheduler = Scheduler()
    ticks = []
    task = scheduler.call_every(100, lambda: ticks.append(scheduler.now), tag='fade')

    scheduler.advance(350)
    assert ticks == [100.0, 200.0, 300.0]
    assert scheduler.pending_for('fade') == 1

    assert scheduler.cancel(task)
    scheduler.advance(1000)
    assert ticks == [100.0, 200.0, 300.0]
    assert scheduler.pending_for('fade') == 0


def test_periodic_task_can_cancel_itself():
    scheduler = Scheduler()
    ticks = []

    def tick():
        ticks.append(scheduler.now)
        if len(ticks) == 2:
            scheduler.cancel(task)

    task = scheduler.call_every(50, tick)
    scheduler.advance(500)

    assert ticks == [50.0, 100.0]
    assert scheduler.pending == 0


def test_cancel_returns_false_for_finished_tasks():
    scheduler = Scheduler()
    task = scheduler.call_later(1, lambda: None)
    scheduler.advance(1)

    assert not task.active
    assert not scheduler.cancel(task)
    assert not scheduler.cancel(None)
    assert scheduler.pending == 0


def test_pending_counts_per_tag():
    scheduler = Scheduler()
    for _ in range(3):
        scheduler.call_later(10, lambda: None, tag='branch')
    scheduler.call_every(10, lambda: None, tag='spawn')

    assert scheduler.pending == 4
    assert scheduler.pending_for('branch') == 3
    assert scheduler.pending_for('missing') == 0

    assert scheduler.cancel_tag('branch') == 3
    assert scheduler.pending_for('branch') == 0
    assert scheduler.pending == 1
    assert len(scheduler.tasks()) == 1


def test_cancel_all_empties_queue():
    scheduler = Scheduler()
    scheduler.call_later(10, lambda: None)
    scheduler.call_every(10, lambda: None)

    assert scheduler.cancel_all() == 2
    assert scheduler.pending == 0
    assert scheduler.next_due is None


def test_next_due_skips_cancelled():
    scheduler = Scheduler()
    first = scheduler.call_later(5, lambda: None)
    scheduler.call_later(8, lambda: None)
    scheduler.cancel(first)

    assert scheduler.next_due == 8


def test_invalid_timings_rejected():
    scheduler = Scheduler(start_ms=100)
    with pytest.raises(ValueError):
        scheduler.call_later(-1, lambda: None)
    with pytest.raises(ValueError):
        scheduler.call_every(0, lambda: None)
    with pytest.raises(ValueError):
        scheduler.run_until(50)
