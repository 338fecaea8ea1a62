import math

import pytest

from config import Color
from growth import BranchState, BRANCH_TAG
from rendering import Composer

WHITE = Color(1.0, 1.0, 1.0, 1.0)


def branch(x=100.0, y=200.0, dx=0.0, dy=-3.0, width=10.0, growth_rate=0.0, lifetime=0):
    return BranchState(x, y, dx, dy, width, growth_rate, lifetime, WHITE)


# Draw order for a step that forks: dx, dy, clutter band, lifetime jitter,
# fork chance, then child delay, child dx, child dy, child rate jitter
FORKING_DRAWS = [0.5, 0.5, 0.5, 0.5, 0.9, 0.5, 0.5, 0.5, 0.5]


def test_first_step_draws_segment_and_advances(make_engine, surface, scheduler):
    engine = make_engine(draws=[0.5])

    following = engine.step(branch())

    assert surface.lines == [((100.0, 200.0), (100.0, 197.0), 10.0, WHITE)]
    assert following.lifetime == 1
    assert following.position == (100.0, 197.0)
    assert following.dx == pytest.approx(math.sin(0.5) * 0.3)
    assert following.dy == pytest.approx(-3.0 + math.cos(0.5) * 0.3)
    assert following.width == 10.0
    assert scheduler.pending_for(BRANCH_TAG) == 1


def test_spawn_root_schedules_first_step(make_engine, surface, scheduler):
    engine = make_engine(draws=[0.5])

    engine.spawn_root(100, 200, 0, -3, 10, 0, "#fff")

    assert surface.lines == []
    assert engine.live_branches == 1
    first = scheduler.tasks(BRANCH_TAG)[0].args[0]
    assert first.lifetime == 0
    assert first.color == WHITE

    scheduler.run_pending()

    assert surface.lines[0] == ((100.0, 200.0), (100.0, 197.0), 10.0, WHITE)
    assert engine.stats.roots == 1


def test_branch_runs_until_width_decays(make_engine, surface, scheduler):
    engine = make_engine(draws=[0.5])
    engine.spawn_root(100, 200, 0, -3, 10, 0, "#fff")

    scheduler.run_pending()

    widths = [line[2] for line in surface.lines]
    assert all(a > b for a, b in zip(widths, widths[1:]))
    assert widths[-1] >= 1 - 0.03 - 1e-9
    assert 301 <= len(widths) <= 302
    assert engine.stats.terminated == 1
    assert engine.live_branches == 0


def test_thin_branch_terminates_after_first_draw(make_engine, surface, scheduler):
    engine = make_engine(draws=[0.5])

    assert engine.step(branch(width=0.99)) is None
    assert len(surface.lines) == 1
    assert surface.lines[0][2] == pytest.approx(0.99)
    assert scheduler.pending == 0


def test_lifetime_counts_steps(make_engine):
    engine = make_engine(draws=[0.3, 0.7], newBranchChance=1.0)

    state = branch(y=100.0)
    for _ in range(25):
        state = engine.step(state)

    assert state.lifetime == 25
    assert engine.stats.steps == 25


def test_effective_width_decreases_with_lifetime():
    state = branch(width=5.0)
    widths = [state.evolve(lifetime=n).effective_width(0.03) for n in range(50)]
    assert all(a > b for a, b in zip(widths, widths[1:]))


def test_step_is_deterministic(make_engine, surface):
    draws = [0.1, 0.9, 0.4, 0.2, 0.95, 0.3, 0.6, 0.7, 0.8]
    state = branch(y=590.0, width=5.5, growth_rate=15.0, lifetime=40)

    first = make_engine(draws=draws).step(state)
    second = make_engine(draws=draws).step(state)

    assert first == second
    assert surface.lines[0] == surface.lines[1]


def test_fork_schedules_child_and_shrinks_parent(make_engine, scheduler):
    engine = make_engine(draws=FORKING_DRAWS)
    parent = branch(y=100.0, dy=-1.0, growth_rate=20.0, lifetime=200)

    following = engine.step(parent)

    assert engine.stats.children == 1
    assert following.width == pytest.approx(8.0)
    assert following.lifetime == 201
    assert following.position == (100.0, 99.0)

    continuation, birth = scheduler.tasks(BRANCH_TAG)
    assert continuation.due == pytest.approx(20.0)
    assert birth.due == pytest.approx(30.0)

    child, marker_radius = birth.args
    assert child.lifetime == 0
    assert child.position == (100.0, 99.0)
    assert child.width == pytest.approx((10.0 - 200 * 0.03) * 0.8)
    assert child.growth_rate == pytest.approx(70.0)
    assert child.dx == pytest.approx(2 * math.sin(0.5 + 200))
    assert child.dy == pytest.approx(2 * math.cos(0.5 + 200))
    assert child.color == parent.color
    assert marker_radius == pytest.approx(10.0)


def test_no_fork_when_chance_not_met(make_engine, scheduler):
    engine = make_engine(draws=[0.5, 0.5, 0.5, 0.5, 0.7])

    following = engine.step(branch(y=100.0, growth_rate=20.0, lifetime=200))

    assert engine.stats.children == 0
    assert following.width == 10.0
    assert scheduler.pending_for(BRANCH_TAG) == 1


def test_marker_drawn_when_child_is_born(make_engine, surface, scheduler):
    engine = make_engine(draws=FORKING_DRAWS, indicateNewBranch=True)
    engine.composer = Composer(surface, engine.config)

    engine.step(branch(y=100.0, dy=-1.0, growth_rate=20.0, lifetime=200))
    assert surface.circles == []

    scheduler.run_until(30.0)

    center, radius, color, line_width = surface.circles[0]
    assert center == (100.0, 99.0)
    assert radius == pytest.approx(10.0)
    assert color == engine.config.marker_color
    assert line_width == 1.0


def test_no_marker_by_default(make_engine, surface, scheduler):
    engine = make_engine(draws=FORKING_DRAWS)
    engine.composer = Composer(surface, engine.config)

    engine.step(branch(y=100.0, dy=-1.0, growth_rate=20.0, lifetime=200))
    scheduler.run_until(30.0)

    assert surface.circles == []


def test_bottom_edge_shrinks_thin_branches(make_engine):
    engine = make_engine(draws=[0.5], newBranchChance=1.0)

    following = engine.step(branch(y=590.0, dy=0.0, width=5.0))

    assert following.width == pytest.approx(4.0)


def test_bottom_edge_leaves_wide_branches(make_engine):
    engine = make_engine(draws=[0.5], newBranchChance=1.0)

    following = engine.step(branch(y=590.0, dy=0.0, width=8.0))

    assert following.width == 8.0


def test_fast_mode_halves_step_delay(make_engine, scheduler):
    engine = make_engine(draws=[0.5], fastMode=True)

    engine.step(branch(y=100.0, growth_rate=40.0))
    engine.step(branch(y=100.0, growth_rate=40.0, lifetime=3))

    assert [t.due for t in scheduler.tasks(BRANCH_TAG)] == [20.0, 20.0]


def test_cap_rejects_new_roots(make_engine, scheduler):
    engine = make_engine(maxLiveBranches=1)

    engine.spawn_root(10, 600, 0, -1, 5, 30, "white")
    engine.spawn_root(20, 600, 0, -1, 5, 30, "white")

    assert engine.live_branches == 1
    assert engine.stats.roots == 1
    assert engine.stats.rejected == 1


def test_cap_blocks_fork_without_shrinking_parent(make_engine, scheduler):
    engine = make_engine(draws=FORKING_DRAWS, maxLiveBranches=1)
    engine.spawn_root(500, 500, 0, -1, 5, 30, "white")

    following = engine.step(branch(y=100.0, dy=-1.0, growth_rate=20.0, lifetime=200))

    assert engine.stats.children == 0
    assert engine.stats.rejected == 1
    assert following.width == 10.0


def test_cancel_all_drops_pending_branches(make_engine, surface, scheduler):
    engine = make_engine()
    engine.spawn_root(10, 600, 0, -1, 5, 30, "white")
    engine.spawn_root(20, 600, 0, -1, 5, 30, "white")

    assert engine.cancel_all() == 2
    assert engine.live_branches == 0

    scheduler.advance(1000)
    assert surface.lines == []
