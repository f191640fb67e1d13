import pytest
from collections import Counter

from app_types import GroupKind
from exceptions import TeamAssignmentError
from handicap import enrich_player
from rng import Mulberry32
from team_builder import (
    assign_groups_balanced,
    assign_groups_randomized,
    finalize_teams,
    form_groups,
    order_groups_balanced,
    plan_team_sizes,
)
from tests.utils import FixedRandomSource, make_players


def _groups(course, players):
    return form_groups([enrich_player(course, p) for p in players])


# =============================================================================
# Team-Size Planning
# =============================================================================


@pytest.mark.parametrize(
    "total, expected",
    [
        (1, [1]),
        (2, [2]),
        (3, [3]),
        (4, [4]),
        (5, [3, 2]),
        (6, [3, 3]),
        (7, [4, 3]),
        (8, [4, 4]),
        (9, [3, 3, 3]),
        (10, [4, 3, 3]),
        (11, [4, 4, 3]),
        (12, [4, 4, 4]),
        (13, [4, 3, 3, 3]),
        (14, [4, 4, 3, 3]),
        (15, [4, 4, 4, 3]),
        (16, [4, 4, 4, 4]),
        (17, [4, 4, 3, 3, 3]),
        (18, [4, 4, 4, 3, 3]),
        (19, [4, 4, 4, 4, 3]),
        (20, [4, 4, 4, 4, 4]),
    ],
)
def test_plan_team_sizes_table(total, expected):
    assert plan_team_sizes(total) == expected


def test_plan_team_sizes_invariants():
    for total in range(1, 101):
        sizes = plan_team_sizes(total)
        assert sum(sizes) == total
        assert max(sizes) <= 4
        if total > 4:
            assert set(sizes) <= {2, 3, 4}, f"{total}: {sizes}"
        if 2 in sizes:
            assert total in (2, 5)


def test_plan_team_sizes_empty_roster():
    assert plan_team_sizes(0) == []


# =============================================================================
# Group Formation
# =============================================================================


def test_unlinked_players_become_singletons(course):
    groups = _groups(course, make_players([10.0, 12.0]))

    assert [g.group_id for g in groups] == ["single:p1", "single:p2"]
    assert all(g.kind == GroupKind.SINGLE for g in groups)
    assert all(g.size == 1 for g in groups)


def test_linked_players_grouped_in_roster_order(course):
    players = make_players([10.0, 5.0, 20.0, 15.0], link_groups=["A", None, "A", "B"])
    groups = _groups(course, players)

    assert [g.group_id for g in groups] == ["A", "single:p2", "B"]
    assert [p.id for p in groups[0].members] == ["p1", "p3"]
    assert groups[0].kind == GroupKind.LINKED


def test_group_strength_is_average_course_handicap(course):
    players = make_players([4.7, 11.3], link_groups=["A", "A"])  # CH 5 and 12
    (group,) = _groups(course, players)

    assert group.strength == pytest.approx(8.5)


def test_oversized_link_group_is_split_into_chunks(course):
    players = make_players([1.0, 2.0, 3.0, 4.0, 20.0], link_groups=["A"] * 5)
    groups = _groups(course, players)

    assert [g.group_id for g in groups] == ["A#1", "A#2"]
    assert [g.size for g in groups] == [4, 1]
    assert [p.id for p in groups[0].members] == ["p1", "p2", "p3", "p4"]
    assert [p.id for p in groups[1].members] == ["p5"]
    assert all(g.kind == GroupKind.SPLIT_CHUNK for g in groups)
    # Each chunk has its own strength
    assert groups[1].strength == groups[1].members[0].course_handicap


def test_balanced_order_puts_large_then_strong_groups_first(course):
    players = make_players(
        [20.0, 2.0, 10.0, 10.0, 1.0], link_groups=[None, None, "A", "A", None]
    )
    ordered = order_groups_balanced(_groups(course, players))

    assert [g.group_id for g in ordered] == ["A", "single:p5", "single:p2", "single:p1"]


# =============================================================================
# Balanced Assignment
# =============================================================================


def test_balanced_scenario_eight_players(course, sample_players):
    groups = _groups(course, sample_players)
    teams = finalize_teams(assign_groups_balanced(groups, plan_team_sizes(8)))

    assert [t.size for t in teams] == [4, 4]
    assert sorted(p.course_handicap for p in teams[0].players) == [5, 7, 9, 11]
    assert sorted(p.course_handicap for p in teams[1].players) == [6, 8, 10, 12]
    for team in teams:
        assert team.team_handicap == sum(p.course_handicap for p in team.players)
    assert [t.team_handicap for t in teams] == [32, 36]
    assert [t.team_id for t in teams] == [1, 2]


def test_balanced_never_splits_groups(course):
    players = make_players(
        [float(i) for i in range(12)],
        link_groups=["A", "A", "A", "A", "B", "B", "C", "C", None, None, None, None],
    )
    teams = assign_groups_balanced(_groups(course, players), plan_team_sizes(12))

    for group_id in ("A", "B", "C"):
        holding = [t for t in teams if any(p.link_group_id == group_id for p in t.players)]
        assert len(holding) == 1
    assert [t.size for t in teams] == [4, 4, 4]


def test_balanced_is_deterministic(course):
    players = make_players([float(i) for i in range(11)])
    first = assign_groups_balanced(_groups(course, players), plan_team_sizes(11))
    second = assign_groups_balanced(_groups(course, players), plan_team_sizes(11))

    assert [[p.id for p in t.players] for t in first] == [
        [p.id for p in t.players] for t in second
    ]


def test_group_larger_than_any_team_raises(course):
    # 5 players plan to [3, 2], so a linked four cannot be placed
    players = make_players([1.0] * 5, link_groups=["A", "A", "A", "A", None])

    with pytest.raises(TeamAssignmentError) as exc_info:
        assign_groups_balanced(_groups(course, players), plan_team_sizes(5))
    assert exc_info.value.group_size == 4


# =============================================================================
# Randomized Assignment
# =============================================================================


def test_randomized_same_seed_same_teams(course):
    players = make_players([float(i) for i in range(14)], link_groups=["A", "A"] + [None] * 12)

    first = assign_groups_randomized(_groups(course, players), plan_team_sizes(14), Mulberry32(42))
    second = assign_groups_randomized(_groups(course, players), plan_team_sizes(14), Mulberry32(42))

    assert [[p.id for p in t.players] for t in first] == [
        [p.id for p in t.players] for t in second
    ]


def test_randomized_respects_capacities(course):
    players = make_players([float(i) for i in range(13)], link_groups=["A"] * 3 + [None] * 10)
    sizes = plan_team_sizes(13)

    for seed in range(20):
        teams = assign_groups_randomized(_groups(course, players), sizes, Mulberry32(seed))
        assert Counter(t.size for t in teams) == Counter(sizes)
        holding = [t for t in teams if any(p.link_group_id == "A" for p in t.players)]
        assert len(holding) == 1


def test_randomized_with_injected_source_fills_left_to_right(course, sample_players):
    # A source that never swaps leaves groups and team order untouched
    source = FixedRandomSource([0.999])
    teams = assign_groups_randomized(_groups(course, sample_players), [4, 4], source)

    assert [p.id for p in teams[0].players] == ["p1", "p2", "p3", "p4"]
    assert [p.id for p in teams[1].players] == ["p5", "p6", "p7", "p8"]


def test_randomized_raises_when_group_cannot_fit(course):
    players = make_players([1.0] * 5, link_groups=["A", "A", "A", "A", None])

    with pytest.raises(TeamAssignmentError):
        assign_groups_randomized(_groups(course, players), plan_team_sizes(5), Mulberry32(1))


# =============================================================================
# Final Ordering
# =============================================================================


def test_finalize_sorts_by_size_then_handicap(course):
    players = make_players([20.0, 20.0, 20.0, 1.0, 1.0, 1.0, 10.0])
    teams = assign_groups_balanced(_groups(course, players), plan_team_sizes(7))
    teams = finalize_teams(teams)

    assert [t.size for t in teams] == [3, 4]
    assert [t.team_id for t in teams] == [1, 2]


def test_finalize_breaks_size_ties_by_team_handicap(course):
    players = make_players([float(i) for i in range(9)])
    teams = finalize_teams(assign_groups_balanced(_groups(course, players), plan_team_sizes(9)))

    handicaps = [t.team_handicap for t in teams]
    assert handicaps == sorted(handicaps)
