"""
Team building for member games.

Players are clustered into indivisible groups (link groups and singletons),
the roster size is turned into a plan of team sizes, and the groups are then
packed into those teams by either a balanced or a randomized policy.
No team ever holds more than four players and no group is ever split
across teams.
"""

import logging

from app_types import EnrichedPlayer, Group, GroupKind, Team, TeamSizes
from constants import MAX_TEAM_SIZE, SINGLETON_GROUP_PREFIX, SPLIT_GROUP_SEPARATOR
from exceptions import TeamAssignmentError
from logger import log_assignment_debug
from rng import RandomSource, shuffle_in_place

logger = logging.getLogger("app.team_builder")


# =============================================================================
# Group Formation
# =============================================================================


def form_groups(players: list[EnrichedPlayer]) -> list[Group]:
    """
    Clusters players into groups that must share a team.

    Players sharing a link group id form one group, in roster order.
    Unlinked players become singleton groups keyed by their own id.
    A link group larger than a team is split into chunks of at most four,
    in member order, each chunk becoming its own group.

    Args:
        players: The enriched roster

    Returns:
        Groups in order of first appearance in the roster
    """
    members_by_id: dict[str, list[EnrichedPlayer]] = {}
    kinds: dict[str, GroupKind] = {}
    for p in players:
        if p.link_group_id is None or p.link_group_id == "":
            group_id = f"{SINGLETON_GROUP_PREFIX}{p.id}"
            kinds.setdefault(group_id, GroupKind.SINGLE)
        else:
            group_id = p.link_group_id
            kinds.setdefault(group_id, GroupKind.LINKED)
        members_by_id.setdefault(group_id, []).append(p)

    groups: list[Group] = []
    for group_id, members in members_by_id.items():
        if len(members) <= MAX_TEAM_SIZE:
            groups.append(Group(group_id=group_id, members=members, kind=kinds[group_id]))
            continue

        logger.warning(
            f"Link group '{group_id}' has {len(members)} players; "
            f"splitting into groups of {MAX_TEAM_SIZE}"
        )
        for chunk_num, start in enumerate(range(0, len(members), MAX_TEAM_SIZE), 1):
            groups.append(
                Group(
                    group_id=f"{group_id}{SPLIT_GROUP_SEPARATOR}{chunk_num}",
                    members=members[start : start + MAX_TEAM_SIZE],
                    kind=GroupKind.SPLIT_CHUNK,
                )
            )

    return groups


# =============================================================================
# Team-Size Planning
# =============================================================================


def plan_team_sizes(total_players: int) -> TeamSizes:
    """
    Computes the team sizes for a roster of the given size.

    Prefers teams of 4, absorbs remainders with teams of 3, and uses a team
    of 2 only for totals of 2 and 5. Never produces a team larger than 4.

    Examples:
        9 -> [3, 3, 3], 10 -> [4, 3, 3], 5 -> [3, 2], 6 -> [3, 3]

    Args:
        total_players: Number of players in the game

    Returns:
        Team sizes summing to total_players; empty for an empty roster
    """
    if total_players <= 0:
        return []
    if total_players <= MAX_TEAM_SIZE:
        return [total_players]

    fours, remainder = divmod(total_players, 4)

    if remainder == 0:
        return [4] * fours

    if remainder == 1:
        if fours >= 2:
            # 4 + 4 + 1 -> 3 + 3 + 3
            return [4] * (fours - 2) + [3, 3, 3]
        return [3, 2]

    if remainder == 2:
        if fours >= 1:
            # 4 + 2 -> 3 + 3
            return [4] * (fours - 1) + [3, 3]
        return [2]

    return [4] * fours + [3]


# =============================================================================
# Group Ordering
# =============================================================================


def order_groups_balanced(groups: list[Group]) -> list[Group]:
    """Orders groups by size descending, then strongest first, then by id."""
    return sorted(groups, key=lambda g: (-g.size, g.strength, g.group_id))


def order_groups_randomized(groups: list[Group], rand: RandomSource) -> list[Group]:
    """Shuffles groups, then moves larger groups forward to reduce fit failures."""
    ordered = list(groups)
    shuffle_in_place(ordered, rand)
    ordered.sort(key=lambda g: (-g.size, g.group_id))
    return ordered


# =============================================================================
# Group-to-Team Assignment
# =============================================================================


def _largest_fit(remaining: list[int], size: int) -> int | None:
    """Index of the team with the most room that fits size (first on ties)."""
    best_idx = None
    best_remaining = -1
    for idx, room in enumerate(remaining):
        if room >= size and room > best_remaining:
            best_idx = idx
            best_remaining = room
    return best_idx


def _first_fit(remaining: list[int], indexes, size: int) -> int | None:
    """First index (in the given order) of a team with room for size."""
    for idx in indexes:
        if remaining[idx] >= size:
            return idx
    return None


def _empty_teams(team_sizes: TeamSizes) -> list[Team]:
    return [Team(team_id=idx + 1) for idx in range(len(team_sizes))]


def _place(team: Team, group: Group, remaining: list[int], idx: int) -> None:
    team.players.extend(group.members)
    remaining[idx] -= group.size


def assign_groups_balanced(groups: list[Group], team_sizes: TeamSizes) -> list[Team]:
    """
    Places groups into teams, balancing strength across teams.

    Groups are taken in balanced order and each goes to the team with the
    largest remaining capacity that can hold it.

    Args:
        groups: Groups of 1-4 players
        team_sizes: Planned size of each team

    Returns:
        Filled teams in plan order (not yet sorted or renumbered)

    Raises:
        TeamAssignmentError: If a group does not fit into any team
    """
    teams = _empty_teams(team_sizes)
    remaining = list(team_sizes)
    placements: list[tuple[str, int]] = []

    for group in order_groups_balanced(groups):
        idx = _largest_fit(remaining, group.size)
        if idx is None:
            idx = _first_fit(remaining, range(len(teams)), group.size)
        if idx is None:
            logger.error(
                f"No team can hold group '{group.group_id}' of size {group.size} "
                f"(remaining capacity: {remaining})"
            )
            raise TeamAssignmentError(group.size)
        _place(teams[idx], group, remaining, idx)
        placements.append((group.group_id, idx))

    log_assignment_debug(logger, "balanced", team_sizes, remaining, placements)
    return teams


def assign_groups_randomized(
    groups: list[Group], team_sizes: TeamSizes, rand: RandomSource
) -> list[Team]:
    """
    Places groups into randomly chosen teams with room for them.

    For each group a random permutation of the teams is drawn and the group
    goes to the first team in that permutation with enough room.

    Args:
        groups: Groups of 1-4 players
        team_sizes: Planned size of each team
        rand: Random source; seeded for reproducible teams

    Returns:
        Filled teams in plan order (not yet sorted or renumbered)

    Raises:
        TeamAssignmentError: If a group does not fit into any team
    """
    teams = _empty_teams(team_sizes)
    remaining = list(team_sizes)
    placements: list[tuple[str, int]] = []

    for group in order_groups_randomized(groups, rand):
        order = list(range(len(teams)))
        shuffle_in_place(order, rand)
        idx = _first_fit(remaining, order, group.size)
        if idx is None:
            idx = _first_fit(remaining, range(len(teams)), group.size)
        if idx is None:
            logger.error(
                f"No team can hold group '{group.group_id}' of size {group.size} "
                f"(remaining capacity: {remaining})"
            )
            raise TeamAssignmentError(group.size)
        _place(teams[idx], group, remaining, idx)
        placements.append((group.group_id, idx))

    log_assignment_debug(logger, "randomized", team_sizes, remaining, placements)
    return teams


def finalize_teams(teams: list[Team]) -> list[Team]:
    """
    Recomputes team handicaps, sorts and renumbers the teams.

    Teams are ordered by size ascending, then team handicap ascending, and
    numbered 1..k in that order.
    """
    for team in teams:
        team.recompute_handicap()
    ordered = sorted(teams, key=lambda t: (t.size, t.team_handicap))
    for team_id, team in enumerate(ordered, 1):
        team.team_id = team_id
    return ordered
