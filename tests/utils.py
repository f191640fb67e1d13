import random

from app_types import GameResult, Player, Tee


def make_players(
    handicap_indexes: list[float],
    link_groups: list[str | None] | None = None,
    tee: Tee = Tee.WHITE,
) -> list[Player]:
    """
    Builds players P1..Pn with the given handicap indexes.

    Args:
        handicap_indexes: One handicap index per player
        link_groups: Optional link group id per player (None = unlinked)
        tee: Tee for every player

    Returns:
        List of Player objects with ids "p1".."pn".
    """
    if link_groups is None:
        link_groups = [None] * len(handicap_indexes)
    return [
        Player(
            id=f"p{i}",
            first_name=f"P{i}",
            handicap_index=hi,
            tee=tee,
            link_group_id=group,
        )
        for i, (hi, group) in enumerate(zip(handicap_indexes, link_groups), 1)
    ]


def generate_random_players(n, hi_range=(-2.0, 26.0), seed=None):
    """
    Generates N unlinked players with random handicap indexes and tees.

    Args:
        n: Number of players to generate
        hi_range: Tuple of (min_index, max_index)
        seed: Optional seed for reproducible rosters

    Returns:
        List of Player objects.
    """
    rand = random.Random(seed)
    tees = list(Tee)
    return [
        Player(
            id=f"p{i}",
            first_name=f"P{i}",
            handicap_index=round(rand.uniform(*hi_range), 1),
            tee=rand.choice(tees),
        )
        for i in range(1, n + 1)
    ]


def team_compositions(result: GameResult) -> list[list[str]]:
    """Player ids per team, in team order."""
    return [[p.id for p in team.players] for team in result.teams]


def all_player_ids(result: GameResult) -> list[str]:
    return [p.id for team in result.teams for p in team.players]


class FixedRandomSource:
    """Random source that cycles through a fixed sequence of floats."""

    def __init__(self, values: list[float]):
        self._values = values
        self._i = 0

    def random(self) -> float:
        value = self._values[self._i % len(self._values)]
        self._i += 1
        return value
