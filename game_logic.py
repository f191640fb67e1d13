"""
Member game generation.

generate_game() is a single, stateless call: it enriches the roster with
course handicaps, builds the teams and allocates the prize money. It performs
no I/O and keeps no state between calls.
"""

import logging
from dataclasses import replace

from app_types import Course, GameResult, GameSettings, Player, PlayerId, Team
from constants import SEED_MASK
from exceptions import ValidationError
from handicap import enrich_player
from payouts import allocate_payouts, compute_pool
from rng import make_random_source
from team_builder import (
    assign_groups_balanced,
    assign_groups_randomized,
    finalize_teams,
    form_groups,
    plan_team_sizes,
)

logger = logging.getLogger("app.game_logic")


def generate_game(course: Course, players: list[Player], settings: GameSettings) -> GameResult:
    """
    Generates teams and payouts for a member game.

    Args:
        course: Course providing the slope rating of each tee
        players: The roster; players sharing a link group stay together
        settings: Fees, paid places and team assignment policy

    Returns:
        The complete game result

    Raises:
        TeamAssignmentError: If a group cannot be placed within team capacities
    """
    enriched = [enrich_player(course, p) for p in players]
    total_players = len(enriched)

    team_sizes = plan_team_sizes(total_players)
    groups = form_groups(enriched)
    logger.debug(f"Team sizes for {total_players} players: {team_sizes}")
    logger.debug(f"Formed {len(groups)} groups: {[g.group_id for g in groups]}")

    if settings.randomize_teams:
        # One generator per call, shared by the group shuffle and team draws
        rand = make_random_source(settings.random_seed)
        teams = assign_groups_randomized(groups, team_sizes, rand)
    else:
        teams = assign_groups_balanced(groups, team_sizes)
    teams = finalize_teams(teams)

    prize_pool = compute_pool(settings.entry_fee_per_player, total_players)
    skins_pool = compute_pool(settings.skins_fee_per_player or 0, total_players)
    payouts = allocate_payouts(prize_pool, settings.paid_places, len(teams))

    logger.info(
        f"Generated game on '{course.name}': {total_players} players, "
        f"{len(teams)} teams, prize pool {prize_pool}, skins pool {skins_pool}"
    )

    return GameResult(
        course=course,
        teams=teams,
        total_players=total_players,
        prize_pool=prize_pool,
        skins_pool=skins_pool,
        payouts=payouts,
    )


def move_player(result: GameResult, player_id: PlayerId, target_team_id: int) -> GameResult:
    """
    Moves a player to another team of a generated game.

    The player is removed from their team and appended to the target team,
    and both team handicaps are recomputed. Team capacities are not enforced
    since this is a manual override. Moving a player to the team they are
    already on changes nothing.

    Args:
        result: The game to edit (left unchanged)
        player_id: Id of the player to move
        target_team_id: Id of the team to move them to

    Returns:
        A new game result with the player moved

    Raises:
        ValidationError: If the player or target team is not in the game
    """
    teams = [replace(t, players=list(t.players)) for t in result.teams]
    teams_by_id = {t.team_id: t for t in teams}

    target = teams_by_id.get(target_team_id)
    if target is None:
        raise ValidationError(f"Team {target_team_id} is not part of this game")

    source: Team | None = None
    for team in teams:
        if any(p.id == player_id for p in team.players):
            source = team
            break
    if source is None:
        raise ValidationError(f"Player '{player_id}' is not on any team")

    if source is not target:
        idx = next(i for i, p in enumerate(source.players) if p.id == player_id)
        moved = source.players.pop(idx)
        target.players.append(moved)
        source.recompute_handicap()
        target.recompute_handicap()
        logger.info(
            f"Moved {moved.display_name} from team {source.team_id} to team {target.team_id}"
        )

    return replace(result, teams=teams)


def next_seed(seed: int) -> int:
    """Returns the seed that follows the given one, wrapping at 32 bits."""
    return (seed + 1) & SEED_MASK
