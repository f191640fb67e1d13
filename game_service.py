"""
Service layer for orchestrating game operations from the UI.

This module sits between the Streamlit pages and the lower-level game logic,
ensuring that roster validation, seeding and the saved-player registry are
handled consistently regardless of where the operation is initiated (UI or
tests).
"""

import logging
import math
import time
from dataclasses import replace

import pandas as pd

from app_types import Course, GameResult, GameSettings, Player, PlayerId
from constants import MIN_PLAYERS_FOR_GAME, SEED_MASK
from exceptions import ValidationError
from game_logic import generate_game, move_player, next_seed
from player_registry import PlayerRegistry
from roster_service import dataframe_to_players, validate_link_groups

logger = logging.getLogger("app.game_service")


def initial_seed() -> int:
    """Seed derived from the current time in milliseconds, masked to 32 bits."""
    return int(time.time() * 1000) & SEED_MASK


def validate_game_setup(
    players: list[Player], entry_fee: float, skins_fee: float
) -> tuple[bool, str | None]:
    """Validates the roster size and fees. Returns (is_valid, error_message)."""
    if len(players) < MIN_PLAYERS_FOR_GAME:
        return False, f"At least {MIN_PLAYERS_FOR_GAME} players are needed for a game."
    for label, fee in (("Entry fee", entry_fee), ("Skins fee", skins_fee)):
        if not math.isfinite(fee) or fee < 0:
            return False, f"{label} must be a non-negative number."
    errors = validate_link_groups(players)
    if errors:
        return False, " ".join(errors)
    return True, None


def create_game(
    course: Course,
    roster_df: pd.DataFrame,
    settings: GameSettings,
    registry: PlayerRegistry | None = None,
) -> tuple[GameResult, list[Player]]:
    """
    Builds a game from the roster editor table.

    1. Converts the table into players
    2. Validates the roster and fees
    3. Remembers the players in the saved-player registry (if given)
    4. Generates the game

    Returns:
        The generated game and the players it was built from

    Raises:
        ValidationError: If the roster or fees are invalid
        TeamAssignmentError: If the teams cannot be built
    """
    players = dataframe_to_players(roster_df)

    is_valid, error_message = validate_game_setup(
        players, settings.entry_fee_per_player, settings.skins_fee_per_player
    )
    if not is_valid:
        raise ValidationError(error_message)

    if registry is not None:
        registry.upsert_players(course.name, players)

    return generate_game(course, players, settings), players


def reshuffle_game(
    course: Course, players: list[Player], settings: GameSettings
) -> tuple[GameResult, GameSettings]:
    """
    Regenerates a game with the next seed.

    Returns:
        The new game and the settings (with the advanced seed) that produced it
    """
    seed = settings.random_seed if settings.random_seed is not None else initial_seed()
    new_settings = replace(settings, random_seed=next_seed(seed))
    logger.info(f"Reshuffling game with seed {new_settings.random_seed}")
    return generate_game(course, players, new_settings), new_settings


def apply_player_move(
    result: GameResult, player_id: PlayerId, target_team_id: int
) -> GameResult:
    """
    Moves a player between teams of a generated game.

    Raises:
        ValidationError: If the player or team does not exist
    """
    try:
        return move_player(result, player_id, target_team_id)
    except ValidationError as e:
        logger.error(f"Failed to move player '{player_id}': {e}")
        raise
