"""
Service layer for roster and result tables.

This module handles conversion between Player objects and the pandas
DataFrames shown in the roster editor, CSV import, and the tables used to
display generated teams and payouts.
"""

import logging
import uuid
from collections import Counter

import pandas as pd

from app_types import GameResult, Player, Tee
from constants import (
    COL_FIRST_NAME,
    COL_HANDICAP_INDEX,
    COL_LAST_NAME,
    COL_LINK_GROUP,
    COL_PLAYER_ID,
    COL_TEE,
    MAX_TEAM_SIZE,
    ROSTER_REQUIRED_COLUMNS,
)
from exceptions import ValidationError

logger = logging.getLogger("app.roster_service")


def _new_player_id() -> str:
    return uuid.uuid4().hex[:12]


def _optional_text(value) -> str | None:
    """Converts NaN/None/blank cells to None, otherwise a stripped string."""
    if value is None or pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


def create_roster_dataframe(players: list[Player]) -> pd.DataFrame:
    """Creates a DataFrame for the roster editor from a list of players."""
    return pd.DataFrame(
        {
            "#": range(1, len(players) + 1),
            COL_FIRST_NAME: [p.first_name for p in players],
            COL_LAST_NAME: [p.last_name or "" for p in players],
            COL_HANDICAP_INDEX: [p.handicap_index for p in players],
            COL_TEE: [Tee(p.tee).value for p in players],
            COL_LINK_GROUP: [p.link_group_id or "" for p in players],
            COL_PLAYER_ID: [p.id for p in players],
        }
    )


def dataframe_to_players(edited_df: pd.DataFrame) -> list[Player]:
    """
    Converts an edited roster DataFrame into a list of players.

    Rows without a first name are dropped. New rows (no player_id) get a
    generated id. Handicap indexes are rounded to one decimal.

    Args:
        edited_df: DataFrame from the Streamlit data_editor or a CSV upload

    Returns:
        Players in table order

    Raises:
        ValidationError: If a row has a non-numeric handicap index or an
            unknown tee
    """
    missing = [c for c in ROSTER_REQUIRED_COLUMNS if c not in edited_df.columns]
    if missing:
        raise ValidationError(f"Roster is missing column(s): {', '.join(missing)}")

    players = []
    for row_num, (_, row) in enumerate(edited_df.iterrows(), 1):
        first_name = _optional_text(row[COL_FIRST_NAME])
        if first_name is None:
            continue

        handicap_text = _optional_text(row[COL_HANDICAP_INDEX])
        try:
            handicap = float(handicap_text)
        except (TypeError, ValueError) as e:
            raise ValidationError(
                f"Row {row_num}: handicap index for {first_name} must be a number"
            ) from e

        tee_value = _optional_text(row[COL_TEE]) or Tee.WHITE.value
        try:
            tee = Tee(tee_value.lower())
        except ValueError as e:
            raise ValidationError(
                f"Row {row_num}: unknown tee '{tee_value}' for {first_name}"
            ) from e

        player_id = _optional_text(row.get(COL_PLAYER_ID)) or _new_player_id()
        players.append(
            Player(
                id=player_id,
                first_name=first_name,
                last_name=_optional_text(row.get(COL_LAST_NAME)),
                handicap_index=round(handicap, 1),
                tee=tee,
                link_group_id=_optional_text(row.get(COL_LINK_GROUP)),
            )
        )

    return players


def read_roster_csv(csv_file) -> pd.DataFrame:
    """
    Reads a roster CSV into an editor DataFrame.

    Args:
        csv_file: Path or file-like object (e.g. a Streamlit upload)

    Raises:
        ValidationError: If required columns are missing or the file is unreadable
    """
    try:
        df = pd.read_csv(csv_file)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise ValidationError(f"Could not read roster CSV: {e}") from e

    missing = [c for c in ROSTER_REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValidationError(
            f"CSV must contain the following columns: {', '.join(ROSTER_REQUIRED_COLUMNS)}"
        )

    df = df.dropna(subset=[COL_FIRST_NAME])
    for col in (COL_LAST_NAME, COL_LINK_GROUP):
        if col not in df.columns:
            df[col] = ""
        df[col] = df[col].fillna("").astype(str)

    logger.info(f"Loaded {len(df)} player(s) from CSV")
    return create_roster_dataframe(dataframe_to_players(df))


def validate_link_groups(players: list[Player]) -> list[str]:
    """Returns an error message for each link group with more than four players."""
    counts = Counter(p.link_group_id for p in players if p.link_group_id)
    return [
        f"Link group '{group_id}' has {count} players, but a team holds at most {MAX_TEAM_SIZE}."
        for group_id, count in counts.items()
        if count > MAX_TEAM_SIZE
    ]


def teams_to_dataframe(result: GameResult) -> pd.DataFrame:
    """One row per player, in team order."""
    rows = []
    for team in result.teams:
        for p in team.players:
            rows.append(
                {
                    "Team": team.team_id,
                    "Player": p.display_name,
                    "Tee": Tee(p.player.tee).value,
                    "Handicap Index": p.player.handicap_index,
                    "Course Handicap": p.course_handicap,
                    "Team Handicap": team.team_handicap,
                }
            )
    return pd.DataFrame(
        rows,
        columns=["Team", "Player", "Tee", "Handicap Index", "Course Handicap", "Team Handicap"],
    )


def payouts_to_dataframe(result: GameResult) -> pd.DataFrame:
    """One row per paid place."""
    return pd.DataFrame(
        {
            "Place": [p.place for p in result.payouts],
            "Amount": [p.amount for p in result.payouts],
        }
    )
