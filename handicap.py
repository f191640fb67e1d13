"""
Course handicap and stroke allocation.

A course handicap converts a player's handicap index into strokes for a
particular course and tee: round(index * slope / 113).
"""

from app_types import Course, EnrichedPlayer, Player, Tee
from constants import DEFAULT_HOLE_PAR, HOLES_PER_ROUND, SLOPE_BASELINE
from rounding import round_half_away_from_zero


def course_handicap_for(course: Course, handicap_index: float, tee: Tee) -> int:
    """Computes the course handicap for a handicap index on a course's tee.

    An unset slope yields a course handicap of 0.
    """
    slope = course.slope_for_tee(tee)
    return round_half_away_from_zero(handicap_index * slope / SLOPE_BASELINE)


def enrich_player(course: Course, player: Player) -> EnrichedPlayer:
    """Wraps a player with their course handicap for the given course."""
    return EnrichedPlayer(
        player=player,
        course_handicap=course_handicap_for(course, player.handicap_index, player.tee),
    )


def strokes_on_hole(course_handicap: int, stroke_index: int | None) -> int:
    """
    Returns the number of handicap strokes a player receives on a hole.

    One stroke is given on every hole whose stroke index is within the course
    handicap, and a further stroke for each full 18 above that.

    Args:
        course_handicap: The player's course handicap
        stroke_index: The hole's stroke index (1 = hardest), or None if unknown

    Returns:
        Strokes received; 0 for missing stroke indexes or scratch and plus players
    """
    if not stroke_index or stroke_index <= 0:
        return 0
    if course_handicap <= 0:
        return 0
    strokes = 0
    while course_handicap - strokes * HOLES_PER_ROUND >= stroke_index:
        strokes += 1
    return strokes


def normalize_holes(holes: list[dict]) -> list[dict]:
    """
    Normalizes saved hole data to a full 18-hole list.

    Holes are dicts with "number", "par" and optional "stroke_index". Missing
    holes default to par 4 with a stroke index equal to the hole number.
    An empty input returns an empty list (no scorecard available).
    """
    if not holes:
        return []
    by_number = {h["number"]: h for h in holes}
    normalized = []
    for number in range(1, HOLES_PER_ROUND + 1):
        hole = by_number.get(number)
        if hole is None:
            hole = {"number": number, "par": DEFAULT_HOLE_PAR, "stroke_index": number}
        normalized.append(
            {
                "number": number,
                "par": hole.get("par", DEFAULT_HOLE_PAR),
                "stroke_index": hole.get("stroke_index"),
            }
        )
    return normalized


def strokes_by_hole(course_handicap: int, holes: list[dict]) -> list[int]:
    """Returns the strokes received on each hole of a normalized hole list."""
    return [strokes_on_hole(course_handicap, h["stroke_index"]) for h in holes]
