# player_registry.py
"""
Saved player registry.

Keeps the players seen on a course so they can be found again when building
the next roster. Players are de-duplicated by first and last name
(case-insensitive); the most recent record wins.
"""

from app_types import Player
from constants import REGISTRY_SEARCH_LIMIT


def _registry_key(player: Player) -> str:
    first = (player.first_name or "").strip().lower()
    last = (player.last_name or "").strip().lower()
    return f"{first}|{last}"


class PlayerRegistry:
    """Saved players per course."""

    def __init__(self):
        self._players_by_course: dict[str, list[Player]] = {}

    def players(self, course_name: str) -> list[Player]:
        """Returns the saved players of a course, sorted by last then first name."""
        return list(self._players_by_course.get(course_name, []))

    def upsert_players(self, course_name: str, players: list[Player]) -> None:
        """Merges players into a course's saved list, replacing same-name entries."""
        merged = {_registry_key(p): p for p in self._players_by_course.get(course_name, [])}
        for p in players:
            merged[_registry_key(p)] = p
        self._players_by_course[course_name] = sorted(
            merged.values(), key=lambda p: (p.last_name or "", p.first_name)
        )

    def search(self, course_name: str, query: str) -> list[Player]:
        """Returns up to 10 saved players whose full name contains the query."""
        q = query.strip().lower()
        if not q:
            return []
        matches = [
            p
            for p in self._players_by_course.get(course_name, [])
            if q in f"{p.first_name} {p.last_name or ''}".lower()
        ]
        return matches[:REGISTRY_SEARCH_LIMIT]
