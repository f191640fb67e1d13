"""
Types for the Members Game app.

This module defines the enums, type aliases and data classes shared by the
team builder, the payout allocator and the Streamlit pages.
"""

from dataclasses import dataclass, field
from enum import Enum

from constants import DEFAULT_PAID_PLACES

# =============================================================================
# Basic Type Aliases
# =============================================================================


class Tee(str, Enum):
    """Tee box a player plays from."""

    WHITE = "white"
    BLUE = "blue"
    RED = "red"


class GroupKind(str, Enum):
    """How a group of players came to be placed together.

    SPLIT_CHUNK groups come from a link group larger than a team; this should
    not happen when the roster editor validates link groups, but it is handled.
    """

    SINGLE = "single"
    LINKED = "linked"
    SPLIT_CHUNK = "split_chunk"


# A player's stable unique identifier
PlayerId = str

# Identifier shared by players who must land on the same team
LinkGroupId = str

# Slope rating per tee (typically 55-155)
SlopesByTee = dict[Tee, int]

# Ordered team capacities produced by the size planner
TeamSizes = list[int]

# Share of the prize pool per paid place, summing to 1.0
PayoutRatios = list[float]


# =============================================================================
# Roster Data Classes
# =============================================================================


@dataclass
class Course:
    """A course and the slope rating of each of its tees.

    Attributes:
        name: Course name
        slopes: Slope rating per tee; a missing or zero slope means unset
        par: Course par (display only)
    """

    name: str
    slopes: SlopesByTee = field(default_factory=dict)
    par: int = 72

    def slope_for_tee(self, tee: Tee) -> int:
        """Returns the slope rating for a tee, or 0 when it is unset."""
        return self.slopes.get(Tee(tee), 0) or 0


@dataclass(frozen=True)
class Player:
    """A rostered member.

    Attributes:
        id: Stable unique identifier
        first_name: Required first name
        handicap_index: Handicap index (typically -5.0 to 40.0)
        tee: Tee the player plays from
        last_name: Optional last name
        link_group_id: Players sharing this id are kept on the same team
    """

    id: PlayerId
    first_name: str
    handicap_index: float
    tee: Tee = Tee.WHITE
    last_name: str | None = None
    link_group_id: LinkGroupId | None = None

    @property
    def display_name(self) -> str:
        if self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.first_name


@dataclass(frozen=True)
class EnrichedPlayer:
    """A player wrapped with the course handicap computed for one game."""

    player: Player
    course_handicap: int

    @property
    def id(self) -> PlayerId:
        return self.player.id

    @property
    def link_group_id(self) -> LinkGroupId | None:
        return self.player.link_group_id

    @property
    def display_name(self) -> str:
        return self.player.display_name


# =============================================================================
# Team Building Data Classes
# =============================================================================


@dataclass
class Group:
    """Players that must be placed on the same team.

    Attributes:
        group_id: Link group id, "single:<player id>" for unlinked players,
            or "<link group id>#<n>" for chunks of an oversized link group
        members: 1-4 players in roster order
        kind: Whether this is a singleton, a link group or a split chunk
    """

    group_id: str
    members: list[EnrichedPlayer]
    kind: GroupKind = GroupKind.LINKED

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def strength(self) -> float:
        """Average course handicap of the members (lower is stronger)."""
        if not self.members:
            return 0.0
        return sum(m.course_handicap for m in self.members) / len(self.members)


@dataclass
class Team:
    """A team of players.

    Attributes:
        team_id: 1-based team number, assigned after the final sort
        players: Players in the order they were placed
        team_handicap: Sum of the players' course handicaps
    """

    team_id: int
    players: list[EnrichedPlayer] = field(default_factory=list)
    team_handicap: int = 0

    @property
    def size(self) -> int:
        return len(self.players)

    def recompute_handicap(self) -> None:
        self.team_handicap = sum(p.course_handicap for p in self.players)


# =============================================================================
# Game Data Classes
# =============================================================================


@dataclass
class GameSettings:
    """Settings for one game generation.

    Attributes:
        entry_fee_per_player: Contribution of each player to the prize pool
        skins_fee_per_player: Contribution of each player to the skins pool
        random_seed: Seed for reproducible randomized teams; None means
            non-deterministic
        randomize_teams: Assign groups randomly instead of balancing
        paid_places: Number of places paid from the prize pool
    """

    entry_fee_per_player: float
    skins_fee_per_player: float = 0.0
    random_seed: int | None = None
    randomize_teams: bool = False
    paid_places: int = DEFAULT_PAID_PLACES


@dataclass(frozen=True)
class Payout:
    """Prize money for one finishing place (1-indexed)."""

    place: int
    amount: int


@dataclass
class GameResult:
    """Result of a game generation.

    Attributes:
        course: Course the game is played on
        teams: Teams ordered by size then team handicap, numbered 1..k
        total_players: Number of players in the game
        prize_pool: Entry fees collected
        skins_pool: Skins fees collected
        payouts: Amount paid per place, non-increasing, summing to prize_pool
    """

    course: Course
    teams: list[Team]
    total_players: int
    prize_pool: int
    skins_pool: int
    payouts: list[Payout]
