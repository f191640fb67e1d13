import pytest

from app_types import Course, GameSettings, Tee
from tests.utils import make_players

# Handicap indexes that give course handicaps 5..12 on a slope of 120
SCENARIO_INDEXES = [4.7, 5.6, 6.6, 7.5, 8.5, 9.4, 10.4, 11.3]


@pytest.fixture
def course():
    """Returns a course with the default slope ratings."""
    return Course(
        name="Pebble Creek",
        slopes={Tee.WHITE: 120, Tee.BLUE: 122, Tee.RED: 121},
        par=72,
    )


@pytest.fixture
def sample_players():
    """Returns eight unlinked players with course handicaps 5..12 on white."""
    return make_players(SCENARIO_INDEXES)


@pytest.fixture
def default_settings():
    """Returns settings for a $20 game paying three places."""
    return GameSettings(entry_fee_per_player=20, paid_places=3)
