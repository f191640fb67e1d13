import streamlit as st

from app_types import Course, GameSettings, Player, Tee
from constants import (
    COL_FIRST_NAME,
    COL_HANDICAP_INDEX,
    COL_LAST_NAME,
    COL_LINK_GROUP,
    COL_TEE,
    DEFAULT_COURSE_NAME,
    DEFAULT_ENTRY_FEE,
    DEFAULT_PAID_PLACES,
    DEFAULT_PAR,
    DEFAULT_SKINS_FEE,
    DEFAULT_SLOPES,
)
from exceptions import MembersGameError
from game_service import create_game, initial_seed
from logger import get_log_level, setup_logging
from player_registry import PlayerRegistry
from roster_service import create_roster_dataframe, dataframe_to_players, read_roster_csv

setup_logging(get_log_level())

# Setup Constants
DEFAULT_ROSTER = [
    Player(id=f"p{i}", first_name=f"Player{i}", handicap_index=float(2 * i), tee=Tee.WHITE)
    for i in range(1, 9)
]

st.set_page_config(layout="wide", page_title="Members Game Setup")

st.title("⛳ Members Game")

if "registry" not in st.session_state:
    st.session_state.registry = PlayerRegistry()
if "editor_df" not in st.session_state:
    st.session_state.editor_df = create_roster_dataframe(DEFAULT_ROSTER)
if "seed" not in st.session_state:
    st.session_state.seed = initial_seed()

# --- Course ---
st.header("1. Course")
course_name = st.text_input("Course Name", value=DEFAULT_COURSE_NAME)
cols = st.columns(4)
with cols[0]:
    par = st.number_input("Par", min_value=27, max_value=80, value=DEFAULT_PAR, step=1)
slopes = {}
for col, tee in zip(cols[1:], Tee):
    with col:
        slopes[tee] = st.number_input(
            f"{tee.value.title()} Slope",
            min_value=0,
            max_value=155,
            value=DEFAULT_SLOPES[tee.value],
            step=1,
            help="Slope rating of the tee (0 = unset)",
        )

# --- Roster ---
st.header("2. Players")
st.info("Add, edit, or remove players in the table, or upload a CSV file.")

uploaded_file = st.file_uploader("Upload Players CSV", type=["csv"])
if uploaded_file is not None:
    # Only process if it's a new file (prevent re-processing on reruns)
    file_id = f"{uploaded_file.name}_{uploaded_file.size}"
    if st.session_state.get("last_uploaded_file_id") != file_id:
        st.session_state.last_uploaded_file_id = file_id
        try:
            st.session_state.editor_df = read_roster_csv(uploaded_file)
            st.success("Successfully loaded players from CSV!")
        except MembersGameError as e:
            st.error(str(e))

column_config = {
    COL_FIRST_NAME: st.column_config.TextColumn(COL_FIRST_NAME, required=True),
    COL_LAST_NAME: st.column_config.TextColumn(COL_LAST_NAME, default=""),
    COL_HANDICAP_INDEX: st.column_config.NumberColumn(
        COL_HANDICAP_INDEX,
        help="Handicap index (e.g. 12.4, or -2.0 for plus players)",
        min_value=-10.0,
        max_value=54.0,
        step=0.1,
        default=18.0,
        required=True,
    ),
    COL_TEE: st.column_config.SelectboxColumn(
        COL_TEE,
        options=[t.value for t in Tee],
        default=Tee.WHITE.value,
        required=True,
    ),
    COL_LINK_GROUP: st.column_config.TextColumn(
        COL_LINK_GROUP,
        help="Optional: players with the same link group always play on the same team (max 4)",
        default="",
    ),
}

edited_df = st.data_editor(
    st.session_state.editor_df,
    column_config=column_config,
    column_order=["#", COL_FIRST_NAME, COL_LAST_NAME, COL_HANDICAP_INDEX, COL_TEE, COL_LINK_GROUP],
    disabled=["#"],
    hide_index=True,
    num_rows="dynamic",
    use_container_width=True,
    key="roster_editor",
)

# --- Saved Players ---
with st.expander("Saved Players"):
    query = st.text_input("Search saved players", key="registry_query")
    matches = st.session_state.registry.search(course_name, query)
    if query and not matches:
        st.caption("No saved players match.")
    for p in matches:
        match_cols = st.columns([3, 1])
        with match_cols[0]:
            st.markdown(f"{p.display_name} · {p.handicap_index} · {Tee(p.tee).value}")
        with match_cols[1]:
            if st.button("➕ Add", key=f"add_saved_{p.id}"):
                try:
                    roster = dataframe_to_players(edited_df)
                except MembersGameError as e:
                    st.error(str(e))
                    st.stop()
                if all(r.id != p.id for r in roster):
                    roster.append(p)
                st.session_state.editor_df = create_roster_dataframe(roster)
                st.rerun()

# --- Settings ---
with st.sidebar:
    st.header("Game Settings")
    entry_fee = st.number_input("Entry Fee per Player", min_value=0.0, value=float(DEFAULT_ENTRY_FEE), step=1.0)
    skins_fee = st.number_input("Skins Fee per Player", min_value=0.0, value=float(DEFAULT_SKINS_FEE), step=1.0)
    paid_places = st.number_input("Paid Places", min_value=1, value=DEFAULT_PAID_PLACES, step=1)
    randomize_teams = st.toggle(
        "Randomize Teams",
        value=False,
        help="Assign groups to random teams instead of balancing team handicaps",
    )
    seed = st.number_input(
        "Random Seed",
        min_value=0,
        max_value=0xFFFFFFFF,
        step=1,
        key="seed",
        disabled=not randomize_teams,
    )

# --- Generate ---
st.header("3. Generate Teams")
if st.button("🏌️ Generate Game", type="primary"):
    course = Course(name=course_name.strip() or DEFAULT_COURSE_NAME, slopes=slopes, par=int(par))
    settings = GameSettings(
        entry_fee_per_player=float(entry_fee),
        skins_fee_per_player=float(skins_fee),
        random_seed=int(seed),
        randomize_teams=randomize_teams,
        paid_places=int(paid_places),
    )
    try:
        game, players = create_game(course, edited_df, settings, st.session_state.registry)
    except MembersGameError as e:
        st.error(str(e))
        st.stop()

    st.session_state.editor_df = create_roster_dataframe(players)
    st.session_state.course = course
    st.session_state.players = players
    st.session_state.settings = settings
    st.session_state.game = game
    st.switch_page("pages/2_Teams.py")
