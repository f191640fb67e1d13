import pandas as pd
import streamlit as st

from constants import DEFAULT_HOLE_PAR, HOLES_PER_ROUND
from exceptions import MembersGameError
from game_service import apply_player_move, reshuffle_game
from handicap import normalize_holes, strokes_by_hole
from roster_service import payouts_to_dataframe, teams_to_dataframe

st.set_page_config(initial_sidebar_state="collapsed", layout="wide")

# --- Page Entry Logic ---
if "game" not in st.session_state:
    st.error("No game generated yet. Please set up a game first.")
    st.switch_page("1_Setup.py")

game = st.session_state.game
course = game.course

st.title(f"⛳ {course.name}")
st.caption(
    f"Par {course.par} · "
    + " · ".join(f"{tee.value.title()} {slope or '-'}" for tee, slope in course.slopes.items())
)

metric_cols = st.columns(3)
metric_cols[0].metric("Players", game.total_players)
metric_cols[1].metric("Prize Pool", f"${game.prize_pool}")
metric_cols[2].metric("Skins Pool", f"${game.skins_pool}")

# --- Teams ---
st.header("Teams")
team_cols = st.columns(min(len(game.teams), 4) or 1)
for i, team in enumerate(game.teams):
    with team_cols[i % len(team_cols)]:
        with st.container(border=True):
            st.markdown(f"#### Team {team.team_id}")
            st.caption(f"Team CH Sum: {team.team_handicap}")
            for p in team.players:
                st.markdown(f"- {p.display_name} ({p.course_handicap})")

action_cols = st.columns(2)
with action_cols[0]:
    if st.button("🔀 Regenerate"):
        try:
            new_game, new_settings = reshuffle_game(
                course, st.session_state.players, st.session_state.settings
            )
        except MembersGameError as e:
            st.error(str(e))
            st.stop()
        st.session_state.game = new_game
        st.session_state.settings = new_settings
        st.rerun()
with action_cols[1]:
    if st.button("⬅️ Back to Setup"):
        st.switch_page("1_Setup.py")

# --- Move Player ---
with st.form(key="move_player_form"):
    st.subheader("Move Player")
    player_options = {
        p.id: f"{p.display_name} (Team {team.team_id})"
        for team in game.teams
        for p in team.players
    }
    player_id = st.selectbox(
        "Player", list(player_options), format_func=lambda pid: player_options[pid]
    )
    target_team_id = st.selectbox("To Team", [t.team_id for t in game.teams])
    if st.form_submit_button("Move") and player_id is not None:
        try:
            st.session_state.game = apply_player_move(game, player_id, target_team_id)
        except MembersGameError as e:
            st.error(str(e))
            st.stop()
        st.rerun()

# --- Payouts ---
st.header("Payouts")
st.dataframe(payouts_to_dataframe(game), hide_index=True)

with st.expander("All Players"):
    st.dataframe(teams_to_dataframe(game), hide_index=True, use_container_width=True)

# --- Scorecards ---
st.header("Scorecards")
if "holes_df" not in st.session_state:
    st.session_state.holes_df = pd.DataFrame(
        {
            "number": range(1, HOLES_PER_ROUND + 1),
            "par": [DEFAULT_HOLE_PAR] * HOLES_PER_ROUND,
            "stroke_index": range(1, HOLES_PER_ROUND + 1),
        }
    )

with st.expander("Hole Data"):
    holes_df = st.data_editor(
        st.session_state.holes_df, hide_index=True, disabled=["number"], key="holes_editor"
    )

holes = normalize_holes(holes_df.to_dict("records"))
for team in game.teams:
    with st.container(border=True):
        st.markdown(f"**Team {team.team_id}**")
        card = {"Hole": [h["number"] for h in holes], "Par": [h["par"] for h in holes]}
        for p in team.players:
            card[f"{p.display_name} ({p.course_handicap})"] = strokes_by_hole(
                p.course_handicap, holes
            )
        st.dataframe(pd.DataFrame(card).set_index("Hole").T, use_container_width=True)
