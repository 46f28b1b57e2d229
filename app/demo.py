"""
Minesweeper - Interactive Demo

Run with: streamlit run app/demo.py
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import streamlit as st
from typing import Tuple

from minesweeper_engine import (
    PRESETS,
    GameConfig,
    InvalidConfig,
    Minesweeper,
    Phase,
    Stopwatch,
)

COLORS = {
    "1": "#0000ff",
    "2": "#008000",
    "3": "#ff0000",
    "4": "#000080",
    "5": "#800000",
    "6": "#008080",
    "7": "#000000",
    "8": "#808080",
}


def render_board_html(game: Minesweeper) -> str:
    """Render the board as a read-only HTML table."""
    # Scale cell size based on board width
    if game.cols >= 30:
        cell_size, font_size = 14, "10px"
    elif game.cols >= 16:
        cell_size, font_size = 20, "13px"
    else:
        cell_size, font_size = 26, "15px"

    html = '<div style="font-family: monospace; line-height: 1.2;">'
    html += '<table style="border-collapse: collapse; margin: auto;">'

    for r in range(game.rows):
        html += "<tr>"
        for c in range(game.cols):
            view = game.cell_view(r, c)
            if view.flagged and not view.revealed:
                text, bg, color = "F", "#ffa500", "#ffffff"
            elif view.revealed and view.is_mine:
                text, bg, color = "M", "#ffcccc", "#ff0000"
            elif view.revealed:
                count = view.adjacent_mine_count or 0
                text = str(count) if count else " "
                bg, color = "#f0f0f0", COLORS.get(text, "#000000")
            else:
                text, bg, color = ".", "#c0c0c0", "#666666"

            html += f'''<td style="
                width: {cell_size}px; height: {cell_size}px;
                text-align: center;
                background: {bg};
                border: 1px solid #999;
                color: {color};
                font-weight: bold;
                font-size: {font_size};
            ">{text}</td>'''
        html += "</tr>"

    html += "</table></div>"
    return html


def select_config() -> Tuple[str, GameConfig]:
    st.sidebar.header("Game Configuration")
    preset = st.sidebar.selectbox(
        "Difficulty",
        [name for name in PRESETS] + ["custom"],
        format_func=lambda n: n.capitalize(),
    )
    if preset != "custom":
        return preset, PRESETS[preset]

    rows = st.sidebar.number_input("Rows", min_value=1, max_value=40, value=9)
    cols = st.sidebar.number_input("Columns", min_value=1, max_value=40, value=9)
    mines = st.sidebar.number_input("Mines", min_value=1, value=10)
    config = GameConfig.custom(int(rows), int(cols), int(mines))
    if config.mine_count != int(mines):
        st.sidebar.info(f"Mine count lowered to {config.mine_count}.")
    return preset, config


def main():
    st.set_page_config(page_title="Minesweeper", page_icon="💣", layout="wide")
    st.title("Minesweeper")

    try:
        preset, config = select_config()
    except InvalidConfig as error:
        st.sidebar.error(str(error))
        return

    if "game" not in st.session_state:
        st.session_state.game = Minesweeper(config, timer=Stopwatch())
        st.session_state.settings = (preset, config)

    game: Minesweeper = st.session_state.game
    if st.session_state.settings != (preset, config):
        game.reset(config)
        st.session_state.settings = (preset, config)

    top1, top2, top3, top4 = st.columns(4)
    top1.metric("Mines left", game.flags_remaining)
    top2.metric("Time", f"{game.elapsed_seconds}s")
    top3.metric("Revealed", game.revealed_safe_count)
    with top4:
        if st.button("Restart", type="primary"):
            game.reset()
            st.rerun()

    flag_mode = st.toggle("Flag mode", value=False)

    if game.is_finished:
        st.markdown(render_board_html(game), unsafe_allow_html=True)
        if game.phase is Phase.WON:
            st.success("All safe cells revealed. You won!")
        else:
            st.error("You hit a mine.")
        return

    for r in range(game.rows):
        columns = st.columns(game.cols, gap="small")
        for c, column in enumerate(columns):
            view = game.cell_view(r, c)
            if view.revealed:
                count = view.adjacent_mine_count or 0
                column.button(str(count) if count else " ", key=f"{r}-{c}", disabled=True)
                continue

            label = "🚩" if view.flagged else "·"
            if column.button(label, key=f"{r}-{c}"):
                if flag_mode:
                    game.toggle_flag(r, c)
                else:
                    game.reveal(r, c)
                st.rerun()


if __name__ == "__main__":
    main()
