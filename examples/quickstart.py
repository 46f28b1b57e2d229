"""
Quickstart example for the Minesweeper engine.

This script plays a scripted game and runs a few statistics.
"""

import logging

from minesweeper_engine import (
    GameConfig,
    Minesweeper,
    RevealStatus,
    mine_frequency,
    run_random_play_many_tests,
)


def main():
    logging.basicConfig(level=logging.INFO)

    print("=" * 60)
    print("Minesweeper Engine - Quickstart Example")
    print("=" * 60)

    # Example 1: First click is always safe
    print("\n1. Revealing the center of a Beginner board (9x9, 10 mines)...")
    print("-" * 60)

    game = Minesweeper("beginner", seed=7)
    outcome = game.reveal(4, 4)

    print(f"Status: {outcome.status.value}")
    print(f"Cells opened: {len(outcome.revealed_cells)}")
    print(f"Mines left: {game.flags_remaining}")
    print(game.format_board())

    # Example 2: Flag a cell and try to reveal it
    print("\n2. Flags block reveals...")
    print("-" * 60)

    hidden = next(
        (r, c)
        for r in range(game.rows)
        for c in range(game.cols)
        if not game.cell_view(r, c).revealed
    )
    flag = game.toggle_flag(*hidden)
    blocked = game.reveal(*hidden)
    print(f"Flagged {hidden}: {flag.flagged}, flags used: {flag.flag_count}")
    print(f"Reveal on the flag: {blocked.status.value}")
    assert blocked.status is RevealStatus.UNCHANGED

    # Example 3: Custom boards clamp the mine count
    print("\n3. Custom 5x5 board asking for 30 mines...")
    print("-" * 60)

    custom = GameConfig.custom(5, 5, 30)
    print(f"Mine count used: {custom.mine_count}")

    # Example 4: Mine placement is uniform outside the safe cell
    print("\n4. Mine frequency over 2000 Beginner layouts...")
    print("-" * 60)

    freq = mine_frequency("beginner", (4, 4), 2000, seed=1)
    print(f"Safe cell frequency: {freq[4, 4]:.3f}")
    print(f"Mean of the rest: {(freq.sum() / 80):.3f} (expected {10 / 80:.3f})")

    # Example 5: Random play
    print("\n5. Random play, 50 games per difficulty...")
    print("-" * 60)

    logging.getLogger("minesweeper_engine").setLevel(logging.WARNING)
    for name in ("beginner", "intermediate", "expert"):
        results = run_random_play_many_tests(name, 50, seed=0)
        print(
            f"{name:15s} first click opens {results['avg_first_reveal_size']:5.1f} cells, "
            f"win rate {results['win_rate']*100:5.1f}%"
        )

    print("\n" + "=" * 60)
    print("Done!")
    print("=" * 60)


if __name__ == "__main__":
    main()
