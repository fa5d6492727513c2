#!/usr/bin/env python3
"""
Bubble Pop - Headless Simulation

Fires random upward shots into a seeded game without a display, then
prints the final board and score.

Usage:
    python scripts/simulate.py --shots 30 --seed 42
    python scripts/simulate.py --shots 50 --shift-every 10
"""
import sys
import math
import random
import argparse
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rich.console import Console
from rich.table import Table
from rich.text import Text

from bubblepop.games.bubble_shooter import BubbleShooterGame, ShiftDirection
from bubblepop.games.bubble_shooter.grid import EMPTY
from bubblepop.utils.config_loader import load_game_config
from bubblepop.utils.logging_setup import setup_logging

FRAME_MS = 16.0
MAX_FRAMES_PER_SHOT = 2000

CELL_STYLES = {
    0: "red",
    1: "dark_orange",
    2: "yellow",
    3: "green",
    4: "blue",
    5: "magenta",
}


class FrameClock:
    """Clock that advances only when the simulation says so."""

    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float = FRAME_MS) -> None:
        self.now += ms


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Bubble Pop - headless simulation")
    parser.add_argument("--shots", type=int, default=30, help="Number of shots to fire")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--shift-every", type=int, default=0,
                        help="Shift the grid down after every N shots (0 = never)")
    return parser.parse_args()


def board_table(game: BubbleShooterGame) -> Table:
    """Render the grid as a rich table, staggering odd rows."""
    table = Table(show_header=False, box=None, padding=(0, 0))
    table.add_column()
    for row, cells in enumerate(game.grid.snapshot()):
        line = Text(" " if row % 2 else "")
        for value in cells:
            if value == EMPTY:
                line.append("· ", style="grey37")
            else:
                line.append("● ", style=CELL_STYLES.get(value, "white"))
        table.add_row(line)
    return table


def run(shots: int, seed: int, shift_every: int) -> BubbleShooterGame:
    config = load_game_config("bubble_shooter")
    setup_logging(config.logging)

    clock = FrameClock()
    game = BubbleShooterGame(config=config.game, seed=seed, clock=clock)
    aim_rng = random.Random(seed + 1)

    for shot in range(1, shots + 1):
        angle = aim_rng.uniform(-math.pi * 0.95, -math.pi * 0.05)
        game.update_aim(angle)
        game.attempt_fire(angle)

        for _ in range(MAX_FRAMES_PER_SHOT):
            clock.advance()
            if game.update() or not game.shooter.moving:
                break

        if shift_every and shot % shift_every == 0:
            game.start_shift(ShiftDirection.DOWN)
            while game.locked:
                clock.advance()
                game.update()

    return game


def main():
    args = parse_args()
    game = run(args.shots, args.seed, args.shift_every)

    console = Console()
    console.print(board_table(game))
    console.print(f"[bold]Score:[/bold] {game.get_score()}  "
                  f"[bold]Bubbles left:[/bold] {game.grid.count_occupied()}")


if __name__ == "__main__":
    main()
