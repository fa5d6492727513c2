#!/usr/bin/env python3
"""
Bubble Pop - Play Script

Play the bubble shooter with the mouse.

Controls:
    Move mouse: Aim
    Click: Fire (click the right launcher bubble to swap instead)
    Up / Down: Shift the grid one row up / down
    P: Pause / resume
    R: Restart
    ESC: Quit

Usage:
    python scripts/play.py
    python scripts/play.py --seed 7 --scale 3
"""
import sys
import os
import math
import argparse
import logging
import warnings
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Suppress pygame messages
os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = '1'
warnings.filterwarnings('ignore', category=UserWarning, module='pygame')

import pygame

from bubblepop.games.registry import GameRegistry
from bubblepop.games.bubble_shooter import ShiftDirection
from bubblepop.utils.config_loader import load_game_config
from bubblepop.utils.logging_setup import setup_logging

GAME_ID = "bubble_shooter"
SWAP_HIT_MARGIN = 6

logger = logging.getLogger("bubblepop.play")


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Bubble Pop - play the bubble shooter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/play.py
  python scripts/play.py --seed 7 --scale 3
"""
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for the starting grid and bubble colors"
    )
    parser.add_argument(
        "--scale",
        type=float,
        default=None,
        help="Screen pixels per game unit (default: from config)"
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=None,
        help="Frame rate (default: from config)"
    )
    parser.add_argument(
        "--config-dir",
        type=str,
        default=None,
        help="Directory containing default.yaml and games/"
    )
    return parser.parse_args()


def handle_click(game, renderer, pos) -> None:
    """Tap on the on-deck bubble swaps; any other tap aims and fires."""
    x, y = renderer.screen_to_game(*pos)
    sec_x, sec_y = game.shooter.hud_positions()["secondary"]
    if math.hypot(x - sec_x, y - sec_y) <= game.shooter.radius + SWAP_HIT_MARGIN:
        game.swap_loaded()
        return
    angle = math.atan2(y - game.shooter.y, x - game.shooter.x)
    game.update_aim(angle)
    game.attempt_fire(angle)


def main():
    """Main entry point for human play."""
    args = parse_args()

    config_dir = Path(args.config_dir) if args.config_dir else None
    config = load_game_config(GAME_ID, config_dir)
    setup_logging(config.logging)

    fps = args.fps or config.visualization.render_fps
    scale = args.scale or config.visualization.scale

    game = GameRegistry.create_game(GAME_ID, config=config.game, seed=args.seed)
    width, height = game.default_layout()
    renderer = GameRegistry.create_renderer(GAME_ID, width=int(width), height=int(height), scale=scale)

    pygame.init()
    screen = pygame.display.set_mode(renderer.get_preferred_size())
    pygame.display.set_caption("Bubble Pop")
    clock = pygame.time.Clock()

    logger.info("Starting Bubble Shooter (seed=%s)", args.seed)

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_r:
                    game.restart()
                elif event.key == pygame.K_p:
                    game.toggle_pause()
                elif event.key == pygame.K_UP:
                    game.start_shift(ShiftDirection.UP)
                elif event.key == pygame.K_DOWN:
                    game.start_shift(ShiftDirection.DOWN)

            elif event.type == pygame.MOUSEMOTION:
                game.aim_at(*renderer.screen_to_game(*event.pos))

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                handle_click(game, renderer, event.pos)

        for result in game.update():
            if result.points:
                logger.info("Popped %d, dropped %d (+%d) - score %d",
                            len(result.matched), len(result.floating),
                            result.points, game.get_score())

        renderer.render(game.get_state(), screen)
        pygame.display.flip()
        clock.tick(fps)

    pygame.quit()
    logger.info("Final score: %d", game.get_score())


if __name__ == "__main__":
    main()
