# main.py
from __future__ import annotations
import argparse
import logging
import os
from typing import List, Optional, Sequence, Tuple

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame  # type: ignore

from .config import CFG, ConfigError, GameConfig
from .game import SnakeGame
from .render import Button, Renderer, command_for_event, layout_buttons
from .ticker import IntervalTicker

logger = logging.getLogger(__name__)

FPS = 60  # render rate; movement is paced by the ticker


def handle_input(game: SnakeGame, events, buttons: List[Button]) -> Tuple[bool, List[Button]]:
    """Dispatch commands from events. Returns (keep running, buttons now on screen)."""
    for event in events:
        if event.type == pygame.QUIT:
            return False, buttons
        command = command_for_event(event, buttons, game.cfg.window_size)
        if command is not None:
            game.dispatch(command)
            # START/RESET switch screens, so later events hit the new buttons
            buttons = layout_buttons(game.cfg, game.phase)
    return True, buttons


def run(cfg: GameConfig, max_frames: Optional[int] = None) -> int:
    """Open the window and play until closed. Returns the last score."""
    pygame.init()
    screen = pygame.display.set_mode(cfg.window_size)
    pygame.display.set_caption("Snake Game")
    clock = pygame.time.Clock()

    renderer = Renderer(cfg)
    ticker = IntervalTicker(cfg.tick_ms, clock=pygame.time.get_ticks)
    frames = 0

    with SnakeGame(cfg, ticker=ticker) as game:
        buttons = renderer.draw(screen, game.snapshot())
        running = True
        while running:
            # 1) input
            running, buttons = handle_input(game, pygame.event.get(), buttons)
            if not running:
                break

            # 2) update
            for _ in range(ticker.due(pygame.time.get_ticks())):
                game.advance()

            # 3) render
            buttons = renderer.draw(screen, game.snapshot())
            pygame.display.flip()
            clock.tick(FPS)

            frames += 1
            if max_frames is not None and frames >= max_frames:
                running = False

        score = game.state.score
        phase = game.phase

    pygame.quit()
    print(f"[GAME] Session ended. phase={phase.value}, score={score}")
    return score


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Classic Snake on a square grid.")
    parser.add_argument("--size", type=int, default=CFG.size, help="board is SIZE x SIZE cells")
    parser.add_argument("--tick-ms", type=int, default=CFG.tick_ms,
                        help="milliseconds between snake moves")
    parser.add_argument("--score-step", type=int, default=CFG.score_step,
                        help="points per food eaten")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for food placement (reproducible games)")
    parser.add_argument("--cell-px", type=int, default=CFG.cell_px, help="pixels per cell")
    parser.add_argument("--max-frames", type=int, default=None,
                        help="quit after this many frames (smoke runs)")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = GameConfig.for_size(
            args.size,
            tick_ms=args.tick_ms,
            score_step=args.score_step,
            seed=args.seed,
            cell_px=args.cell_px,
        )
    except ConfigError as exc:
        parser.error(str(exc))

    logger.info("board %dx%d, tick %d ms", cfg.size, cfg.size, cfg.tick_ms)
    run(cfg, max_frames=args.max_frames)


if __name__ == "__main__":
    main()
