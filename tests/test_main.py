# tests/test_main.py
import pygame as pg
import pytest

from tapsnake.config import UP, GameConfig
from tapsnake.game import GamePhase
from tapsnake.render import layout_buttons
from tapsnake.main import build_parser, handle_input, main, run


def test_parser_defaults_match_config():
    args = build_parser().parse_args([])
    cfg = GameConfig()
    assert args.size == cfg.size
    assert args.tick_ms == cfg.tick_ms
    assert args.score_step == cfg.score_step
    assert args.seed is None


@pytest.mark.parametrize("argv", [["--size", "1"], ["--tick-ms", "0"]])
def test_bad_config_is_a_usage_error(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    assert exc.value.code == 2


def test_run_smoke(capsys):
    try:
        score = run(GameConfig(size=6, start=(1, 1), start_food=(4, 4)), max_frames=3)
    finally:
        pg.init()   # run() quits pygame on exit
    assert score == 0
    assert "[GAME] Session ended. phase=not_started, score=0" in capsys.readouterr().out


def _tap(pos, size):
    return pg.event.Event(pg.FINGERDOWN, x=(pos[0] + 0.5) / size[0], y=(pos[1] + 0.5) / size[1],
                          dx=0.0, dy=0.0, finger_id=0, touch_id=0, pressure=1.0)


def test_tapping_pause_toggles_once(make_game):
    game = make_game()
    game.start()
    buttons = layout_buttons(game.cfg, game.phase)
    pause = next(b for b in buttons if b.command == "PAUSE")
    events = [
        _tap(pause.rect.center, game.cfg.window_size),
        pg.event.Event(pg.MOUSEBUTTONDOWN, pos=pause.rect.center, button=1, touch=True),
    ]
    running, buttons = handle_input(game, events, buttons)
    assert running
    assert game.phase == GamePhase.PAUSED
    assert next(b for b in buttons if b.command == "PAUSE").label == "Resume"


def test_events_after_start_hit_the_play_screen_buttons(make_game):
    game = make_game()
    welcome = layout_buttons(game.cfg, game.phase)
    up = next(b for b in layout_buttons(game.cfg, GamePhase.RUNNING) if b.command == "UP")
    events = [
        pg.event.Event(pg.MOUSEBUTTONDOWN, pos=welcome[0].rect.center, button=1),
        pg.event.Event(pg.MOUSEBUTTONDOWN, pos=up.rect.center, button=1),
    ]
    running, buttons = handle_input(game, events, welcome)
    assert running
    assert game.phase == GamePhase.RUNNING
    assert game.state.pending == UP
    assert [b.command for b in buttons][0] == "UP"


def test_quit_event_stops_loop(make_game):
    game = make_game()
    running, _ = handle_input(game, [pg.event.Event(pg.QUIT)], [])
    assert not running
