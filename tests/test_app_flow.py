import importlib
import random

import pytest


def _capture_scene(monkeypatch, entry, captured):
    orig_scene_cls = entry.KlondikeGameScene

    class CapturedScene(orig_scene_cls):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            captured["scene"] = self

    monkeypatch.setattr(entry, "KlondikeGameScene", CapturedScene)


def test_application_flow(monkeypatch, headless):
    pygame = headless.pygame
    monkeypatch.setenv("KLONDIKE_CELL_SIZE", "Small")
    monkeypatch.setenv("KLONDIKE_SEED", "1234")
    monkeypatch.setenv("KLONDIKE_DEBUG", "1")

    entry = importlib.import_module("klondike.__main__")
    ui = importlib.import_module("klondike.ui")
    captured = {}
    _capture_scene(monkeypatch, entry, captured)

    def _cell_center(x, y):
        return (x * ui.CELL_W + ui.CELL_W // 2, y * ui.CELL_H + ui.CELL_H // 2)

    def _release(x, y):
        return pygame.event.Event(pygame.MOUSEBUTTONUP, {"pos": _cell_center(x, y), "button": 1})

    def _key(key):
        return pygame.event.Event(pygame.KEYDOWN, {"key": key, "mod": 0})

    recorded = {}

    def _after_stock_click():
        game = captured["scene"].game
        recorded["discard_after_click"] = len(game.discard)
        recorded["selected_after_click"] = str(game.selected_pos)
        return _key(pygame.K_c)

    event_steps = [
        lambda: _key(pygame.K_d),
        lambda: _release(42, 2),
        _after_stock_click,
        lambda: pygame.event.Event(pygame.MOUSEBUTTONDOWN, {"pos": _cell_center(2, 0), "button": 1}),
        lambda: _key(pygame.K_q),
        lambda: _key(pygame.K_ESCAPE),
    ]
    index = {"value": 0}

    def scripted_wait():
        step = index["value"]
        assert step < len(event_steps), "event loop should have stopped after Escape"
        index["value"] += 1
        return event_steps[step]()

    monkeypatch.setattr(pygame.event, "wait", scripted_wait)

    entry.main()

    assert headless.quit_calls, "pygame.quit() should be called"
    assert index["value"] == len(event_steps)
    assert len(headless.flips) == len(event_steps)
    assert (ui.CELL_W, ui.CELL_H) == ui.CELL_SIZES["Small"]

    game = captured["scene"].game
    assert game.exit
    assert recorded["discard_after_click"] == 2
    assert recorded["selected_after_click"] == "Discard"
    assert len(game.discard) == 2
    assert len(game.stock) == 16 - 2
    assert str(game.selected_pos) == "None"
    assert captured["scene"].show_debug


def test_seed_gives_same_deal(monkeypatch, headless):
    scene_module = importlib.import_module("klondike.scene")
    a = scene_module.KlondikeGameScene(rng=random.Random(5))
    b = scene_module.KlondikeGameScene(rng=random.Random(5))
    assert [[c.identity for c in col] for col in a.game.columns] == [
        [c.identity for c in col] for col in b.game.columns
    ]


def test_window_close_ends_loop(monkeypatch, headless):
    pygame = headless.pygame
    monkeypatch.delenv("KLONDIKE_SEED", raising=False)
    monkeypatch.delenv("KLONDIKE_DEBUG", raising=False)
    entry = importlib.import_module("klondike.__main__")

    events = iter([pygame.event.Event(pygame.QUIT, {})])
    monkeypatch.setattr(pygame.event, "wait", lambda: next(events))

    entry.main()
    assert headless.quit_calls


def test_event_failure_propagates(monkeypatch, headless):
    pygame = headless.pygame
    entry = importlib.import_module("klondike.__main__")

    def broken_wait():
        raise pygame.error("video system not initialized")

    monkeypatch.setattr(pygame.event, "wait", broken_wait)

    with pytest.raises(pygame.error):
        entry.main()
    assert headless.quit_calls, "pygame.quit() should run even when the loop fails"


def test_bad_seed_is_ignored(monkeypatch, caplog):
    entry = importlib.import_module("klondike.__main__")
    monkeypatch.setenv("KLONDIKE_SEED", "abc")
    assert entry._env_seed() is None
    assert "KLONDIKE_SEED" in caplog.text
