# __main__.py - entry point
import logging
import os
import random

import pygame

from klondike import common as C
from klondike import ui
from klondike.scene import KlondikeGameScene

logger = logging.getLogger("klondike")


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes")


def _env_seed():
    raw = os.environ.get("KLONDIKE_SEED", "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer KLONDIKE_SEED %r", raw)
        return None


def _initial_window_size():
    info = pygame.display.Info()
    # Keep a safety margin so the window never hides under taskbar
    margin_w, margin_h = 120, 140
    w, h = ui.window_size()
    w = min(w, max(ui.CELL_W * C.DEBUG_X, info.current_w - margin_w))
    h = min(h, max(ui.CELL_H * C.BOARD_H, info.current_h - margin_h))
    return w, h


def main():
    debug = _env_flag("KLONDIKE_DEBUG")
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO)

    # Center window and init
    os.environ.setdefault("SDL_VIDEO_CENTERED", "1")
    pygame.init()
    try:
        ui.apply_cell_size(os.environ.get("KLONDIKE_CELL_SIZE", "").strip() or None)
        screen = pygame.display.set_mode(_initial_window_size(), pygame.RESIZABLE)
        pygame.display.set_caption("Klondike")
        ui.setup_fonts()

        seed = _env_seed()
        rng = random.Random(seed) if seed is not None else None
        scene = KlondikeGameScene(rng=rng, show_debug=debug)

        # One blocking wait per frame: draw, take exactly one event, apply it
        while not scene.finished:
            scene.draw(screen)
            pygame.display.flip()
            e = pygame.event.wait()
            if e.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode(e.size, pygame.RESIZABLE)
                continue
            scene.handle_event(e)
    finally:
        pygame.quit()


if __name__ == "__main__":
    main()
