# scene.py - pygame scene wiring input events to the Klondike engine
import random
from typing import Optional

import pygame

from klondike import ui
from klondike.game import KlondikeGame

# Keys the scene reacts to; everything else is ignored
KEY_ACTIONS = {
    pygame.K_ESCAPE: "escape",
    pygame.K_c: "c",
    pygame.K_d: "d",
}


class Scene:
    def handle_event(self, e): pass
    def draw(self, screen): pass


class KlondikeGameScene(Scene):
    def __init__(self, rng: Optional[random.Random] = None, show_debug: bool = False):
        self.game = KlondikeGame(rng=rng)
        self.show_debug = show_debug

    @property
    def finished(self) -> bool:
        return self.game.exit

    def handle_event(self, e):
        if e.type == pygame.QUIT:
            self.game.exit = True
        elif e.type == pygame.KEYDOWN:
            action = KEY_ACTIONS.get(e.key)
            if action is not None:
                self.game.press_key(action)
        elif e.type == pygame.MOUSEBUTTONUP and e.button == 1:
            x, y = ui.pixel_to_cell(e.pos)
            self.game.click(x, y)

    def draw(self, screen):
        ui.draw_board(screen, self.game, show_debug=self.show_debug)
