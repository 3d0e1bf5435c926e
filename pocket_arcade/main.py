from __future__ import annotations
import logging
import sys
import pygame
from .settings import Settings, configure_logging, init_pygame_window
from .games import BaseGame, UnknownGameError, get_game_class

logger = logging.getLogger(__name__)

MENU_OPTIONS = ["snake", "tetris", "pong", "breakout", "space_invaders", "quit"]

class ArcadeApp:
    def __init__(self, cfg: Settings | None = None):
        self.cfg = cfg or Settings()
        configure_logging(self.cfg)
        pygame.init()
        self.screen = init_pygame_window(self.cfg)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("consolas", 28)
        self.state = "menu"
        self.menu_index = 0
        self.active_game: BaseGame | None = None
        self.menu_button_rects: list[tuple[str, pygame.Rect]] = []
        self.running = True
        if self.cfg.start_game:
            self.start_game(self.cfg.start_game)

    def run(self) -> None:
        try:
            while self.running:
                dt = self.clock.tick(self.cfg.fps) / 1000.0
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                        break
                    self.handle_event(event)
                self.update(dt)
                self.draw()
                pygame.display.flip()
        finally:
            self.cleanup()

    def cleanup(self) -> None:
        self.stop_game()
        pygame.quit()

    def handle_event(self, event: pygame.event.Event) -> None:
        if self.state == "menu":
            self.handle_menu_event(event)
        elif self.state == "game" and self.active_game:
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.stop_game()
                self.state = "menu"
                return
            self.active_game.handle_event(event)

    def handle_menu_event(self, event: pygame.event.Event) -> None:
        if not self.menu_button_rects:
            self.build_menu_buttons()

        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_UP:
                self.menu_index = (self.menu_index - 1) % len(MENU_OPTIONS)
            elif event.key == pygame.K_DOWN:
                self.menu_index = (self.menu_index + 1) % len(MENU_OPTIONS)
            elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                self.select(MENU_OPTIONS[self.menu_index])
        elif event.type == pygame.MOUSEMOTION:
            for idx, (_, rect) in enumerate(self.menu_button_rects):
                if rect.collidepoint(*event.pos):
                    self.menu_index = idx
                    break
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            for option, rect in self.menu_button_rects:
                if rect.collidepoint(*event.pos):
                    self.select(option)
                    break

    def select(self, option: str) -> None:
        if option == "quit":
            self.running = False
        else:
            self.start_game(option)

    def start_game(self, key: str) -> None:
        GameClass = get_game_class(key)
        # Only one game may hold input and timers at a time
        self.stop_game()
        self.active_game = GameClass(self.screen, self.cfg)
        self.active_game.start()
        self.state = "game"

    def stop_game(self) -> None:
        if self.active_game:
            self.active_game.stop()
            self.active_game = None

    def update(self, dt: float) -> None:
        if self.state == "game" and self.active_game:
            self.active_game.update(dt)

    def draw(self) -> None:
        self.screen.fill(self.cfg.bg_color)
        if self.state == "menu":
            self.draw_menu()
        elif self.state == "game" and self.active_game:
            self.active_game.draw()

    def draw_menu(self) -> None:
        title = self.font.render(self.cfg.title, True, (255, 255, 255))
        self.screen.blit(title, (self.cfg.width // 2 - title.get_width() // 2, 80))

        # Rebuild each frame to adapt to window size/font metrics
        self.build_menu_buttons()
        for idx, (option, rect) in enumerate(self.menu_button_rects):
            selected = idx == self.menu_index
            fill_color = (98, 107, 81) if selected else (60, 66, 50)
            border_color = (255, 255, 255) if selected else (135, 147, 114)
            pygame.draw.rect(self.screen, fill_color, rect, border_radius=8)
            pygame.draw.rect(self.screen, border_color, rect, width=2, border_radius=8)
            text_surf = self.font.render(option.replace("_", " ").title(), True, (255, 255, 255))
            self.screen.blit(text_surf, text_surf.get_rect(center=rect.center))

    def build_menu_buttons(self) -> None:
        self.menu_button_rects.clear()
        base_y = 180
        spacing = 60
        button_width = 320
        for idx, option in enumerate(MENU_OPTIONS):
            x = self.cfg.width // 2 - button_width // 2
            y = base_y + idx * spacing
            self.menu_button_rects.append((option, pygame.Rect(x, y, button_width, 48)))


def main() -> int:
    try:
        ArcadeApp().run()
    except (UnknownGameError, ValueError) as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
