import logging

import pygame

from core.settings import RendererSettings
from core.time_controller import TimeController
from rendering.pygame_sink import PygameSkySink
from rendering.sinks import format_star_count
from rendering.sky_dome import SkyDomeRenderer

W, H = 900, 900


class CaptionHud:
    """Shows the visible star count in the window title."""

    def show_star_count(self, count: int) -> None:
        pygame.display.set_caption(f"Sky Dome - {format_star_count(count)}")


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    pygame.init()
    screen = pygame.display.set_mode((W, H))
    pygame.display.set_caption("Sky Dome")
    clock = pygame.time.Clock()

    sink = PygameSkySink(screen, label_font=pygame.font.SysFont("monospace", 12))
    # 1 min/s so the rotation is visible, recompute every second
    dome = SkyDomeRenderer(sink,
                           settings=RendererSettings(update_interval_s=1.0),
                           hud=CaptionHud(),
                           clock=TimeController(speed_idx=3))
    if not dome.initialize():
        pygame.quit()
        return

    running = True
    while running:
        clock.tick(60)
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                running = False
            elif ev.type == pygame.KEYDOWN:
                if ev.key == pygame.K_SPACE:
                    dome.clock.toggle_pause()
                elif ev.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    dome.clock.speed_up()
                elif ev.key == pygame.K_MINUS:
                    dome.clock.speed_down()
                elif ev.key == pygame.K_c:
                    dome.toggle_constellations(not dome.settings.show_constellations)
                elif ev.key == pygame.K_ESCAPE:
                    running = False

        dome.update(pygame.time.get_ticks() / 1000.0, (0.0, 0.0, 0.0))
        sink.draw()
        pygame.display.flip()

    dome.dispose()
    pygame.quit()

if __name__ == "__main__":
    main()
