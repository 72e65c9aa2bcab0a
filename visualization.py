# visualization.py
"""
Handles the rendering of the sand screens using Pygame.
"""
import logging
import os
from typing import Optional, Tuple

import pygame

from constants import (
    WINDOW_WIDTH, WINDOW_HEIGHT, FPS, ASSETS_DIR, BACKGROUND_COLOR, WHITE,
    GRAY, LIGHT_GRAY, DOT_RADIUS_RATIO, TITLE_SCREEN_CAPTION,
    PATHWAY_SAMPLE_CAPTION
)
from curve import Line
from sand import PathwaySample, sand_on_line, sample_rows, row_curve, Rect

# --- Data Contracts ---
#
# A screen exposes:
#   - caption: str, the window title.
#   - update(self, elapsed: float) -> None: frame clock callback.
#   - handle_click(self, pos: Tuple[int, int]) -> None
#   - draw(self, surface: pygame.Surface) -> None
#
# class Visualizer:
#   - __init__(self, caption: str):
#     - Side Effects: Initializes Pygame and opens a fixed 1280x720,
#       non-resizable window.
#   - draw(self, screen) -> bool:
#     - Outputs: False if the user has quit, True otherwise.
#     - Side Effects: Handles events, paints the screen, flips the display
#       and waits for the next frame.
#
# load_title_image(name: str) -> pygame.Surface:
#   - Raises FileNotFoundError if the bundled image is missing and
#     pygame.error if it cannot be decoded. Both are logged as CRITICAL.


def cover_rect(image_size: Tuple[int, int], target_size: Tuple[int, int]) -> Tuple[int, int, int, int]:
    """
    Scales an image to cover the target, keeping its aspect ratio.

    Returns:
        (width, height, x, y): the scaled size and the blit offset that
        centres it, cropping whatever overhangs the target.
    """
    image_w, image_h = image_size
    target_w, target_h = target_size
    scale = max(target_w / image_w, target_h / image_h)
    width = max(target_w, int(round(image_w * scale)))
    height = max(target_h, int(round(image_h * scale)))
    return width, height, (target_w - width) // 2, (target_h - height) // 2


def load_title_image(name: str) -> pygame.Surface:
    """Loads a bundled image by name from the assets directory."""
    path = os.path.join(ASSETS_DIR, name)
    if not os.path.isfile(path):
        msg = f"Title image '{name}' not found at {path}."
        logging.critical(msg)
        raise FileNotFoundError(msg)
    try:
        image = pygame.image.load(path)
    except pygame.error as e:
        logging.critical(f"Title image at {path} could not be decoded: {e}")
        raise
    logging.info(f"Loaded title image {name} ({image.get_width()}x{image.get_height()}).")
    return image


class TitleScreen:
    """
    The title image with sand grains shimmering along the window diagonal.
    """
    caption = TITLE_SCREEN_CAPTION

    def __init__(self, image: pygame.Surface, seed: int, reroll_jitter: bool = True):
        self.image = image
        self.seed = seed
        self.reroll_jitter = reroll_jitter
        self.time = 0.0
        self.frame = 0
        self._background: Optional[pygame.Surface] = None
        self._background_offset = (0, 0)
        logging.info(f"Title screen using sand seed {seed} (reroll_jitter={reroll_jitter}).")

    def update(self, elapsed: float) -> None:
        self.time = elapsed
        self.frame += 1

    def handle_click(self, pos: Tuple[int, int]) -> None:
        pass

    def _cover(self, size: Tuple[int, int]) -> pygame.Surface:
        # Scaling is cached; the window cannot be resized.
        if self._background is None or self._background.get_size() != size:
            width, height, x, y = cover_rect(self.image.get_size(), size)
            scaled = pygame.transform.smoothscale(self.image.convert_alpha(), (width, height))
            self._background = pygame.Surface(size)
            self._background.fill(BACKGROUND_COLOR)
            self._background.blit(scaled, (x, y))
        return self._background

    def draw(self, surface: pygame.Surface) -> None:
        width, height = surface.get_size()
        surface.blit(self._cover((width, height)), (0, 0))

        curve = Line((0.0, 0.0), (float(width), float(height)))
        frame = self.frame if self.reroll_jitter else None
        grains = sand_on_line(self.seed, curve, self.time, frame)
        for center, radius in zip(grains.positions.tolist(), grains.radii.tolist()):
            pygame.draw.circle(surface, WHITE, center, radius)


class PathwaySampleScreen:
    """
    Pathway graphs, the sand flow along them, and the particle population.
    """
    caption = PATHWAY_SAMPLE_CAPTION

    def __init__(self, sample: PathwaySample):
        self.sample = sample

    def update(self, elapsed: float) -> None:
        self.sample.update(elapsed)

    def handle_click(self, pos: Tuple[int, int]) -> None:
        logging.debug(f"Canvas clicked at {pos}.")
        self.sample.regenerate_pathways()

    @staticmethod
    def _dot_radius(rect: Rect) -> float:
        return max(rect[2], rect[3]) * DOT_RADIUS_RATIO

    def _draw_graph(self, surface: pygame.Surface, rect: Rect, pathway) -> None:
        x, y, width, height = rect
        center_y = y + height * 0.5
        pygame.draw.line(surface, WHITE, (x, center_y), (x + width, center_y))
        pygame.draw.line(surface, GRAY, (x, y), (x + width, y))
        pygame.draw.line(surface, GRAY, (x, y + height), (x + width, y + height))
        path = pathway.to_path(row_curve(rect), height * 0.5)
        pygame.draw.aalines(surface, WHITE, False, path.tolist())

    def _draw_flow(self, surface: pygame.Surface, rect: Rect) -> None:
        curve = row_curve(rect)
        amplitude = rect[3] * 0.5
        radius = self._dot_radius(rect)
        for pathway in self.sample.pathways:
            path = pathway.to_path(curve, amplitude)
            pygame.draw.aalines(surface, LIGHT_GRAY, False, path.tolist())
            center = pathway.resolve(curve, amplitude, self.sample.period)
            pygame.draw.circle(surface, WHITE, center.tolist(), radius)

    def _draw_particles(self, surface: pygame.Surface, rect: Rect) -> None:
        particles = self.sample.particles
        positions = particles.positions(row_curve(rect), rect[3] * 0.5, self.sample.period)
        radius = self._dot_radius(rect)
        for center, color in zip(positions.tolist(), particles.colors.tolist()):
            pygame.draw.circle(surface, color, center, radius)

    def draw(self, surface: pygame.Surface) -> None:
        surface.fill(BACKGROUND_COLOR)
        pathways = self.sample.pathways
        rows = sample_rows(surface.get_width(), len(pathways))
        graph_index = 0
        for kind, rect in rows:
            if kind == "graph":
                self._draw_graph(surface, rect, pathways[graph_index])
                graph_index += 1
            elif kind == "flow":
                self._draw_flow(surface, rect)
            elif kind == "particles":
                self._draw_particles(surface, rect)


class Visualizer:
    """
    Owns the Pygame window and drives one screen per frame.
    """
    def __init__(self, caption: str):
        """
        Initializes Pygame and the display window.
        """
        pygame.init()
        # Fixed size; without pygame.RESIZABLE the window cannot be resized.
        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption(caption)
        self.clock = pygame.time.Clock()
        logging.info(f"Visualizer initialized with Pygame display ({WINDOW_WIDTH}x{WINDOW_HEIGHT}).")

    def draw(self, screen) -> bool:
        """
        Handles events and paints `screen`.

        Returns:
            bool: False if the application should exit, True otherwise.
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received. Shutting down visualizer.")
                return False

            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    logging.info("ESC key pressed. Shutting down visualizer.")
                    return False

            if event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 1: # Left mouse click
                    screen.handle_click(event.pos)

        screen.draw(self.screen)
        pygame.display.flip()
        self.clock.tick(FPS)
        return True

    @property
    def fps(self) -> float:
        return self.clock.get_fps()

    def close(self):
        """Shuts down Pygame."""
        pygame.quit()
