"""A fireworks show: scheduled rockets, click-launched rockets and a viewer."""

from __future__ import annotations

import argparse
import math
import os
import random
import sys
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .particles import MyParticleSystem, get_renderer
from .renderer import BlendMode, DrawCall, Renderer
from .vecmath import random_float

WINDOW_SIZE = 900
WINDOW_TITLE = "Particle Viewer"
PIXELS_PER_UNIT = 112.5
CLICK_RISE = 3.0
CLICK_EXPLODE_COUNT = 100
CLICK_BURST = 150
INITIAL_PARTICLES = 100


def screen_to_world(x: float, y: float) -> tuple[float, float]:
    """Map window pixel coordinates to the world plane the rockets fly in."""
    return float(x) / -PIXELS_PER_UNIT + 4.0, float(y) / PIXELS_PER_UNIT - 4.0


@dataclass
class Launch:
    """A rocket that starts and bursts at fixed frame numbers of the show."""

    system: MyParticleSystem
    start: int
    explode_at: int
    burst: int
    exploded: bool = False


@dataclass
class Spawned:
    """A rocket launched by a click; it bursts once its own counter reaches a limit."""

    system: MyParticleSystem
    exploded: bool = False


_SCHEDULE = (
    # offset, colour, start frame, burst frame, burst size
    ((1.5, 2.0, 0.0), (0.6, 0.2, 0.8), 0, 3500, 100),
    ((-2.0, 1.0, 0.0), (0.2, 0.5, 0.9), 3500, 6800, 250),
    ((0.5, 1.5, 0.0), (0.4, 0.9, 0.4), 6000, 8000, 100),
    ((2.0, 1.0, 0.0), (0.87, 0.34, 0.4), 8500, 10000, 200),
)


class FireworksShow:
    """Four rockets on a timetable plus any number launched by clicking."""

    def __init__(
        self, renderer: Renderer | None = None, rng: random.Random | None = None
    ) -> None:
        self.renderer = renderer if renderer is not None else get_renderer()
        self.rng = rng
        self.counter = 0
        self.spawned: list[Spawned] = []
        self.launches: list[Launch] = []
        for offset, color, start, explode_at, burst in _SCHEDULE:
            system = self._make_system(offset, color)
            self.launches.append(Launch(system, start, explode_at, burst))
        self.renderer.perspective(math.radians(45.0), 1.0, 0.1, 10.0)
        self.renderer.look_at((0.0, 0.0, 8.0), (0.0, 0.0, 0.0))

    def _make_system(
        self, offset: Sequence[float], color: Sequence[float]
    ) -> MyParticleSystem:
        system = MyParticleSystem(self.renderer, self.rng)
        system.set_offset(offset)
        system.set_color(color)
        system.init(INITIAL_PARTICLES)
        system.count = 0
        return system

    def click(self, x: float, y: float) -> MyParticleSystem:
        """Launch a rocket of random colour above the clicked window position."""
        wx, wy = screen_to_world(x, y)
        color = [abs(random_float(0.0, 1.0, self.rng)) for _ in range(3)]
        system = self._make_system((wx, wy + CLICK_RISE, 0.0), color)
        self.spawned.append(Spawned(system))
        return system

    def step(self, dt: float) -> list[DrawCall]:
        """Advance one frame by ``dt`` seconds and return the sprites drawn in it."""
        for entry in self.spawned:
            entry.system.update(dt)
            entry.system.draw()
            entry.system.count += 1
            if entry.system.count == CLICK_EXPLODE_COUNT and not entry.exploded:
                entry.system.explode_particles(CLICK_BURST)
                entry.exploded = True

        for launch in self.launches:
            if self.counter >= launch.start:
                launch.system.update(dt)
                launch.system.draw()
                launch.system.count += 1
            if self.counter >= launch.explode_at and not launch.exploded:
                launch.system.explode_particles(launch.burst)
                launch.exploded = True

        self.counter += 1
        return self.renderer.take_draw_calls()


def _clamp_unit(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def _paint(surface, renderer: Renderer, calls: list[DrawCall]) -> None:
    import pygame

    width, height = surface.get_size()
    view_projection = renderer.view_projection()
    focal = renderer.projection[1, 1]
    for call in calls:
        clip = view_projection @ np.array([*call.position, 1.0])
        if clip[3] <= 0:
            continue
        ndc = clip[:3] / clip[3]
        if abs(ndc[0]) > 1.2 or abs(ndc[1]) > 1.2:
            continue
        sx = (ndc[0] + 1.0) * 0.5 * width
        sy = (1.0 - ndc[1]) * 0.5 * height
        side = max(1, int(call.size * focal / clip[3] * height / 2.0))
        r, g, b, a = (_clamp_unit(c) for c in call.color)
        position = (int(sx), int(sy) - side)
        if call.blend_mode is BlendMode.ADD:
            sprite = pygame.Surface((side, side))
            sprite.fill((int(r * a * 255), int(g * a * 255), int(b * a * 255)))
            surface.blit(sprite, position, special_flags=pygame.BLEND_RGB_ADD)
        elif call.blend_mode is BlendMode.ALPHA:
            sprite = pygame.Surface((side, side), pygame.SRCALPHA)
            sprite.fill((int(r * 255), int(g * 255), int(b * 255), int(a * 255)))
            surface.blit(sprite, position)
        else:
            pygame.draw.rect(
                surface,
                (int(r * 255), int(g * 255), int(b * 255)),
                pygame.Rect(position, (side, side)),
            )


def main(argv: Sequence[str] | None = None) -> int:
    """Open the viewer window and run the show until it is closed or Escape is pressed."""
    parser = argparse.ArgumentParser(
        prog="skyburst",
        description="Show fireworks; click to launch more, Escape to quit.",
    )
    parser.parse_args(argv)

    os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
    import pygame

    pygame.init()
    try:
        try:
            screen = pygame.display.set_mode(
                (WINDOW_SIZE, WINDOW_SIZE), pygame.RESIZABLE
            )
        except pygame.error as exc:
            print(f"cannot open window: {exc}", file=sys.stderr)
            return 1
        pygame.display.set_caption(WINDOW_TITLE)

        try:
            show = FireworksShow()
        except OSError as exc:
            print(f"cannot load resources: {exc}", file=sys.stderr)
            return 1

        clock = pygame.time.Clock()
        clock.tick()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    x, y = event.pos
                    wx, wy = screen_to_world(x, y)
                    print(f"click {wx:g} {wy:g}")
                    show.click(x, y)
                elif event.type == pygame.VIDEORESIZE:
                    show.renderer.perspective(math.radians(60.0), 1.0, 0.1, 100.0)

            dt = clock.tick(60) / 1000.0
            screen.fill((0, 0, 0))
            _paint(screen, show.renderer, show.step(dt))
            pygame.display.flip()
        return 0
    finally:
        pygame.quit()


if __name__ == "__main__":
    sys.exit(main())