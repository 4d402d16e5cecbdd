"""Particle systems: a shared base and the firework trail-and-burst system."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Sequence

import numpy as np

from .image import PathType
from .renderer import FIRE_TEXTURE, BlendMode, Renderer
from .vecmath import near_zero, random_float, random_unit_cube

VERTEX_SHADER = "shaders/billboard.vs"
FRAGMENT_SHADER = "shaders/billboard.fs"

TRAIL_LENGTH = 20
AUTO_EXPLODE_COUNT = 3200
GRAVITY = np.array([0.0, -9.81, 0.0])
PARKED_POSITION = (0.0, 10.0, 0.0)

_shared_renderer = Renderer()


def get_renderer() -> Renderer:
    """Return the renderer shared by systems created without one."""
    return _shared_renderer


@dataclass
class Particle:
    pos: np.ndarray = field(default_factory=lambda: np.zeros(3))
    vel: np.ndarray = field(default_factory=lambda: np.zeros(3))
    color: np.ndarray = field(default_factory=lambda: np.zeros(4))
    size: float = 0.0
    mass: float = 0.0


class ParticleSystem(ABC):
    """A list of particles drawn as billboards through a renderer."""

    vertex_shader: PathType = VERTEX_SHADER
    fragment_shader: PathType = FRAGMENT_SHADER

    def __init__(
        self, renderer: Renderer | None = None, rng: random.Random | None = None
    ) -> None:
        self.renderer = renderer if renderer is not None else get_renderer()
        self.rng = rng
        self.particles: list[Particle] = []
        self.texture: int | None = None
        self.object_texture: int | None = None
        self.fire_texture: int | None = None
        self.smoke_texture: int | None = None
        self.piece_texture: int | None = None
        self.blend_mode = BlendMode.ADD
        self.count = 0

    def init(self, size: int) -> None:
        """Prepare the renderer if needed and create the particles."""
        if not self.renderer.initialized:
            self.renderer.init(self.vertex_shader, self.fragment_shader)
        self.create_particles(size)

    @abstractmethod
    def update(self, dt: float) -> None:
        """Advance the simulation by ``dt`` seconds."""

    @abstractmethod
    def create_particles(self, size: int) -> None:
        """Fill the system with its initial particles."""

    def _emit_all(
        self, texture: int | None, emit: Callable[[Sequence[float], Sequence[float], float], None]
    ) -> None:
        self.renderer.begin(texture, self.blend_mode)
        for particle in self.particles:
            emit(particle.pos, particle.color, particle.size)

    def draw(self) -> None:
        """Draw the first particle once more, then every particle."""
        self.renderer.begin(self.texture, self.blend_mode)
        first = self.particles[0]
        self.renderer.quad(first.pos, first.color, first.size)
        for particle in self.particles:
            self.renderer.quad(particle.pos, particle.color, particle.size)

    def draw_fire(self) -> None:
        self._emit_all(self.fire_texture, self.renderer.fire)

    def draw_smoke(self) -> None:
        self._emit_all(self.smoke_texture, self.renderer.quad)

    def draw_pieces(self) -> None:
        self._emit_all(self.piece_texture, self.renderer.quad)

    def draw_object(self) -> None:
        """Draw only the first particle with the object texture."""
        self.renderer.begin(self.object_texture, self.blend_mode)
        first = self.particles[0]
        self.renderer.quad(first.pos, first.color, first.size)

    def delete_object(self) -> None:
        self._emit_all(self.texture, self.renderer.quad)

    def set_delay_count(self, count: int) -> None:
        """Add ``count`` to the frame counter."""
        self.count += count


class MyParticleSystem(ParticleSystem):
    """A firework: a falling trail of particles that bursts into a sphere."""

    fire_texture_path: PathType = FIRE_TEXTURE

    def __init__(
        self, renderer: Renderer | None = None, rng: random.Random | None = None
    ) -> None:
        super().__init__(renderer, rng)
        self.offset = np.zeros(3)
        self.fw_color = np.zeros(3)
        self.last_trail_pos = np.zeros(3)

    def _jittered_color(self, spread: float, alpha: float) -> np.ndarray:
        rgb = [c + random_float(0.0, spread, self.rng) for c in self.fw_color]
        return np.array([*rgb, alpha])

    def create_particles(self, size: int) -> None:
        """Add the trail particles; ``size`` is not used, the trail length is fixed."""
        self.fire_texture = self.renderer.load_texture(self.fire_texture_path)
        for _ in range(TRAIL_LENGTH):
            pos = self.offset.copy()
            pos[1] = self.offset[1] + random_float(0.0, 0.05, self.rng)
            vel = np.array([0.0, -2.0 + random_float(0.0, 2.0, self.rng), 0.0])
            self.particles.append(
                Particle(pos=pos, vel=vel, color=self._jittered_color(0.1, 0.95), size=0.1)
            )

    def _random_direction(self) -> np.ndarray:
        while True:
            v = random_unit_cube(self.rng)
            if not near_zero(v):
                return v / np.linalg.norm(v)

    def explode_particles(self, size: int) -> None:
        """Replace all particles with ``size`` burst particles at the trail tip."""
        self.particles.clear()
        for _ in range(size):
            vel = self._random_direction() * random_float(0.5, 1.5, self.rng)
            self.particles.append(
                Particle(
                    pos=self.last_trail_pos.copy(),
                    vel=vel,
                    color=self._jittered_color(0.05, 1.0),
                    size=0.1,
                )
            )

    def remove_trail(self) -> None:
        """Park the trail particles out of view and make them transparent."""
        for particle in self.particles[:TRAIL_LENGTH]:
            particle.pos = np.array(PARKED_POSITION)
            particle.vel = np.zeros(3)
            particle.color[3] = 0.0

    def update(self, dt: float) -> None:
        self.count += 1

        if len(self.particles) >= TRAIL_LENGTH:
            self.last_trail_pos = self.particles[TRAIL_LENGTH - 1].pos.copy()

        if self.count == AUTO_EXPLODE_COUNT:
            self.explode_particles(100)

        floor = self.offset[1] - 3.0
        gravity = GRAVITY * dt
        for particle in self.particles:
            particle.pos = particle.pos + particle.vel * dt
            particle.vel = particle.vel + gravity * dt
            if particle.color[3] < 1 and particle.pos[1] <= floor:
                particle.pos = np.array(PARKED_POSITION)
                particle.vel = np.zeros(3)

        camera = self.renderer.camera_position
        self.particles.sort(key=lambda p: float(np.linalg.norm(camera - p.pos)), reverse=True)

    def set_offset(self, offset: Sequence[float]) -> None:
        self.offset = np.array(offset, dtype=float)

    def set_color(self, color: Sequence[float]) -> None:
        self.fw_color = np.array(color, dtype=float)