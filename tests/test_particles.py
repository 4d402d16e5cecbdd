import random

import numpy as np
import pytest

from skyburst.image import Image
from skyburst.particles import (
    AUTO_EXPLODE_COUNT,
    PARKED_POSITION,
    TRAIL_LENGTH,
    MyParticleSystem,
    Particle,
    ParticleSystem,
    get_renderer,
)
from skyburst.renderer import BlendMode, Renderer


@pytest.fixture
def assets(tmp_path):
    vs = tmp_path / "billboard.vs"
    fs = tmp_path / "billboard.fs"
    vs.write_text("void main() {}\n")
    fs.write_text("void main() {}\n")
    tex = tmp_path / "fire.png"
    Image(8, 4).save(tex)
    return vs, fs, tex


@pytest.fixture
def renderer(assets):
    vs, fs, tex = assets
    r = Renderer()
    r.init(vs, fs)
    r.fire_texture_path = tex
    r.look_at((0.0, 0.0, 8.0), (0.0, 0.0, 0.0))
    return r


def make_system(renderer, assets, seed=1, offset=(1.5, 2.0, 0.0), color=(0.6, 0.2, 0.8)):
    system = MyParticleSystem(renderer, random.Random(seed))
    system.fire_texture_path = assets[2]
    system.set_offset(offset)
    system.set_color(color)
    system.init(100)
    return system


def test_get_renderer_is_shared():
    assert get_renderer() is get_renderer()
    assert MyParticleSystem().renderer is get_renderer()


def test_base_class_is_abstract():
    with pytest.raises(TypeError):
        ParticleSystem()


def test_init_initializes_renderer(assets):
    vs, fs, tex = assets
    r = Renderer()
    system = MyParticleSystem(r, random.Random(0))
    system.vertex_shader = vs
    system.fragment_shader = fs
    system.fire_texture_path = tex
    system.init(5)
    assert r.initialized
    assert system.fire_texture in r.textures
    assert len(system.particles) == TRAIL_LENGTH


def test_trail_particles(renderer, assets):
    system = make_system(renderer, assets)
    assert len(system.particles) == TRAIL_LENGTH
    for p in system.particles:
        assert p.pos[0] == 1.5 and p.pos[2] == 0.0
        assert 2.0 <= p.pos[1] < 2.05
        assert p.vel[0] == 0.0 and p.vel[2] == 0.0
        assert -2.0 <= p.vel[1] < 0.0
        assert p.size == 0.1
        assert p.color[3] == 0.95
        assert np.all(p.color[:3] >= system.fw_color)
        assert np.all(p.color[:3] < system.fw_color + 0.1)


def test_same_seed_same_particles(renderer, assets):
    a = make_system(renderer, assets, seed=7)
    b = make_system(renderer, assets, seed=7)
    assert [p.pos.tolist() for p in a.particles] == [p.pos.tolist() for p in b.particles]


def test_explode_particles(renderer, assets):
    system = make_system(renderer, assets)
    system.last_trail_pos = np.array([0.5, -1.0, 0.25])
    system.explode_particles(50)
    assert len(system.particles) == 50
    for p in system.particles:
        assert p.pos.tolist() == [0.5, -1.0, 0.25]
        assert 0.5 <= np.linalg.norm(p.vel) < 1.5 + 1e-9
        assert p.color[3] == 1.0


def test_update_moves_particles_and_counts(renderer, assets):
    system = make_system(renderer, assets)
    system.particles = [Particle(pos=np.array([0.0, 0.0, 0.0]), vel=np.array([1.0, 0.0, 0.0]),
                                 color=np.array([1.0, 1.0, 1.0, 1.0]), size=0.1)]
    system.update(0.5)
    assert system.count == 1
    p = system.particles[0]
    assert p.pos.tolist() == [0.5, 0.0, 0.0]
    assert p.vel[1] < 0.0


def test_update_records_trail_tip(renderer, assets):
    system = make_system(renderer, assets)
    tip = system.particles[TRAIL_LENGTH - 1].pos.copy()
    system.update(0.01)
    assert system.last_trail_pos.tolist() == tip.tolist()


def test_translucent_particle_below_floor_is_parked(renderer, assets):
    system = make_system(renderer, assets)
    system.particles = [Particle(pos=np.array([1.5, -5.0, 0.0]), vel=np.array([0.0, -1.0, 0.0]),
                                 color=np.array([1.0, 1.0, 1.0, 0.95]), size=0.1)]
    system.update(0.1)
    assert system.particles[0].pos.tolist() == list(PARKED_POSITION)
    assert system.particles[0].vel.tolist() == [0.0, 0.0, 0.0]


def test_opaque_particle_below_floor_keeps_falling(renderer, assets):
    system = make_system(renderer, assets)
    system.particles = [Particle(pos=np.array([1.5, -5.0, 0.0]), vel=np.array([0.0, -1.0, 0.0]),
                                 color=np.array([1.0, 1.0, 1.0, 1.0]), size=0.1)]
    system.update(0.1)
    assert system.particles[0].pos[1] < -5.0


def test_update_explodes_automatically(renderer, assets):
    system = make_system(renderer, assets)
    system.count = AUTO_EXPLODE_COUNT - 1
    system.update(0.01)
    assert len(system.particles) == 100
    assert all(p.color[3] == 1.0 for p in system.particles)


def test_update_sorts_far_to_near(renderer, assets):
    system = make_system(renderer, assets)
    system.explode_particles(60)
    system.update(0.05)
    camera = renderer.camera_position
    distances = [np.linalg.norm(camera - p.pos) for p in system.particles]
    assert distances == sorted(distances, reverse=True)


def test_remove_trail(renderer, assets):
    system = make_system(renderer, assets)
    system.remove_trail()
    for p in system.particles:
        assert p.pos.tolist() == list(PARKED_POSITION)
        assert p.color[3] == 0.0
        assert p.vel.tolist() == [0.0, 0.0, 0.0]


def test_draw_repeats_first_particle(renderer, assets):
    system = make_system(renderer, assets)
    renderer.take_draw_calls()
    system.draw()
    calls = renderer.take_draw_calls()
    assert len(calls) == TRAIL_LENGTH + 1
    assert calls[0] == calls[1]
    assert calls[0].position == tuple(system.particles[0].pos.tolist())
    assert all(c.blend_mode is BlendMode.ADD for c in calls)


def test_draw_empty_raises(renderer):
    system = MyParticleSystem(renderer, random.Random(0))
    with pytest.raises(IndexError):
        system.draw()


def test_draw_object_draws_one(renderer, assets):
    system = make_system(renderer, assets)
    renderer.take_draw_calls()
    system.draw_object()
    assert len(renderer.take_draw_calls()) == 1


def test_draw_fire_and_smoke(renderer, assets):
    system = make_system(renderer, assets)
    renderer.take_draw_calls()
    system.draw_fire()
    fire = renderer.take_draw_calls()
    assert [c.kind for c in fire] == ["fire"] * TRAIL_LENGTH
    system.draw_smoke()
    system.draw_pieces()
    system.delete_object()
    rest = renderer.take_draw_calls()
    assert len(rest) == 3 * TRAIL_LENGTH
    assert {c.kind for c in rest} == {"quad"}


def test_set_delay_count(renderer, assets):
    system = make_system(renderer, assets)
    system.set_delay_count(40)
    system.set_delay_count(2)
    assert system.count == 42