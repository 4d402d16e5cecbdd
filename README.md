# skyburst

Skyburst is a small firework simulation. Rockets made of billboard
particles fall as a trail, then burst into a sphere of coloured sparks that
drop under gravity. A renderer keeps the camera and projection and records
every sprite as a `DrawCall`; an interactive pygame window paints those
calls and lets you launch more fireworks with the mouse.

The package also has two small command-line solvers: one lists every
solution of the N-Queens puzzle, the other tells whether a directed graph
contains a cycle.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Resource files

Particle systems load two shader files and a fire texture by relative path
from the current working directory:

- `shaders/billboard.vs` and `shaders/billboard.fs` (read as text by
  `Renderer.init`),
- `textures/ParticleFirecloud.png` (loaded as an `Image` by
  `MyParticleSystem.create_particles` and by `Renderer.fire`).

These files are not part of the package. Run the demo, or call
`ParticleSystem.init`, from a directory that holds them; otherwise an
`OSError` is raised (the demo prints `cannot load resources: ...` and exits
with status 1). The paths can be changed through the class attributes
`ParticleSystem.vertex_shader`, `ParticleSystem.fragment_shader`,
`MyParticleSystem.fire_texture_path` and the attribute
`Renderer.fire_texture_path`.

## The fireworks demo

```
skyburst-demo
```

Four fireworks run on a frame timetable: the first from the start, bursting
at frame 3500 into 100 sparks; the second from frame 3500, bursting at 6800
into 250; the third from 6000, bursting at 8000 into 100; the fourth from
8500, bursting at 10000 into 200. Each firework also bursts by itself on
its 3200th update. A left click launches a firework of random colour three
units above the clicked point; it bursts into 150 sparks once its counter
reaches 100. The click position in world units is printed. Press Escape or
close the window to quit.

## Using the particle systems in code

```python
from skyburst.particles import MyParticleSystem, get_renderer

renderer = get_renderer()
renderer.perspective(0.785, 1.0, 0.1, 10.0)
renderer.look_at((0, 0, 8), (0, 0, 0))

rocket = MyParticleSystem(renderer, None)
rocket.set_offset((1.5, 2.0, 0.0))
rocket.set_color((0.6, 0.2, 0.8))
rocket.init(100)          # needs the resource files above

for _ in range(100):
    rocket.update(1 / 60)
    rocket.draw()

rocket.explode_particles(150)
calls = renderer.take_draw_calls()
```

Both `ParticleSystem` and `FireworksShow` take an optional
`random.Random` as `rng`, so runs can be made repeatable.

`skyburst.renderer` holds the `Renderer`, the `BlendMode` enum
(`DEFAULT`, `ADD`, `ALPHA`), `DrawCall`, and the matrix helpers
`perspective_matrix`, `ortho_matrix` and `look_at_matrix`.
`Renderer.project(pos)` gives normalised device coordinates of a point, or
`None` if it lies behind the camera.

`FireworksShow` in `skyburst.demo` holds the whole timetable: call
`step(dt)` once per frame to get that frame's draw calls, and
`click(x, y)` with window coordinates to add a firework.
`screen_to_world(x, y)` gives the world position a click maps to.

The helpers in `skyburst.vecmath` (`random_float`, `random_unit_cube`,
`random_unit_square`, `random_unit_sphere`, `random_unit_disk`,
`random_hemisphere`, `random_unit_vector`, `near_zero`, `format_vector`,
`format_matrix`) and the `Image` class in `skyburst.image` (`Image.load`,
`save` as PNG, per-pixel access with `get`/`set` as `Pixel` or with
`get_vec3`/`set_vec3` as colours in `[0, 1]`) can be used on their own.

## What it does not do

The renderer does not compile shaders or talk to a graphics card: it only
reads the shader text and records draw calls. The demo window paints each
call as a flat coloured square with pygame; textures, including the
animated fire sheet, are loaded but not drawn.

## N-Queens

```
echo 4 | skyburst-queens
```

Reads the board size from standard input and prints every solution, one
board per block followed by a blank line, with `Q` for a queen and `.` for
an empty square. In code:

```python
from skyburst.nqueens import solve_queens

boards = solve_queens(4)
len(boards)   # 2
```

## Circular dependencies

```
printf '3 3\n0 1\n1 2\n2 0\n' | skyburst-cycles
```

Reads the number of nodes and edges, then one `from to` pair per edge, and
prints `True` if the graph has a cycle and `False` otherwise. Malformed
input or a node outside `0..n-1` is reported on standard error with exit
status 1. In code:

```python
from skyburst.cycles import has_circular_dependency

has_circular_dependency(3, [(0, 1), (1, 2), (2, 0)])   # True
has_circular_dependency(3, [(0, 1), (1, 2)])           # False
```