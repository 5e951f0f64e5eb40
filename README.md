# railengine

The platform-independent core of a small real-time 3D game engine, in plain Python with no
third-party dependencies.

## What is inside

- `railengine.structs`: value types. These are `Vector2`, `Vector3`, `Vector4`,
  `Matrix3x3` and `Matrix4x4` (with `Matrix4x4.identity()` and `Matrix4x4.zero()`).
  Shape types are `Transform`, `AABB`, `Sphere`, `Plane`, `Line`, `Ray`, `Segment`,
  `Triangle` and `Capsule`. Simple physics records are `Spring`, `Ball`, `Pendulum` and
  `ConicalPendulum`.
- `railengine.linalg`: vector and matrix arithmetic (`add`, `subtract`, `multiply`, `dot`,
  `cross`, `length`, `distance`, `normalize`, `lerp`, `bezier`, `project`, `reflect`,
  `perpendicular`, `clamp`) and the row-vector matrix builders:
  - translation, scale and rotation: `make_translate_matrix`, `make_scale_matrix`,
    `make_rotate_x_matrix`, `make_rotate_y_matrix`, `make_rotate_z_matrix`
  - combined transforms: `make_affine_matrix`
  - projections and viewport: `make_perspective_fov_matrix`, `make_orthographic_matrix`,
    `make_viewport_matrix`
  - general operations: `make_identity4x4`, `inverse` (raises `ValueError` for a singular
    matrix), `transpose`, `transform`, `transform_normal`
- `railengine.geometry`: `is_collision(a, b)` for pairs of spheres, planes, segments,
  triangles, AABBs and points, in either order (`TypeError` for an unsupported pair). It
  also holds `closest_point`, `closest_point_aabb_sphere`, `is_point_inside_aabb` and
  `plane_from_points`.
- `railengine.curves`: Catmull-Rom splines in three forms:
  - `catmull_rom`: one segment from four points
  - `catmull_rom_path`: a whole open path of at least four points
  - `catmull_rom_loop`: a closed loop

  It also has arc-length tools (`calculate_arc_length`, `calculate_arc_lengths`,
  `find_t_by_arc_length`, `get_t_from_arc_length`), plus `curvature` and
  `adaptive_sampling`.
- `railengine.camera`: `Camera` with perspective projection, `update_matrix` (optionally
  following a target), `transfer_matrix` and `look_at`.
- `railengine.keyboard`: `Keyboard` keeps the current and previous frame of 256 key states,
  fed through `update(state)`, and answers `push_key` and `trigger_key`.
- `railengine.descriptors`: `descriptor_handle` computes handle offsets and
  `DescriptorAllocator` hands out consecutive slots of a fixed-size heap (512 by default).
- `railengine.particle_types`: `Particle`, `ParticleGroup`, `ParticleInstance`,
  `AccelerationField` and model records (`VertexData`, `MaterialData`, `Node`, `ModelData`).
- `railengine.particles`: `ParticleManager` creates named groups, emits randomised particles,
  and on `update` drops expired ones, moves and ages the rest (with an optional acceleration
  field) and fills per-instance world, WVP and colour data, with a billboard mode.
- `railengine.emitter`: `ParticleEmitter` emits into a group at a fixed frequency and each
  frame lifts, ages and culls the particles of every group.

## Example

```python
from railengine.structs import Vector3, Sphere
from railengine.linalg import make_affine_matrix, transform
from railengine.geometry import is_collision

world = make_affine_matrix(Vector3(1, 1, 1), Vector3(0, 0, 0), Vector3(10, 0, 0))
print(transform(Vector3(1, 2, 3), world))   # Vector3(x=11.0, y=2.0, z=3.0)

print(is_collision(Sphere(Vector3(0, 0, 0), 1.0), Sphere(Vector3(1.5, 0, 0), 1.0)))  # True
```

## What it does not do

The package computes state only. It opens no window, draws nothing, and reads no keyboard
device: key states are handed to `Keyboard.update`. It has no scene management, no texture
loading and no main loop; a game built on it supplies those.

## Installing

```
pip install .
```

The `test` extra installs pytest for running the tests in `tests/`.