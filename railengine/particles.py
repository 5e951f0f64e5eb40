"""Particle groups: emission with random spread, motion, ageing and instance data."""

from __future__ import annotations

import math
import random

from .descriptors import DescriptorAllocator
from .geometry import is_point_inside_aabb
from .linalg import (
    add,
    inverse,
    make_affine_matrix,
    make_perspective_fov_matrix,
    make_rotate_y_matrix,
    make_scale_matrix,
    multiply,
)
from .particle_types import (
    AccelerationField,
    MaterialData,
    ModelData,
    Particle,
    ParticleGroup,
    ParticleInstance,
    VertexData,
)
from .structs import Matrix4x4, Transform, Vector2, Vector3, Vector4

MAX_INSTANCES = 100
DELTA_TIME = 1.0 / 60.0

_CAMERA_TRANSFORM = Transform(
    Vector3(1.0, 1.0, 1.0),
    Vector3(math.pi / 3.0, math.pi, 0.0),
    Vector3(0.0, 23.0, 10.0),
)
_FOV_Y = 0.45
_ASPECT_RATIO = 1280 / 720
_NEAR_CLIP = 0.1
_FAR_CLIP = 100.0


def _quad_model() -> ModelData:
    """Two triangles forming a unit quad facing +Z."""
    normal = (0.0, 0.0, 1.0)
    corners = [
        ((1.0, 1.0), (0.0, 0.0)),
        ((-1.0, 1.0), (1.0, 0.0)),
        ((1.0, -1.0), (0.0, 1.0)),
        ((1.0, -1.0), (0.0, 1.0)),
        ((-1.0, 1.0), (1.0, 0.0)),
        ((-1.0, -1.0), (1.0, 1.0)),
    ]
    return ModelData(
        vertices=[
            VertexData(Vector4(x, y, 0.0, 1.0), Vector2(u, v), Vector3(*normal))
            for (x, y), (u, v) in corners
        ]
    )


class ParticleManager:
    """Owns named particle groups and advances them one fixed frame at a time."""

    def __init__(
        self,
        srv_allocator: DescriptorAllocator | None = None,
        rng: random.Random | None = None,
        max_instances: int = MAX_INSTANCES,
    ) -> None:
        self.srv_allocator = srv_allocator if srv_allocator is not None else DescriptorAllocator(0)
        self.rng = rng if rng is not None else random.Random()
        self.max_instances = max_instances
        self.delta_time = DELTA_TIME
        self.use_billboard = True
        self.use_wind = False
        self.acceleration_field = AccelerationField()
        self.particle_groups: dict[str, ParticleGroup] = {}
        self.model_data = _quad_model()
        self.first_particle_position = Vector3()

        camera_matrix = make_affine_matrix(
            _CAMERA_TRANSFORM.scale, _CAMERA_TRANSFORM.rotate, _CAMERA_TRANSFORM.translate
        )
        projection = make_perspective_fov_matrix(_FOV_Y, _ASPECT_RATIO, _NEAR_CLIP, _FAR_CLIP)
        self.view_projection_matrix: Matrix4x4 = multiply(inverse(camera_matrix), projection)

        billboard = multiply(make_rotate_y_matrix(math.pi), camera_matrix)
        billboard.m[3][0] = billboard.m[3][1] = billboard.m[3][2] = 0.0
        self.billboard_matrix: Matrix4x4 = billboard

    def create_particle_group(self, name: str, texture_file_path: str) -> ParticleGroup:
        """Register a group drawn with the given texture; an existing name is kept."""
        existing = self.particle_groups.get(name)
        if existing is not None:
            return existing
        srv_index = self.srv_allocator.allocate()
        group = ParticleGroup(
            material_data=MaterialData(texture_file_path, srv_index),
            srv_index=srv_index,
            instance_data=[ParticleInstance() for _ in range(self.max_instances)],
        )
        self.particle_groups[name] = group
        return group

    def emit(self, name: str, position: Vector3, count: int) -> None:
        """Add count randomised particles around position to the named group."""
        try:
            group = self.particle_groups[name]
        except KeyError:
            raise KeyError(f"particle group {name!r} is not registered") from None

        spread = lambda: self.rng.uniform(-1.0, 1.0)  # noqa: E731
        shade = lambda: self.rng.uniform(0.0, 1.0)  # noqa: E731
        for _ in range(count):
            # The first random offset is drawn but replaced, as the emitter always did.
            Vector3(spread(), spread(), spread())
            color = Vector4(shade(), shade(), shade(), 1.0)
            life_time = self.rng.uniform(1.0, 3.0)
            offset = Vector3(spread(), spread(), spread())
            velocity = Vector3(spread(), spread(), spread())
            group.particles.append(
                Particle(
                    transform=Transform(
                        Vector3(1.0, 1.0, 1.0), Vector3(0.0, 0.0, 0.0), add(position, offset)
                    ),
                    velocity=velocity,
                    color=color,
                    life_time=life_time,
                    current_time=0.0,
                )
            )

    def update(self) -> None:
        """Drop expired particles, move and age the rest, and fill instance data."""
        for group in self.particle_groups.values():
            group.instance_count = 0
            alive: list[Particle] = []
            for particle in group.particles:
                if particle.life_time <= particle.current_time:
                    continue
                alive.append(particle)
                if group.instance_count >= self.max_instances:
                    continue
                self._advance(particle)
                if group.instance_count == 0:
                    self.first_particle_position = Vector3(*particle.transform.translate)
                self._write_instance(group, particle)
                group.instance_count += 1
            group.particles = alive

    def _advance(self, particle: Particle) -> None:
        dt = self.delta_time
        field = self.acceleration_field
        if self.use_wind and is_point_inside_aabb(particle.transform.translate, field.area):
            particle.velocity = add(particle.velocity, multiply(dt, field.acceleration))
        particle.transform.translate = add(
            particle.transform.translate, multiply(dt, particle.velocity)
        )
        particle.current_time += dt

    def _write_instance(self, group: ParticleGroup, particle: Particle) -> None:
        alpha = 1.0 - particle.current_time / particle.life_time
        if self.use_billboard:
            world = multiply(make_scale_matrix(particle.transform.scale), self.billboard_matrix)
        else:
            world = make_affine_matrix(
                particle.transform.scale, particle.transform.rotate, particle.transform.translate
            )
        instance = group.instance_data[group.instance_count]
        instance.world = world
        instance.wvp = multiply(world, self.view_projection_matrix)
        instance.color = Vector4(particle.color.x, particle.color.y, particle.color.z, alpha)