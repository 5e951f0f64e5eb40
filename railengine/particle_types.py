"""Data types shared by the particle system and model loading."""

from __future__ import annotations

from dataclasses import dataclass, field

from .structs import AABB, Matrix4x4, Transform, Vector2, Vector3, Vector4


def _white() -> Vector4:
    return Vector4(1.0, 1.0, 1.0, 1.0)


@dataclass
class ParticleInstance:
    """Per-instance data handed to the renderer for one particle."""

    wvp: Matrix4x4 = field(default_factory=Matrix4x4.identity)
    world: Matrix4x4 = field(default_factory=Matrix4x4.identity)
    color: Vector4 = field(default_factory=_white)


@dataclass
class VertexData:
    position: Vector4 = field(default_factory=Vector4)
    texcoord: Vector2 = field(default_factory=Vector2)
    normal: Vector3 = field(default_factory=Vector3)


@dataclass
class MaterialData:
    texture_file_path: str = ""
    texture_index: int = 0


@dataclass
class Node:
    """Node of a model's scene hierarchy."""

    local_matrix: Matrix4x4 = field(default_factory=Matrix4x4.identity)
    name: str = ""
    children: list[Node] = field(default_factory=list)


@dataclass
class ModelData:
    vertices: list[VertexData] = field(default_factory=list)
    material: MaterialData = field(default_factory=MaterialData)
    root_node: Node = field(default_factory=Node)


@dataclass
class Particle:
    transform: Transform = field(
        default_factory=lambda: Transform(Vector3(1.0, 1.0, 1.0), Vector3(), Vector3())
    )
    velocity: Vector3 = field(default_factory=Vector3)
    color: Vector4 = field(default_factory=_white)
    life_time: float = 0.0
    current_time: float = 0.0

    @property
    def expired(self) -> bool:
        """True once the particle has lived its whole lifetime."""
        return self.current_time >= self.life_time


@dataclass
class AccelerationField:
    """Constant acceleration applied to particles inside an area."""

    acceleration: Vector3 = field(default_factory=Vector3)
    area: AABB = field(default_factory=AABB)


@dataclass
class ParticleGroup:
    """Particles sharing one texture, plus their instance buffer."""

    material_data: MaterialData = field(default_factory=MaterialData)
    particles: list[Particle] = field(default_factory=list)
    srv_index: int = 0
    instance_count: int = 0
    instance_data: list[ParticleInstance] = field(default_factory=list)

    def remove_expired(self) -> int:
        """Drop particles whose lifetime is over; return how many were dropped."""
        before = len(self.particles)
        self.particles = [particle for particle in self.particles if not particle.expired]
        return before - len(self.particles)