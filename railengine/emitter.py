"""Emitter that spawns particles into a named group at a fixed frequency."""

from __future__ import annotations

from .linalg import add
from .particles import DELTA_TIME, ParticleManager
from .structs import Transform, Vector3

_RISE_PER_FRAME = Vector3(0.0, 0.1, 0.0)


class ParticleEmitter:
    """Emits count particles into a group every frequency seconds.

    Each update also lifts and ages every particle in every group of the
    manager and drops the ones whose lifetime is over.
    """

    def __init__(
        self,
        manager: ParticleManager,
        name: str,
        transform: Transform,
        count: int,
        frequency: float,
        frequency_time: float = 0.0,
    ) -> None:
        self.manager = manager
        self.name = name
        self.transform = transform
        self.count = count
        self.frequency = frequency
        self.frequency_time = frequency_time
        self.delta_time = DELTA_TIME

    def update(self) -> None:
        """Advance one frame: emit when due, then move, age and cull particles."""
        self.frequency_time += self.delta_time
        if self.frequency <= self.frequency_time:
            self.emit()
            self.frequency_time -= self.frequency

        for group in self.manager.particle_groups.values():
            for particle in group.particles:
                particle.transform.translate = add(particle.transform.translate, _RISE_PER_FRAME)
                particle.current_time += self.delta_time
            group.remove_expired()

    def emit(self) -> None:
        """Emit count particles at the emitter's position."""
        self.manager.emit(self.name, self.transform.translate, self.count)