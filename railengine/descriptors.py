"""Descriptor handle arithmetic and a linear shader-resource-view slot allocator."""

from __future__ import annotations

MAX_SRV_COUNT = 512


def descriptor_handle(heap_start: int, descriptor_size: int, index: int) -> int:
    """Address of the descriptor at index in a heap starting at heap_start."""
    return heap_start + descriptor_size * index


class DescriptorAllocator:
    """Hands out descriptor slots in order from a heap of fixed capacity.

    Slots are never returned; once max_count slots are taken, allocation fails.
    """

    def __init__(
        self,
        descriptor_size: int,
        cpu_heap_start: int = 0,
        gpu_heap_start: int = 0,
        max_count: int = MAX_SRV_COUNT,
    ) -> None:
        if max_count < 0:
            raise ValueError("max_count must not be negative")
        self.descriptor_size = descriptor_size
        self.cpu_heap_start = cpu_heap_start
        self.gpu_heap_start = gpu_heap_start
        self.max_count = max_count
        self._next_index = 0

    @property
    def used(self) -> int:
        """Number of slots handed out so far."""
        return self._next_index

    def allocate(self) -> int:
        """Reserve the next free slot and return its index."""
        if not self.has_room():
            raise RuntimeError(f"all {self.max_count} descriptor slots are in use")
        index = self._next_index
        self._next_index += 1
        return index

    def has_room(self) -> bool:
        """True while at least one more slot can be allocated."""
        return self.max_count > self._next_index

    def cpu_handle(self, index: int) -> int:
        return descriptor_handle(self.cpu_heap_start, self.descriptor_size, self._check(index))

    def gpu_handle(self, index: int) -> int:
        return descriptor_handle(self.gpu_heap_start, self.descriptor_size, self._check(index))

    def _check(self, index: int) -> int:
        if not 0 <= index < self.max_count:
            raise IndexError(f"descriptor index {index} is outside the heap")
        return index