"""Game-engine core: math, collision, splines, camera, keyboard state and particles."""

__version__ = "0.1.0"

__all__ = [
    "structs",
    "linalg",
    "geometry",
    "camera",
    "curves",
    "keyboard",
    "descriptors",
    "particle_types",
    "particles",
    "emitter",
]