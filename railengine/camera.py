"""Perspective camera holding its transform and derived matrices."""

from __future__ import annotations

import math

from .linalg import (
    cross,
    inverse,
    make_affine_matrix,
    make_perspective_fov_matrix,
    multiply,
    normalize,
    subtract,
)
from .structs import Matrix4x4, Transform, Vector3

_FOLLOW_DISTANCE = 2.0


class Camera:
    """Camera with scale/rotation/translation and cached view-projection."""

    def __init__(
        self,
        fov_y: float = 0.45,
        aspect_ratio: float = 1280 / 720,
        near_clip: float = 0.1,
        far_clip: float = 1000.0,
    ) -> None:
        self.fov_y = fov_y
        self.aspect_ratio = aspect_ratio
        self.near_clip = near_clip
        self.far_clip = far_clip
        self.transform = Transform(
            Vector3(1.0, 1.0, 1.0), Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, 0.0)
        )
        self.world_matrix: Matrix4x4 = self._world()
        self.view_matrix: Matrix4x4 = inverse(self.world_matrix)
        self.projection_matrix: Matrix4x4 = self._projection()
        self.view_projection_matrix: Matrix4x4 = multiply(
            self.view_matrix, self.projection_matrix
        )

    def _world(self, translate: Vector3 | None = None) -> Matrix4x4:
        return make_affine_matrix(
            self.transform.scale,
            self.transform.rotate,
            self.transform.translate if translate is None else translate,
        )

    def _projection(self) -> Matrix4x4:
        return make_perspective_fov_matrix(
            self.fov_y, self.aspect_ratio, self.near_clip, self.far_clip
        )

    def update_matrix(self, target_position: Vector3 | None = None) -> None:
        """Recompute the matrices; with a target, first move to follow it.

        When following a target the view matrix is left as it was; only the
        world, projection and view-projection matrices are refreshed.
        """
        if target_position is None:
            self.world_matrix = self._world()
            self.view_matrix = inverse(self.world_matrix)
        else:
            direction = normalize(subtract(target_position, self.transform.translate))
            self.transform.translate = subtract(
                target_position, multiply(direction, _FOLLOW_DISTANCE)
            )
            self.world_matrix = self._world()
        self.projection_matrix = self._projection()
        self.view_projection_matrix = multiply(self.view_matrix, self.projection_matrix)

    def transfer_matrix(self) -> None:
        """Take the position from the inverted world matrix and refresh view-projection."""
        row = inverse(self.world_matrix).m[3]
        self.transform.translate = Vector3(row[0], row[1], row[2])
        self.view_projection_matrix = multiply(self.view_matrix, self.projection_matrix)

    def look_at(
        self, camera_position: Vector3, target_position: Vector3, up_vector: Vector3
    ) -> None:
        """Aim from camera_position at target_position by setting pitch and yaw."""
        forward = normalize(subtract(target_position, camera_position))
        # The right vector is derived but only pitch and yaw are applied.
        normalize(cross(up_vector, forward))
        self.transform.rotate.x = math.atan2(
            forward.y, math.sqrt(forward.x * forward.x + forward.z * forward.z)
        )
        self.transform.rotate.y = math.atan2(forward.x, forward.z)
        self.world_matrix = self._world(camera_position)
        self.view_matrix = inverse(self.world_matrix)
        self.projection_matrix = self._projection()
        self.view_projection_matrix = multiply(self.view_matrix, self.projection_matrix)