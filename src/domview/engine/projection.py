# Copyright 2024 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

from dataclasses import dataclass

import numpy as np


@dataclass
class Orientation:
    """Rotation and center that put a model's principal axes on x and y."""

    rotation: np.ndarray
    center: np.ndarray

    def __post_init__(self):
        if self.rotation.shape != (3, 3):
            raise ValueError("Rotation matrix must be 3x3")
        if self.center.shape != (3,):
            raise ValueError("Center must have shape (3,)")

    def project(self, coordinates: np.ndarray) -> np.ndarray:
        """Map Nx3 model coordinates to Nx2 view coordinates.

        Depth is dropped; x follows the axis of largest spread.
        """
        if len(coordinates) == 0:
            return np.zeros((0, 2))
        rotated = (coordinates - self.center) @ self.rotation
        return rotated[:, :2]


def calculate_inertia_orientation(coordinates: np.ndarray) -> Orientation:
    """Orient a coordinate set along its principal axes of inertia.

    Unit weights are used. The eigenvector with the smallest moment of
    inertia is the axis of largest spread and becomes x.

    Args:
        coordinates: Nx3 array of atom coordinates
    """
    if len(coordinates) == 0:
        return Orientation(rotation=np.eye(3), center=np.zeros(3))

    center = np.mean(coordinates, axis=0)
    centered = coordinates - center

    r_squared = np.sum(centered * centered)
    inertia_tensor = r_squared * np.eye(3) - centered.T @ centered

    _, eigenvectors = np.linalg.eigh(inertia_tensor)
    rotation = eigenvectors

    if np.linalg.det(rotation) < 0:
        rotation[:, 2] *= -1

    return Orientation(rotation=rotation, center=center)
