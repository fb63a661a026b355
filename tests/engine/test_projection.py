# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

"""Tests for src/domview/engine/projection.py"""

import numpy as np
import pytest

from domview.engine.projection import Orientation, calculate_inertia_orientation


@pytest.fixture
def elongated_coordinates() -> np.ndarray:
    """Points spread mostly along z, a little along y, shifted from origin."""
    rng = np.random.default_rng(7)
    points = rng.normal(size=(200, 3)) * np.array([0.5, 2.0, 10.0])
    return points + np.array([5.0, -3.0, 12.0])


def test_orientation_is_a_proper_rotation(elongated_coordinates):
    orientation = calculate_inertia_orientation(elongated_coordinates)
    rotation = orientation.rotation
    np.testing.assert_allclose(rotation.T @ rotation, np.eye(3), atol=1e-8)
    assert np.linalg.det(rotation) == pytest.approx(1.0)
    np.testing.assert_allclose(orientation.center, elongated_coordinates.mean(axis=0))


def test_projection_puts_largest_spread_on_x(elongated_coordinates):
    projected = calculate_inertia_orientation(elongated_coordinates).project(
        elongated_coordinates
    )
    assert projected.shape == (200, 2)
    np.testing.assert_allclose(projected.mean(axis=0), 0.0, atol=1e-8)
    spread = projected.std(axis=0)
    assert spread[0] > spread[1]
    assert spread[0] == pytest.approx(elongated_coordinates[:, 2].std(), rel=0.1)


def test_empty_coordinates():
    orientation = calculate_inertia_orientation(np.zeros((0, 3)))
    np.testing.assert_array_equal(orientation.rotation, np.eye(3))
    assert orientation.project(np.zeros((0, 3))).shape == (0, 2)


def test_orientation_validates_shapes():
    with pytest.raises(ValueError, match="3x3"):
        Orientation(rotation=np.eye(2), center=np.zeros(3))
    with pytest.raises(ValueError, match="shape"):
        Orientation(rotation=np.eye(3), center=np.zeros(2))
