"""Tests for grid/world projection math."""

from isotiles.grid.models import GridPosition, Vec3
from isotiles.grid.projection import (
    approx_eq_vec3,
    grid_to_world,
    is_inside_tile,
    rotate_vector,
    world_to_grid,
)


class TestGridToWorld:
    """Test the isometric projection."""

    def test_grid_to_world(self) -> None:
        """Layer 2 is lifted by one full tile height."""
        assert grid_to_world(Vec3(1.0, 0.0, 2.0), 128.0, 64.0) == Vec3(64.0, 96.0, 2.0)

    def test_grid_to_world_inside(self) -> None:
        """Fractional grid coordinates project inside the tile."""
        assert grid_to_world(Vec3(0.5, 0.0, 0.0), 128.0, 64.0) == Vec3(32.0, 16.0, 0.0)

    def test_layers_zero_and_one_share_height(self) -> None:
        """Height bias starts above layer 1."""
        layer0 = grid_to_world(Vec3(2.0, 1.0, 0.0), 64.0, 32.0)
        layer1 = grid_to_world(Vec3(2.0, 1.0, 1.0), 64.0, 32.0)
        layer3 = grid_to_world(Vec3(2.0, 1.0, 3.0), 64.0, 32.0)

        assert layer0.y == layer1.y
        assert layer3.y == layer0.y + 2 * 32.0
        assert layer3.z == 3.0

    def test_accepts_grid_position(self) -> None:
        """GridPosition is converted to a vector."""
        assert grid_to_world(GridPosition(1, 0, 2), 128.0, 64.0) == Vec3(64.0, 96.0, 2.0)


class TestWorldToGrid:
    """Test the inverse projection."""

    def test_world_to_grid(self) -> None:
        assert world_to_grid(Vec3(64.0, 32.0, 0.0), 128.0, 64.0) == Vec3(1.0, 0.0, 0.0)

    def test_world_to_grid_inside(self) -> None:
        assert world_to_grid(Vec3(32.0, 16.0, 0.0), 128.0, 64.0) == Vec3(0.5, 0.0, 0.0)

    def test_round_trip_on_low_layers(self) -> None:
        """Round trips are exact for layers 0 and 1."""
        for layer in (0.0, 1.0):
            grid_pos = Vec3(3.0, 5.0, layer)
            world_pos = grid_to_world(grid_pos, 64.0, 32.0)
            assert world_to_grid(world_pos, 64.0, 32.0) == grid_pos

    def test_height_bias_is_not_inverted(self) -> None:
        """Layers above 1 do not round trip on y."""
        world_pos = grid_to_world(Vec3(3.0, 5.0, 2.0), 64.0, 32.0)
        assert world_to_grid(world_pos, 64.0, 32.0) != Vec3(3.0, 5.0, 2.0)


class TestHitTesting:
    """Test point-in-tile checks."""

    def test_is_inside_tile(self) -> None:
        world_pos = Vec3(312.85934, 254.7338, 0.0)
        target = Vec3(12.0, 3.0, 0.0)

        assert is_inside_tile(world_pos, target, 32.0 * 2.0, 16.0 * 2.0)

    def test_is_outside_tile(self) -> None:
        world_pos = Vec3(-2.2445679, -73.335556, 0.0)
        target = Vec3(0.0, 0.0, 0.0)

        assert not is_inside_tile(world_pos, target, 32.0, 16.0)

    def test_negative_cells_never_match(self) -> None:
        """A point left of the origin cell is rejected even for a negative target."""
        world_pos = Vec3(-20.0, 4.0, 0.0)
        floored = world_to_grid(world_pos, 32.0, 16.0).floor()

        assert floored.x < 0
        assert not is_inside_tile(world_pos, floored, 32.0, 16.0)

    def test_accepts_grid_position_target(self) -> None:
        assert is_inside_tile(Vec3(312.85934, 254.7338, 0.0), GridPosition(12, 3, 0), 64.0, 32.0)


class TestVectorHelpers:
    """Test rotation and approximate comparison."""

    def test_approx_eq_vec3(self) -> None:
        assert approx_eq_vec3(Vec3(0.0, 0.0, 0.0), Vec3(-4.371139e-8, 0.0, 0.0))

    def test_approx_eq_vec3_rejects_distant_values(self) -> None:
        assert not approx_eq_vec3(Vec3(0.0, 0.0, 0.0), Vec3(0.001, 0.0, 0.0))
        assert not approx_eq_vec3(Vec3(100.0, 0.0, 0.0), Vec3(100.0001, 0.0, 0.0))

    def test_rotate_vector(self) -> None:
        rotated = rotate_vector(Vec3(1.0, 0.0, 0.0), 90.0)
        assert approx_eq_vec3(rotated, Vec3(0.0, 1.0, 0.0))

    def test_rotate_vector_adds_both_sine_terms(self) -> None:
        """(0, 1) turns into (1, 0), where a textbook rotation gives (-1, 0)."""
        rotated = rotate_vector(Vec3(0.0, 1.0, 5.0), 90.0)
        assert approx_eq_vec3(rotated, Vec3(1.0, 0.0, 5.0))

    def test_rotate_vector_keeps_z(self) -> None:
        assert rotate_vector(Vec3(2.0, 3.0, 7.0), 45.0).z == 7.0
