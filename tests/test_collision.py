import numpy as np
import pytest

from hovercat.collision import CollisionSystem
from hovercat.obstacles import Obstacle
from hovercat.physics import PhysicsBody


@pytest.fixture
def system():
    return CollisionSystem(80.0, 0.70, 0.55, 150.0)


def test_box_is_centered_fraction_of_sprite(system):
    box = system.box(PhysicsBody(100.0, 200.0))
    np.testing.assert_allclose(box, [72.0, 178.0, 128.0, 222.0])


def test_top_edge_violation(system):
    assert system.check_bounds(PhysicsBody(320.0, 0.0), 800.0)


def test_bottom_edge_violation(system):
    assert system.check_bounds(PhysicsBody(320.0, 790.0), 800.0)


def test_inside_field(system):
    assert not system.check_bounds(PhysicsBody(320.0, 22.0), 800.0)
    assert not system.check_bounds(PhysicsBody(320.0, 400.0), 800.0)


def test_no_hit_when_horizontally_clear(system):
    player = PhysicsBody(320.0, 0.0)
    assert not system.check_obstacle(player, Obstacle(400.0, 400.0), 100.0)
    assert not system.check_obstacle(player, Obstacle(190.0, 400.0), 100.0)


def test_no_hit_inside_gap(system):
    player = PhysicsBody(320.0, 400.0)
    assert not system.check_obstacle(player, Obstacle(300.0, 400.0), 100.0)


def test_hit_above_and_below_gap(system):
    obstacle = Obstacle(300.0, 400.0)
    # Gap spans 325..475, box half height is 22
    assert system.check_obstacle(PhysicsBody(320.0, 340.0), obstacle, 100.0)
    assert system.check_obstacle(PhysicsBody(320.0, 460.0), obstacle, 100.0)
    assert not system.check_obstacle(PhysicsBody(320.0, 347.0), obstacle, 100.0)
