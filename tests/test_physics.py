from hovercat.physics import PhysicsBody


def test_integrate_applies_gravity_then_velocity():
    body = PhysicsBody(100.0, 400.0, velocity=10.0)
    body.integrate(0.5, 100.0)
    assert body.velocity == 60.0
    assert body.y == 430.0
    assert body.x == 100.0


def test_impulse_sets_velocity_absolutely():
    body = PhysicsBody(0.0, 0.0, velocity=250.0)
    body.apply_impulse(-550.0)
    assert body.velocity == -550.0
    body.apply_impulse(-550.0)
    assert body.velocity == -550.0


def test_place_zeroes_velocity():
    body = PhysicsBody(0.0, 0.0, velocity=-300.0)
    body.place(320.0, 400.0)
    assert (body.x, body.y, body.velocity) == (320.0, 400.0, 0.0)
