from dataclasses import dataclass


@dataclass
class PhysicsBody:
    """Vertical motion of the player; the horizontal position never changes"""
    x: float
    y: float
    velocity: float = 0.0

    def integrate(self, dt: float, gravity: float):
        self.velocity += gravity * dt
        self.y += self.velocity * dt

    def apply_impulse(self, jump_force: float):
        # Absolute set, repeated flaps don't stack
        self.velocity = jump_force

    def place(self, x: float, y: float):
        self.x = x
        self.y = y
        self.velocity = 0.0
