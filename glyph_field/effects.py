# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Transient (ripple) and persistent (gravity well) effects acting on glyphs

import numpy as np

from .vector_field import distances, linear_falloff, offsets, unit_vectors


class Ripple:
    """
    Expanding ring that pushes glyphs outward as it passes.

    The radius grows by `speed` every step starting at 0. Inside the ring
    each glyph receives an impulse along the direction away from the
    origin, strongest at the origin and fading linearly to zero at the
    ring edge. The ripple expires the step its radius reaches `max_radius`.

    Sign convention: the force is the unit vector from the glyph toward
    the origin, subtracted. The net push is therefore outward, the
    opposite of a gravity well.

    Attributes:
        x, y: Origin (pointer location at trigger time)
        radius: Current ring radius
        max_radius: Radius at which the ripple expires
        speed: Radius increment per step
        impulse: Peak force magnitude at the origin
    """

    def __init__(
        self,
        x: float,
        y: float,
        max_radius: float = 100.0,
        speed: float = 2.0,
        impulse: float = 0.05,
    ):
        self.x = float(x)
        self.y = float(y)
        self.radius = 0.0
        self.max_radius = float(max_radius)
        self.speed = float(speed)
        self.impulse = float(impulse)

    @property
    def origin(self):
        return (self.x, self.y)

    @property
    def fade_alpha(self) -> float:
        """Ring opacity, 1 at birth and 0 at expiry."""
        if self.max_radius <= 0.0:
            return 0.0
        return float(np.clip(1.0 - self.radius / self.max_radius, 0.0, 1.0))

    def advance(self) -> bool:
        """Grow the ring one step. Returns True while still alive."""
        self.radius += self.speed
        return self.radius < self.max_radius

    def force_on(self, positions: np.ndarray) -> np.ndarray:
        """
        Ripple impulse on each glyph.

        Args:
            positions: Array of shape (N, 2) with glyph positions

        Returns:
            Array of shape (N, 2) with force vectors (zero outside the ring)
        """
        toward_origin = offsets(positions, self.origin)
        dist = distances(toward_origin)
        weight = linear_falloff(dist, self.radius) * self.impulse
        return -unit_vectors(toward_origin, dist) * weight[:, None]


class GravityWell:
    """
    Fixed-radius attractor with a countdown lifespan.

    Glyphs inside the radius are pulled along their displacement toward
    the center, scaled by (radius - d) / radius * strength.

    Attributes:
        x, y: Center (click location)
        strength: Attraction constant
        radius: Radius of influence
        lifespan: Initial life in steps
        remaining_life: Steps left before expiry
    """

    def __init__(
        self,
        x: float,
        y: float,
        strength: float = 0.1,
        radius: float = 100.0,
        lifespan: int = 100,
    ):
        self.x = float(x)
        self.y = float(y)
        self.strength = float(strength)
        self.radius = float(radius)
        self.lifespan = int(lifespan)
        self.remaining_life = int(lifespan)

    @property
    def center(self):
        return (self.x, self.y)

    @property
    def fade_alpha(self) -> float:
        """Disc opacity, 0.2 at birth fading to 0 at expiry."""
        if self.lifespan <= 0:
            return 0.0
        return max(self.remaining_life, 0) / self.lifespan * 0.2

    def advance(self) -> bool:
        """Count down one step. Returns True while still alive."""
        self.remaining_life -= 1
        return self.remaining_life > 0

    def force_on(self, positions: np.ndarray) -> np.ndarray:
        """
        Attraction on each glyph.

        Args:
            positions: Array of shape (N, 2) with glyph positions

        Returns:
            Array of shape (N, 2) with force vectors (zero outside the radius)
        """
        toward_center = offsets(positions, self.center)
        dist = distances(toward_center)
        weight = linear_falloff(dist, self.radius) * self.strength
        return toward_center * weight[:, None]
