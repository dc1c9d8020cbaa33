# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Glyph particles: force composition, integration and mirror enforcement

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .config import FieldConfig
from .vector_field import distances, linear_falloff, offsets


@dataclass(frozen=True)
class Particle:
    """Snapshot of a single glyph particle."""
    glyph: str
    rest: Tuple[float, float]
    position: Tuple[float, float]
    velocity: Tuple[float, float]


class ParticleField:
    """
    State of every glyph particle, stored as (N, 2) numpy arrays.

    Row i of `rest`, `position` and `velocity` belongs to glyph i. Rows are
    kept in creation (layout) order, which is also the update order.

    Per step each particle sums four forces into its velocity:
        1. Ripple impulses (all alive ripples)
        2. Gravity well attraction (all alive wells)
        3. Pointer repulsion (zero when the pointer is absent)
        4. Spring return toward the rest position (always applied)

    and is then integrated with explicit Euler plus velocity damping:

        v += f;  x += v;  v *= damping

    Mirror enforcement slaves the right half of the text to the left half:
    after a left-of-center glyph is integrated, its partner (from the
    construction-time pair table) is set to the horizontal reflection of it.

    Attributes:
        rest: Rest positions, shape (N, 2), read-only
        position: Current positions, shape (N, 2)
        velocity: Current velocities, shape (N, 2)
        glyphs: Display characters, length N
        mirror_index: Partner index per glyph or -1, shape (N,)
        center_x: Mirror axis
    """

    def __init__(
        self,
        rest: np.ndarray,
        glyphs: Sequence[str],
        mirror_index: Optional[np.ndarray] = None,
        center_x: float = 0.0,
        interaction_radius: float = 150.0,
        repulsion: float = 0.02,
        spring: float = 0.05,
        damping: float = 0.9,
    ):
        """
        Initialize all particles at rest.

        Args:
            rest: Array of shape (N, 2) with rest positions
            glyphs: N display characters
            mirror_index: Partner index per glyph, -1 for none (default: no pairs).
                A partner may belong to at most one glyph.
            center_x: Mirror axis x coordinate
            interaction_radius: Pointer repulsion radius
            repulsion: Pointer repulsion constant
            spring: Spring return constant
            damping: Velocity multiplier applied after every step
        """
        rest = np.array(rest, dtype=np.float64).reshape(-1, 2)
        if len(glyphs) != len(rest):
            raise ValueError(
                f"Need one glyph per rest position (got {len(glyphs)} glyphs, {len(rest)} positions)"
            )

        self.rest = rest
        self.rest.setflags(write=False)
        self.position = rest.copy()
        self.velocity = np.zeros_like(rest)
        self.glyphs: List[str] = list(glyphs)

        if mirror_index is None:
            mirror_index = np.full(len(rest), -1, dtype=np.int64)
        self.mirror_index = np.asarray(mirror_index, dtype=np.int64)
        partners = self.mirror_index[self.mirror_index >= 0]
        if len(np.unique(partners)) != len(partners):
            raise ValueError("Each mirror partner can belong to only one glyph")
        self.center_x = float(center_x)

        self.interaction_radius = interaction_radius
        self.repulsion = repulsion
        self.spring = spring
        self.damping = damping

    @classmethod
    def from_config(
        cls,
        rest: np.ndarray,
        glyphs: Sequence[str],
        mirror_index: Optional[np.ndarray],
        center_x: float,
        config: FieldConfig,
    ) -> "ParticleField":
        """Create a field using the dynamics constants of a FieldConfig."""
        return cls(
            rest,
            glyphs,
            mirror_index=mirror_index,
            center_x=center_x,
            interaction_radius=config.interaction_radius,
            repulsion=config.repulsion,
            spring=config.spring,
            damping=config.damping,
        )

    @property
    def particle_count(self) -> int:
        return len(self.glyphs)

    def __len__(self) -> int:
        return self.particle_count

    def particle(self, i: int) -> Particle:
        """Snapshot of particle i."""
        return Particle(
            glyph=self.glyphs[i],
            rest=(float(self.rest[i, 0]), float(self.rest[i, 1])),
            position=(float(self.position[i, 0]), float(self.position[i, 1])),
            velocity=(float(self.velocity[i, 0]), float(self.velocity[i, 1])),
        )

    def __iter__(self) -> Iterator[Particle]:
        for i in range(self.particle_count):
            yield self.particle(i)

    # ========================================================================
    # FORCES AND INTEGRATION
    # ========================================================================

    def compose_forces(self, pointer, ripples, wells, indices=None) -> np.ndarray:
        """
        Sum every force acting on the selected particles.

        Forces are additive; the order below fixes no precedence.

        Args:
            pointer: (x, y) pointer position or None when absent
            ripples: Alive ripples
            wells: Alive gravity wells
            indices: Particle indices to evaluate (default: all)

        Returns:
            Array of shape (K, 2) with one force per selected particle
        """
        idx = slice(None) if indices is None else indices
        positions = self.position[idx]
        force = np.zeros_like(positions)

        for ripple in ripples:
            force += ripple.force_on(positions)

        for well in wells:
            force += well.force_on(positions)

        if pointer is not None:
            toward_pointer = offsets(positions, pointer)
            weight = linear_falloff(distances(toward_pointer), self.interaction_radius)
            force -= toward_pointer * (weight * self.repulsion)[:, None]

        force += (self.rest[idx] - positions) * self.spring
        return force

    def integrate(self, forces: np.ndarray, indices=None) -> None:
        """Apply forces to velocity, velocity to position, then damp velocity."""
        idx = slice(None) if indices is None else indices
        self.velocity[idx] += forces
        self.position[idx] += self.velocity[idx]
        self.velocity[idx] *= self.damping

    def enforce_mirror(self, i: int) -> None:
        """
        Reflect particle i onto its partner.

        Only glyphs resting left of center are authoritative. A missing
        partner is a no-op.
        """
        if self.rest[i, 0] >= self.center_x:
            return
        j = self.mirror_index[i]
        if j < 0:
            return

        self.position[j, 0] = 2.0 * self.center_x - self.position[i, 0]
        self.position[j, 1] = self.position[i, 1]
        self.velocity[j, 0] = -self.velocity[i, 0]
        self.velocity[j, 1] = self.velocity[i, 1]

    def update(self, pointer, ripples, wells) -> None:
        """
        Advance every particle one step in creation order.

        Each particle is integrated and then mirrored onto its partner. A
        partner that comes later in creation order is therefore integrated
        from the mirrored state, so the right half trails the left half by
        one integration. The update runs in three vectorized phases with
        the same result as visiting particles one at a time:
            1. Integrate every particle except partners that follow their
               left glyph
            2. Mirror every left glyph onto its partner, in creation order
            3. Integrate the partners held back in phase 1
        """
        n = self.particle_count
        left = np.flatnonzero((self.mirror_index >= 0) & (self.rest[:, 0] < self.center_x))
        partners = self.mirror_index[left]

        deferred = np.zeros(n, dtype=bool)
        deferred[partners[partners > left]] = True

        first = np.flatnonzero(~deferred)
        self.integrate(self.compose_forces(pointer, ripples, wells, first), first)

        for i in left:
            self.enforce_mirror(i)

        second = np.flatnonzero(deferred)
        if len(second) > 0:
            self.integrate(self.compose_forces(pointer, ripples, wells, second), second)
