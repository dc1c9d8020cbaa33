# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Per-frame orchestration of effects and glyph particles

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from .config import FieldConfig
from .effects import GravityWell, Ripple
from .layout import Measure, fixed_advance_metrics, font_size_for, layout_text, mirror_pairs
from .particles import ParticleField


@dataclass
class Frame:
    """
    Everything the renderer needs for one frame.

    Attributes:
        particles: (x, y, glyph) per particle, in creation order
        ripples: (x, y, radius, alpha) per alive ripple
        wells: (x, y, radius, alpha) per alive gravity well
        font_size: Layout font size in pixels
        width, height: Viewport size in pixels
    """
    particles: List[Tuple[float, float, str]] = field(default_factory=list)
    ripples: List[Tuple[float, float, float, float]] = field(default_factory=list)
    wells: List[Tuple[float, float, float, float]] = field(default_factory=list)
    font_size: float = 0.0
    width: int = 0
    height: int = 0


class Simulation:
    """
    Owns the glyph field, the pointer and the active effects.

    Input handlers mutate the pointer and enqueue effects between frames;
    `step()` then advances everything by one frame:
        1. Advance ripples, drop expired ones
        2. Advance gravity wells, drop expired ones
        3. Update every particle against the surviving effects and pointer
    Expired effects never influence the step in which they expire.

    Example:
        >>> sim = Simulation(FieldConfig(window_width=800, window_height=400))
        >>> sim.handle_pointer_move(400, 200)
        >>> sim.spawn_gravity_well(300, 200)
        >>> for _ in range(60):
        >>>     sim.step()
        >>> frame = sim.frame()
    """

    def __init__(
        self,
        config: Optional[FieldConfig] = None,
        metrics: Optional[Callable[[float], Measure]] = None,
    ):
        """
        Initialize the simulation and lay out the text.

        Args:
            config: Field configuration (uses defaults if None)
            metrics: Returns a text measure function for a font size
                (default: fixed advance headless metrics)
        """
        self.config = config or FieldConfig()
        self.metrics = metrics or fixed_advance_metrics

        self.width: int = self.config.window_width
        self.height: int = self.config.window_height
        self.font_size: float = 0.0

        self.pointer: Optional[Tuple[float, float]] = None
        self.ripples: List[Ripple] = []
        self.wells: List[GravityWell] = []
        self.frame_count: int = 0

        self.field: Optional[ParticleField] = None
        self.rebuild()

    # ========================================================================
    # LAYOUT
    # ========================================================================

    def rebuild(self) -> None:
        """Discard all particles and lay the text out again at rest."""
        cfg = self.config

        self.font_size = font_size_for(self.width, cfg)
        rest, glyphs = layout_text(
            cfg.text,
            self.width,
            self.height,
            self.metrics(self.font_size),
            self.font_size,
            cfg.letter_spacing_ratio,
        )
        center_x = self.width / 2.0
        pairs = mirror_pairs(rest[:, 0], center_x, cfg.mirror_tolerance)
        self.field = ParticleField.from_config(rest, glyphs, pairs, center_x, cfg)

    def resize(self, width: int, height: int) -> None:
        """Adopt a new viewport size and rebuild the layout."""
        self.width = max(int(width), 1)
        self.height = max(int(height), 1)
        self.rebuild()

    def reset(self) -> None:
        """Clear pointer and effects and return every glyph to rest."""
        self.pointer = None
        self.ripples = []
        self.wells = []
        self.frame_count = 0
        self.rebuild()

    # ========================================================================
    # INPUT ENTRY POINTS
    # ========================================================================

    def set_pointer_position(self, x: float, y: float) -> None:
        self.pointer = (float(x), float(y))

    def clear_pointer_position(self) -> None:
        self.pointer = None

    def spawn_ripple(self, x: float, y: float) -> Ripple:
        cfg = self.config
        ripple = Ripple(
            x, y,
            max_radius=cfg.ripple_max_radius,
            speed=cfg.ripple_speed,
            impulse=cfg.ripple_impulse,
        )
        self.ripples.append(ripple)
        return ripple

    def spawn_gravity_well(self, x: float, y: float) -> GravityWell:
        cfg = self.config
        well = GravityWell(
            x, y,
            strength=cfg.well_strength,
            radius=cfg.well_radius,
            lifespan=cfg.well_lifespan,
        )
        self.wells.append(well)
        return well

    def handle_pointer_move(self, x: float, y: float) -> None:
        """Pointer or touch moved: track it and start a ripple there."""
        self.set_pointer_position(x, y)
        self.spawn_ripple(x, y)

    # ========================================================================
    # STEP
    # ========================================================================

    def step(self) -> None:
        """Advance effects and particles by one frame."""
        self.ripples = [ripple for ripple in self.ripples if ripple.advance()]
        self.wells = [well for well in self.wells if well.advance()]
        self.field.update(self.pointer, self.ripples, self.wells)
        self.frame_count += 1

    def frame(self) -> Frame:
        """Snapshot of the current state for the renderer."""
        positions = self.field.position
        return Frame(
            particles=[
                (float(positions[i, 0]), float(positions[i, 1]), glyph)
                for i, glyph in enumerate(self.field.glyphs)
            ],
            ripples=[(r.x, r.y, r.radius, r.fade_alpha) for r in self.ripples],
            wells=[(w.x, w.y, w.radius, w.fade_alpha) for w in self.wells],
            font_size=self.font_size,
            width=self.width,
            height=self.height,
        )
