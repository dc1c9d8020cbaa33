# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Tuning constants for the glyph field

from dataclasses import dataclass
from typing import Optional


@dataclass
class FieldConfig:
    """Configuration for a glyph field and its display."""
    # Text
    text: str = "TENET ESSE TENET ↫"
    font_name: str = "Arial"
    max_font_size: float = 48.0
    font_width_divisor: float = 20.0   # font size = min(max, width / divisor)
    letter_spacing_ratio: float = 0.5  # spacing = font size * ratio

    # Pointer repulsion
    interaction_radius: float = 150.0
    repulsion: float = 0.02

    # Particle dynamics
    spring: float = 0.05
    damping: float = 0.9
    mirror_tolerance: float = 1e-6

    # Ripple
    ripple_impulse: float = 0.05
    ripple_max_radius: float = 100.0
    ripple_speed: float = 2.0

    # Gravity well
    well_strength: float = 0.1
    well_radius: float = 100.0
    well_lifespan: int = 100

    # Display
    window_width: int = 1000
    window_height: int = 600
    fps: int = 60
    max_frames: Optional[int] = None
    show_hud: bool = False

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Reject values no glyph field can be built from."""
        if not self.text:
            raise ValueError("Text must contain at least one glyph")
        if self.window_width <= 0 or self.window_height <= 0:
            raise ValueError(
                f"Window size must be positive (got {self.window_width}x{self.window_height})"
            )
        if not 0.0 <= self.damping <= 1.0:
            raise ValueError(f"Damping must be in [0, 1], got {self.damping}")
        if self.fps <= 0:
            raise ValueError(f"FPS must be positive, got {self.fps}")
        if self.max_frames is not None and self.max_frames < 0:
            raise ValueError(f"Frame limit cannot be negative, got {self.max_frames}")
        if self.ripple_speed <= 0.0:
            raise ValueError(f"Ripple speed must be positive, got {self.ripple_speed}")
        if self.ripple_max_radius <= 0.0:
            raise ValueError(f"Ripple max radius must be positive, got {self.ripple_max_radius}")
        if self.well_radius <= 0.0:
            raise ValueError(f"Well radius must be positive, got {self.well_radius}")
        if self.well_lifespan <= 0:
            raise ValueError(f"Well lifespan must be positive, got {self.well_lifespan}")
