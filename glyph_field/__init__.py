# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Glyph field: text rendered as interactive spring-bound particles

from .config import FieldConfig
from .effects import GravityWell, Ripple
from .layout import fixed_advance_metrics, font_size_for, layout_text, mirror_pairs
from .particles import Particle, ParticleField
from .simulation import Frame, Simulation

__all__ = [
    "FieldConfig",
    "Frame",
    "GravityWell",
    "Particle",
    "ParticleField",
    "Ripple",
    "Simulation",
    "fixed_advance_metrics",
    "font_size_for",
    "layout_text",
    "mirror_pairs",
]
