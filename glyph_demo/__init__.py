#!/usr/bin/env python3
"""
Glyph Demo: interactive window for the glyph field

- GlyphDemo: pygame frame driver (input events, step, render)
- main: command-line entry point

Author: NBEL
License: Apache-2.0
"""

from .demo import GlyphDemo, main

__all__ = [
    'GlyphDemo',
    'main',
]
