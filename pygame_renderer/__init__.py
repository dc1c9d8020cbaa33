"""
Pygame Renderer for the Glyph Field.

This module provides the rendering and font-metrics collaborator used by:
- glyph_demo/demo.py (interactive window)

Main classes:
- Renderer: pygame-based painting of glyph field frames
"""

from .renderer import Renderer

__all__ = ['Renderer']
