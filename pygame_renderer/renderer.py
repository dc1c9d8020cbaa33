"""
Pygame Renderer for the Glyph Field

Paints one glyph field Frame per call:
1. Radial gradient background (deep blue center fading to near black)
2. Ripples as thin white rings that fade as they grow
3. Gravity wells as translucent white discs
4. Glyphs in bold white with a soft glow
5. Optional HUD info text

Usage:
    from pygame_renderer import Renderer

    renderer = Renderer(window_width=1000, window_height=600)
    sim = Simulation(config, metrics=renderer.text_metrics)

    # In render loop:
    canvas = renderer.draw_frame(sim.frame())
    window.blit(canvas, (0, 0))
"""

import numpy as np
import pygame
from typing import Callable, Dict, List, Optional, Tuple


class Renderer:
    """
    Pygame renderer for glyph field visualization.

    Also acts as the layout collaborator: `text_metrics(font_size)` returns
    a measure function backed by the same font the glyphs are drawn with.
    """

    # ========================================================================
    # COLOR CONSTANTS
    # ========================================================================

    WHITE = (255, 255, 255)
    BLACK = (0, 0, 0)
    GREY = (100, 100, 100)

    # Background gradient (center -> edge)
    BACKGROUND_CENTER = (0, 0, 51)   # #000033
    BACKGROUND_EDGE = (0, 0, 17)     # #000011

    # Glyphs
    GLYPH_ALPHA = 204                # 0.8 opacity
    GLOW_ALPHA = 128                 # 0.5 opacity

    # HUD text
    HUD_COLOR = (180, 180, 220)

    # ========================================================================
    # INITIALIZATION
    # ========================================================================

    def __init__(
        self,
        window_width: int = 1000,
        window_height: int = 600,
        font_name: str = "Arial",
        glow_radius: int = 10,
        ring_width: int = 1,
        font_size_small: int = 18,
    ):
        """
        Initialize the renderer.

        Args:
            window_width: Window width in pixels
            window_height: Window height in pixels
            font_name: System font for glyphs (falls back to pygame default)
            glow_radius: Blur radius of the glyph glow in pixels
            ring_width: Ripple ring line width
            font_size_small: Font size for HUD text
        """
        self.window_width = window_width
        self.window_height = window_height
        self.font_name = font_name
        self.glow_radius = glow_radius
        self.ring_width = ring_width

        # Fonts and cached surfaces (initialized lazily)
        self._fonts: Dict[int, pygame.font.Font] = {}
        self._glyph_cache: Dict[Tuple[str, int], Tuple[pygame.Surface, pygame.Surface]] = {}
        self._background: Optional[pygame.Surface] = None
        self._font_small = None
        self._font_size_small = font_size_small

    def resize(self, window_width: int, window_height: int):
        """Adopt a new window size; the background is rebuilt on next draw."""
        self.window_width = window_width
        self.window_height = window_height
        self._background = None

    # ========================================================================
    # FONTS AND METRICS
    # ========================================================================

    @property
    def font_small(self):
        """Lazy small font initialization."""
        if self._font_small is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font_small = pygame.font.Font(None, self._font_size_small)
        return self._font_small

    def glyph_font(self, font_size: float) -> pygame.font.Font:
        """Bold glyph font at a pixel size (cached per integer size)."""
        size = max(int(round(font_size)), 1)
        if size not in self._fonts:
            if not pygame.font.get_init():
                pygame.font.init()
            self._fonts[size] = pygame.font.SysFont(self.font_name, size, bold=True)
        return self._fonts[size]

    def text_metrics(self, font_size: float) -> Callable[[str], float]:
        """
        Measure function for layout at a font size.

        Returns:
            Callable mapping a string to its advance width in pixels
        """
        font = self.glyph_font(font_size)

        def measure(text: str) -> float:
            if not text:
                return 0.0
            return float(font.size(text)[0])

        return measure

    # ========================================================================
    # CANVAS CREATION
    # ========================================================================

    def create_canvas(self) -> pygame.Surface:
        """
        Create a new canvas with the gradient background.

        Returns:
            pygame.Surface
        """
        canvas = pygame.Surface((self.window_width, self.window_height))
        canvas.blit(self.background_surface(), (0, 0))
        return canvas

    def background_surface(self) -> pygame.Surface:
        """Radial gradient background, cached until the window size changes."""
        if self._background is None:
            self._background = self.create_gradient_surface(
                self.window_width,
                self.window_height,
                self.BACKGROUND_CENTER,
                self.BACKGROUND_EDGE,
            )
        return self._background

    def create_gradient_surface(
        self,
        width: int,
        height: int,
        center_color: Tuple[int, int, int],
        edge_color: Tuple[int, int, int],
    ) -> pygame.Surface:
        """
        Create a radial gradient surface.

        Color interpolates linearly from center_color at the middle to
        edge_color at radius max(width, height) / 2 and stays at edge_color
        beyond.

        Args:
            width: Surface width in pixels
            height: Surface height in pixels
            center_color: RGB color at the center
            edge_color: RGB color at and beyond the gradient radius

        Returns:
            pygame.Surface of the given size
        """
        radius = max(width, height) / 2.0
        ys, xs = np.mgrid[0:height, 0:width].astype(np.float64)
        dist = np.sqrt((xs - width / 2.0) ** 2 + (ys - height / 2.0) ** 2)
        t = np.clip(dist / max(radius, 1e-6), 0.0, 1.0)

        c0 = np.array(center_color, dtype=np.float64)
        c1 = np.array(edge_color, dtype=np.float64)
        rgb = (c0 + (c1 - c0) * t[..., None]).round().astype(np.uint8)

        return pygame.surfarray.make_surface(np.transpose(rgb, (1, 0, 2)))

    # ========================================================================
    # EFFECT RENDERING
    # ========================================================================

    def draw_ripples(
        self,
        canvas: pygame.Surface,
        ripples: List[Tuple[float, float, float, float]],
        color=None,
    ):
        """
        Draw ripples as fading rings.

        Args:
            canvas: pygame Surface to draw on
            ripples: (x, y, radius, alpha) per ripple, alpha in [0, 1]
            color: Ring color (default: white)
        """
        color = color or self.WHITE
        for x, y, radius, alpha in ripples:
            self._draw_alpha_circle(canvas, color, x, y, radius, alpha, self.ring_width)

    def draw_wells(
        self,
        canvas: pygame.Surface,
        wells: List[Tuple[float, float, float, float]],
        color=None,
    ):
        """
        Draw gravity wells as translucent discs.

        Args:
            canvas: pygame Surface to draw on
            wells: (x, y, radius, alpha) per well, alpha in [0, 1]
            color: Disc color (default: white)
        """
        color = color or self.WHITE
        for x, y, radius, alpha in wells:
            self._draw_alpha_circle(canvas, color, x, y, radius, alpha, 0)

    def _draw_alpha_circle(self, canvas, color, x, y, radius, alpha, width):
        """Blend a circle onto the canvas through a small per-pixel-alpha surface."""
        r = int(round(radius))
        a = int(round(np.clip(alpha, 0.0, 1.0) * 255))
        if r < 1 or a == 0 or np.isnan(x) or np.isnan(y):
            return

        size = 2 * r + 2
        overlay = pygame.Surface((size, size), pygame.SRCALPHA)
        pygame.draw.circle(overlay, (*color, a), (r + 1, r + 1), r, width)
        canvas.blit(overlay, (int(round(x)) - r - 1, int(round(y)) - r - 1))

    # ========================================================================
    # GLYPH RENDERING
    # ========================================================================

    def draw_glyphs(
        self,
        canvas: pygame.Surface,
        particles: List[Tuple[float, float, str]],
        font_size: float,
    ):
        """
        Draw glyphs with a soft glow.

        Positions are baseline-left anchors, so each glyph is blitted with
        its ascent above the particle position.

        Args:
            canvas: pygame Surface to draw on
            particles: (x, y, glyph) per particle
            font_size: Glyph font size in pixels
        """
        font = self.glyph_font(font_size)
        ascent = font.get_ascent()

        for x, y, glyph in particles:
            if np.isnan(x) or np.isnan(y) or glyph.isspace():
                continue

            text, glow = self._glyph_surfaces(glyph, font, int(round(font_size)))
            top_left = (int(round(x)), int(round(y)) - ascent)
            canvas.blit(glow, (top_left[0] - self.glow_radius, top_left[1] - self.glow_radius))
            canvas.blit(text, top_left)

    def _glyph_surfaces(self, glyph: str, font, size: int):
        """Rendered glyph and its blurred glow, cached per (glyph, size)."""
        key = (glyph, size)
        if key not in self._glyph_cache:
            text = font.render(glyph, True, self.WHITE)
            text.set_alpha(self.GLYPH_ALPHA)
            self._glyph_cache[key] = (text, self._make_glow(text))
        return self._glyph_cache[key]

    def _make_glow(self, text: pygame.Surface) -> pygame.Surface:
        """Blur a glyph surface by shrinking and re-expanding it."""
        pad = self.glow_radius
        w, h = text.get_size()
        padded = pygame.Surface((w + 2 * pad, h + 2 * pad), pygame.SRCALPHA)
        padded.blit(text, (pad, pad))

        factor = max(pad // 2, 1)
        small = pygame.transform.smoothscale(
            padded,
            (max(padded.get_width() // factor, 1), max(padded.get_height() // factor, 1)),
        )
        glow = pygame.transform.smoothscale(small, padded.get_size())
        glow.set_alpha(self.GLOW_ALPHA)
        return glow

    # ========================================================================
    # UI TEXT
    # ========================================================================

    def draw_info_text(
        self,
        canvas: pygame.Surface,
        lines: List[Tuple[str, Tuple[int, int, int]]],
        position: Tuple[int, int] = (10, 10),
        line_spacing: int = 17,
    ):
        """
        Draw multiple lines of info text.

        Args:
            canvas: pygame Surface to draw on
            lines: List of (text, color) tuples
            position: Top-left position
            line_spacing: Vertical spacing between lines
        """
        x, y = position

        for i, (text, color) in enumerate(lines):
            text_surface = self.font_small.render(text, True, color)
            canvas.blit(text_surface, (x, y + i * line_spacing))

    # ========================================================================
    # FRAME
    # ========================================================================

    def draw_frame(self, frame, info_lines=None) -> pygame.Surface:
        """
        Paint a complete frame.

        Args:
            frame: glyph_field Frame snapshot
            info_lines: Optional HUD lines as (text, color) tuples

        Returns:
            pygame.Surface with the finished frame
        """
        if (frame.width, frame.height) != (self.window_width, self.window_height):
            self.resize(frame.width, frame.height)

        canvas = self.create_canvas()
        self.draw_ripples(canvas, frame.ripples)
        self.draw_wells(canvas, frame.wells)
        self.draw_glyphs(canvas, frame.particles, frame.font_size)

        if info_lines:
            self.draw_info_text(canvas, info_lines)

        return canvas
