#!/usr/bin/env python3
"""
Interactive Glyph Field Demo

Opens a resizable pygame window showing the text as glyph particles.

Controls:
    Move mouse / drag finger  Repel glyphs and emit ripples
    Click                     Drop a gravity well
    Leave window              Stop pointer repulsion
    R                         Reset
    SPACE                     Pause / resume
    H                         Toggle HUD
    Q / ESC                   Quit

Usage:
    python -m glyph_demo
    python -m glyph_demo --text "ABBA ABBA"
    python -m glyph_demo --window-width 1400 --window-height 500
    python -m glyph_demo --headless --max-frames 600

Author: NBEL
License: Apache-2.0
"""

import argparse
import os
import time
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pygame

from glyph_field import FieldConfig, Simulation
from pygame_renderer import Renderer


class GlyphDemo:
    """
    Frame driver for the glyph field.

    Drains pygame events into the simulation's input entry points, steps
    the simulation once per frame and hands the frame to the renderer.
    Events are always handled between steps, never during one.

    Example:
        demo = GlyphDemo(FieldConfig(text="TENET"))
        summary = demo.run()
    """

    def __init__(self, config: Optional[FieldConfig] = None):
        """
        Initialize the demo.

        Args:
            config: Field configuration (uses defaults if None)
        """
        self.config = config or FieldConfig()
        self.sim = Simulation(self.config)

        # Will be initialized in setup()
        self.window: Optional[pygame.Surface] = None
        self.renderer: Optional[Renderer] = None
        self.clock: Optional[pygame.time.Clock] = None

        # State tracking
        self.paused: bool = False
        self.running: bool = True
        self.show_hud: bool = self.config.show_hud
        self.wells_spawned: int = 0
        self.ripples_spawned: int = 0
        self.fps: float = 0.0

    # ========================================================================
    # SETUP
    # ========================================================================

    def setup(self) -> None:
        """Open the window and lay out the text with real font metrics."""
        cfg = self.config

        print("=" * 70)
        print(f"GLYPH FIELD - \"{cfg.text}\"")
        print("=" * 70)
        print()

        pygame.init()
        self.window = pygame.display.set_mode(
            (cfg.window_width, cfg.window_height), pygame.RESIZABLE
        )
        pygame.display.set_caption(f"Glyph Field - {cfg.text}")
        self.clock = pygame.time.Clock()

        self.renderer = Renderer(
            window_width=cfg.window_width,
            window_height=cfg.window_height,
            font_name=cfg.font_name,
        )
        self.sim.metrics = self.renderer.text_metrics
        self.sim.rebuild()

        mirrored = int(np.sum(self.sim.field.mirror_index >= 0))
        print(f"  Window: {cfg.window_width}x{cfg.window_height} @ {cfg.fps} fps")
        print(f"  Glyphs: {self.sim.field.particle_count} (font size {self.sim.font_size:.1f}px)")
        print(f"  Mirror pairs: {mirrored}")
        print()

    # ========================================================================
    # INPUT
    # ========================================================================

    def handle_events(self) -> None:
        """Handle all pending pygame events."""
        for event in pygame.event.get():
            self.handle_event(event)

    def handle_event(self, event) -> None:
        """Translate one pygame event into simulation input."""
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.MOUSEMOTION:
            # Touch input also arrives as FINGERMOTION
            if getattr(event, "touch", False):
                return
            x, y = event.pos
            self.sim.handle_pointer_move(x, y)
            self.ripples_spawned += 1
        elif event.type == pygame.FINGERMOTION:
            # Finger coordinates are normalized to [0, 1]
            x = event.x * self.sim.width
            y = event.y * self.sim.height
            self.sim.handle_pointer_move(x, y)
            self.ripples_spawned += 1
        elif event.type == pygame.WINDOWLEAVE:
            self.sim.clear_pointer_position()
        elif event.type == pygame.MOUSEBUTTONDOWN:
            if event.button == 1:
                x, y = event.pos
                self.sim.spawn_gravity_well(x, y)
                self.wells_spawned += 1
        elif event.type == pygame.VIDEORESIZE:
            self.sim.resize(event.w, event.h)
        elif event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_q, pygame.K_ESCAPE):
                self.running = False
            elif event.key == pygame.K_r:
                self.reset()
            elif event.key == pygame.K_SPACE:
                self.paused = not self.paused
                print("Paused" if self.paused else "Resumed")
            elif event.key == pygame.K_h:
                self.show_hud = not self.show_hud

    def reset(self) -> None:
        """Reset simulation to the resting layout."""
        self.sim.reset()
        print("Reset!")

    # ========================================================================
    # FRAME
    # ========================================================================

    def get_info_lines(self) -> List[Tuple[str, Tuple[int, int, int]]]:
        """HUD lines as (text, color) tuples."""
        color = Renderer.HUD_COLOR
        pointer = self.sim.pointer
        pointer_text = "outside" if pointer is None else f"({pointer[0]:.0f}, {pointer[1]:.0f})"
        return [
            (f"Frame: {self.sim.frame_count}", color),
            (f"FPS: {self.fps:.1f}", color),
            (f"Ripples: {len(self.sim.ripples)}", color),
            (f"Wells: {len(self.sim.wells)}", color),
            (f"Pointer: {pointer_text}", color),
        ]

    def render(self) -> None:
        """Render the current frame."""
        if self.window is None:
            return

        info = self.get_info_lines() if self.show_hud else None
        canvas = self.renderer.draw_frame(self.sim.frame(), info)

        self.window = pygame.display.get_surface()
        self.window.blit(canvas, (0, 0))
        pygame.display.flip()

    def get_summary(self) -> Dict[str, Any]:
        """Summary statistics at end of run."""
        field = self.sim.field
        displacement = np.linalg.norm(field.position - field.rest, axis=1)
        return {
            'frames': self.sim.frame_count,
            'ripples_spawned': self.ripples_spawned,
            'wells_spawned': self.wells_spawned,
            'max_displacement': float(displacement.max()) if len(displacement) else 0.0,
        }

    def run(self) -> Dict[str, Any]:
        """
        Run the interactive loop.

        Returns:
            Summary dictionary with run statistics
        """
        cfg = self.config
        self.setup()

        print("=" * 70)
        print("SIMULATION STARTED")
        print("=" * 70)
        print("Press Q/ESC to quit, R to reset, SPACE to pause, H for HUD")
        print()

        start_time = time.time()

        while self.running:
            if cfg.max_frames is not None and self.sim.frame_count >= cfg.max_frames:
                break

            self.handle_events()

            if self.paused:
                pygame.time.wait(50)
                continue

            self.sim.step()
            self.render()
            self.clock.tick(cfg.fps)

            self.fps = self.sim.frame_count / max(time.time() - start_time, 0.01)
            if self.sim.frame_count % 300 == 0:
                print(f"frame={self.sim.frame_count} | ripples={len(self.sim.ripples)} "
                      f"| wells={len(self.sim.wells)} | fps={self.fps:.1f}")

        summary = self.get_summary()

        print()
        print("=" * 70)
        print("SIMULATION COMPLETE")
        print("=" * 70)
        print(f"  Frames: {summary['frames']}")
        print(f"  Ripples spawned: {summary['ripples_spawned']}")
        print(f"  Wells spawned: {summary['wells_spawned']}")
        print(f"  Max displacement: {summary['max_displacement']:.2f}px")
        print()

        pygame.quit()
        return summary

    # ========================================================================
    # COMMAND LINE
    # ========================================================================

    @classmethod
    def add_common_args(cls, parser: argparse.ArgumentParser) -> None:
        """Add common command-line arguments to parser."""
        defaults = FieldConfig()
        parser.add_argument('--text', type=str, default=defaults.text,
                            help=f'Text to render (default: "{defaults.text}")')
        parser.add_argument('--font', type=str, default=defaults.font_name,
                            help=f'System font name (default: {defaults.font_name})')
        parser.add_argument('--window-width', type=int, default=defaults.window_width,
                            help=f'Window width (default: {defaults.window_width})')
        parser.add_argument('--window-height', type=int, default=defaults.window_height,
                            help=f'Window height (default: {defaults.window_height})')
        parser.add_argument('--fps', type=int, default=defaults.fps,
                            help=f'Target frame rate (default: {defaults.fps})')
        parser.add_argument('--max-frames', type=int, default=None,
                            help='Stop after this many frames (default: run until quit)')
        parser.add_argument('--spring', type=float, default=defaults.spring,
                            help=f'Spring return constant (default: {defaults.spring})')
        parser.add_argument('--damping', type=float, default=defaults.damping,
                            help=f'Velocity damping per frame (default: {defaults.damping})')
        parser.add_argument('--repulsion', type=float, default=defaults.repulsion,
                            help=f'Pointer repulsion constant (default: {defaults.repulsion})')
        parser.add_argument('--well-strength', type=float, default=defaults.well_strength,
                            help=f'Gravity well strength (default: {defaults.well_strength})')
        parser.add_argument('--hud', action='store_true',
                            help='Show HUD on start')
        parser.add_argument('--headless', action='store_true',
                            help='Use the SDL dummy video driver (no window)')

    @classmethod
    def config_from_args(cls, args) -> FieldConfig:
        """Create FieldConfig from parsed arguments."""
        return FieldConfig(
            text=args.text,
            font_name=args.font,
            window_width=args.window_width,
            window_height=args.window_height,
            fps=args.fps,
            max_frames=args.max_frames,
            spring=args.spring,
            damping=args.damping,
            repulsion=args.repulsion,
            well_strength=args.well_strength,
            show_hud=args.hud,
        )


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Interactive glyph field')
    GlyphDemo.add_common_args(parser)
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    if args.headless:
        os.environ['SDL_VIDEODRIVER'] = 'dummy'
    demo = GlyphDemo(GlyphDemo.config_from_args(args))
    demo.run()


if __name__ == '__main__':
    main()
