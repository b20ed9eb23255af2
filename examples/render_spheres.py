#!/usr/bin/env python3
"""Render the default two-sphere scene.

With no arguments this renders the pink and blue spheres at 1050x750 with a
one radian vertical field of view and writes ./picture.ppm.

Usage:
    python -m examples.render_spheres [options]

Options:
    --width WIDTH       Image width in pixels (default: 1050)
    --height HEIGHT     Image height in pixels (default: 750)
    --fov FOV           Vertical field of view in radians (default: 1.0)
    --output OUTPUT     Output file path (default: ./picture.ppm)
    --png               Also write a PNG next to the PPM
    --cpu               Force the Taichi CPU backend
    --quiet             Suppress progress output

Example:
    python -m examples.render_spheres --width 320 --height 240 --output small.ppm
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

import taichi as ti

from src.python.core.config import (
    DEFAULT_FOV,
    DEFAULT_HEIGHT,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_WIDTH,
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the default diffuse sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=DEFAULT_WIDTH,
        help=f"Image width in pixels (default: {DEFAULT_WIDTH})",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=DEFAULT_HEIGHT,
        help=f"Image height in pixels (default: {DEFAULT_HEIGHT})",
    )
    parser.add_argument(
        "--fov",
        type=float,
        default=DEFAULT_FOV,
        help=f"Vertical field of view in radians (default: {DEFAULT_FOV})",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=DEFAULT_OUTPUT_PATH,
        help=f"Output file path (default: {DEFAULT_OUTPUT_PATH})",
    )
    parser.add_argument(
        "--png",
        action="store_true",
        help="Also write a PNG next to the PPM",
    )
    parser.add_argument(
        "--cpu",
        action="store_true",
        help="Force the Taichi CPU backend",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def render_spheres(
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    fov: float = DEFAULT_FOV,
    output_path: str = DEFAULT_OUTPUT_PATH,
    png: bool = False,
    quiet: bool = False,
) -> Path:
    """Render the default scene and save it.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Vertical field of view in radians.
        output_path: Output file path (PPM).
        png: If True, also write a PNG with the same stem.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved PPM file.
    """
    # Lazy imports to allow Taichi initialization first
    from src.python.core.config import RenderConfig
    from src.python.core.renderer import Renderer
    from src.python.scene.default_scene import create_default_scene

    config = RenderConfig(width=width, height=height, fov=fov, output_path=output_path)
    renderer = Renderer(config)

    spheres, lights = create_default_scene()
    if not quiet:
        print(
            f"Rendering {len(spheres)} spheres, {len(lights)} light(s) "
            f"at {width}x{height}..."
        )

    start_time = time.time()
    renderer.render(spheres, lights)
    output_file = renderer.save()

    if png:
        png_file = renderer.save(output_file.with_suffix(".png"))
        if not quiet:
            print(f"Saved to: {png_file.absolute()}")

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Use GPU if available, fall back to CPU
    if args.cpu:
        ti.init(arch=ti.cpu)
    else:
        try:
            ti.init(arch=ti.gpu)
            if not args.quiet:
                print("Using GPU backend")
        except Exception:
            ti.init(arch=ti.cpu)
            if not args.quiet:
                print("Using CPU backend")

    try:
        render_spheres(
            width=args.width,
            height=args.height,
            fov=args.fov,
            output_path=args.output,
            png=args.png,
            quiet=args.quiet,
        )
        return 0
    except (OSError, ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
