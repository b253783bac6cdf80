#!/usr/bin/env python3
"""Render the demo scene.

This script renders the built-in demo scene (three spheres on a large floor
sphere, lit by ambient, point and directional lights) and saves it as a PNG.
A scene manifest in JSON can be given instead of the demo scene.

Usage:
    python -m examples.render_scene [options]

Options:
    --width WIDTH       Canvas width in pixels (default: 800)
    --height HEIGHT     Canvas height in pixels (default: 600)
    --depth DEPTH       Reflection bounces per ray (default: 3)
    --scene PATH        JSON scene manifest (default: built-in demo scene)
    --yaw DEGREES       Camera yaw; turns the camera away from +z
    --pitch DEGREES     Camera pitch
    --frames COUNT      Number of frames to render (default: 1)
    --output OUTPUT     Output file path (default: scene.png)
    --verbose           Log frame timings

Example:
    python -m examples.render_scene --width 320 --height 240 --depth 2
"""

from __future__ import annotations

import argparse
import json
import logging
import math
import sys
from pathlib import Path

import taichi as ti

logger = logging.getLogger("render_scene")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the demo scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=800,
        help="Canvas width in pixels (default: 800)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=600,
        help="Canvas height in pixels (default: 600)",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=3,
        help="Reflection bounces per ray (default: 3)",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene manifest (default: built-in demo scene)",
    )
    parser.add_argument(
        "--yaw",
        type=float,
        default=None,
        help="Camera yaw in degrees (90 looks down +z)",
    )
    parser.add_argument(
        "--pitch",
        type=float,
        default=0.0,
        help="Camera pitch in degrees (default: 0)",
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=1,
        help="Number of frames to render (default: 1)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="scene.png",
        help="Output file path (default: scene.png)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log frame timings",
    )
    return parser.parse_args()


def render_scene(
    width: int = 800,
    height: int = 600,
    depth: int = 3,
    scene_path: str | None = None,
    yaw: float | None = None,
    pitch: float = 0.0,
    frames: int = 1,
    output_path: str = "scene.png",
) -> Path:
    """Render a scene and save the last frame to file.

    Args:
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        depth: Reflection bounces per primary ray.
        scene_path: Optional JSON manifest; the demo scene is used if None.
        yaw: Camera yaw in degrees, or None for the fixed +z camera.
        pitch: Camera pitch in degrees (only with a yaw).
        frames: Number of frames to render.
        output_path: Output file path (PNG).

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from src.raytracer.camera.camera import OrientedCamera
    from src.raytracer.core.renderer import Renderer
    from src.raytracer.scene.demo import create_demo_scene
    from src.raytracer.scene.scene import Scene

    scene, camera = create_demo_scene(width, height)
    if scene_path is not None:
        scene.free()
        with open(scene_path, encoding="utf-8") as handle:
            scene = Scene.from_dict(json.load(handle))

    if yaw is not None:
        camera = OrientedCamera(
            position=camera.position,
            viewport_width=camera.viewport_width,
            viewport_height=camera.viewport_height,
            projection_distance=camera.projection_distance,
            yaw=math.radians(yaw),
            pitch=math.radians(pitch),
        )

    logger.info("Rendering %s with %s at %dx%d", scene, camera, width, height)

    renderer = Renderer(width, height, depth)

    def progress_callback(done: int, total: int) -> None:
        logger.info("Frame %d/%d", done, total)

    frame = None
    for frame in renderer.frames(camera, scene, frames, callback=progress_callback):
        pass

    output_file = Path(output_path)
    if frame is not None:
        frame.save_png(str(output_file))
        logger.info("Saved to: %s", output_file.absolute())

    scene.free()
    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Use GPU if available, fall back to CPU
    try:
        ti.init(arch=ti.gpu)
        logger.info("Using GPU backend")
    except Exception:
        ti.init(arch=ti.cpu)
        logger.info("Using CPU backend")

    try:
        render_scene(
            width=args.width,
            height=args.height,
            depth=args.depth,
            scene_path=args.scene,
            yaw=args.yaw,
            pitch=args.pitch,
            frames=args.frames,
            output_path=args.output,
        )
        return 0
    except Exception as e:
        logger.error("Error: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
