# main.py
import argparse
import dataclasses
import logging
import sys

import numpy as np

from pathtracer.config import RenderSettings
from pathtracer.core.utils import make_rng
from pathtracer.geometry.bvh import BVHNode
from pathtracer.renderer.image_io import save_image
from pathtracer.renderer.raytracer import Renderer
from pathtracer.renderer.tone_mapping import TONE_MAPPERS
from pathtracer.scenes import SCENES, get_scene

logger = logging.getLogger("pathtracer")

# Random stream key for scene construction; row streams use keys 0..height-1.
SCENE_STREAM = 2**32 - 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pathtracer",
        description="Render a built-in scene with a CPU Monte Carlo path tracer.",
    )
    parser.add_argument("--scene", default="bouncing_spheres", choices=sorted(SCENES),
                        help="scene to render (default: %(default)s)")
    parser.add_argument("--width", type=int, help="image width in pixels")
    parser.add_argument("--aspect-ratio", type=float, help="image width over height")
    parser.add_argument("--samples", type=int, help="samples per pixel")
    parser.add_argument("--max-depth", type=int, help="maximum bounces per path")
    parser.add_argument("--workers", type=int, help="worker threads (default: one per core)")
    parser.add_argument("--seed", type=int, help="seed for a reproducible image")
    parser.add_argument("--texture", help="image file for the earth scene")
    parser.add_argument("--output", "-o", default="image.ppm",
                        help="output file; .ppm is written as plain PPM, "
                             "other extensions through Pillow (default: %(default)s)")
    parser.add_argument("--no-bvh", action="store_true",
                        help="intersect against the flat object list")
    parser.add_argument("--tone-map", default="gamma", choices=sorted(TONE_MAPPERS),
                        help="conversion from linear color to bytes (default: %(default)s)")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="log debug messages")
    verbosity.add_argument("--quiet", action="store_true", help="log warnings and errors only")
    return parser


def configure_logging(args: argparse.Namespace) -> None:
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args)

    try:
        values = {
            'samples_per_pixel': args.samples,
            'max_depth': args.max_depth,
            'workers': args.workers,
            'seed': args.seed,
        }
        render_settings = RenderSettings(**{k: v for k, v in values.items() if v is not None})
        # Scene layout draws from its own stream so it never shifts the pixel samples.
        scene_rng = make_rng(args.seed, SCENE_STREAM)
        world, camera_settings = get_scene(args.scene, scene_rng, texture=args.texture)

        overrides = {}
        if args.width is not None:
            overrides['image_width'] = args.width
        if args.aspect_ratio is not None:
            overrides['aspect_ratio'] = args.aspect_ratio
        camera_settings = dataclasses.replace(camera_settings, **overrides)
        renderer = Renderer(camera_settings, render_settings)
    except (KeyError, ValueError, FileNotFoundError) as e:
        parser.error(str(e))

    target = world if args.no_bvh else BVHNode.from_list(world)
    if args.no_bvh:
        logger.info("BVH disabled, testing all %d objects per ray", len(world))

    image = renderer.render(target)
    rgb8 = TONE_MAPPERS[args.tone_map](image)
    save_image(args.output, np.asarray(rgb8))
    return 0


if __name__ == "__main__":
    sys.exit(main())
