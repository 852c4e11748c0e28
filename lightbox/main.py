"""
Headless runner: loads a scene CSV, advances the beams for a number of frames
and writes their traces to CSV.

    python -m lightbox --scene scene.csv --frames 600 --out traces.csv
"""
import argparse
import logging

from lightbox.Vec2 import Vec2
from lightbox.Scene import Scene
from lightbox.config import SimSettings
from lightbox.scheduler import FrameScheduler
from lightbox.scene_io import load_scene_csv, save_traces_csv
from lightbox.logging_config import setup_logging
from lightbox.exceptions import LightboxError

logger = logging.getLogger(__name__)


def demo_scene(settings : SimSettings) -> Scene:
    # light box facing a 45° mirror that turns the beams down through a convex lens onto a prism
    scene = Scene(settings)
    scene.AddElement("LightSource", Vec2(100, 300))
    scene.AddElement("Mirror", Vec2(400, 300), 45)
    scene.AddElement("ConvexLens", Vec2(400, 100), 90)
    scene.AddElement("Prism", Vec2(400, -100))
    return scene


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lightbox", description="Step light beams through a 2-D optics scene.")
    parser.add_argument("--scene", help="scene CSV (kind,x,y[,rotation]); a demo scene is used when omitted")
    parser.add_argument("--config", help="settings CSV (key,value)")
    parser.add_argument("--frames", type=int, default=600, help="number of frames to simulate")
    parser.add_argument("--beams", type=int, help="number of beams (overrides the config)")
    parser.add_argument("--spread", type=float, help="angle between neighbouring beams in degrees")
    parser.add_argument("--out", help="write the traces to this CSV")
    parser.add_argument("--log-level", default="INFO", help="DEBUG, INFO, WARNING, ...")
    parser.add_argument("--log-file", help="also log to this file")
    parser.add_argument("--progress", action="store_true", help="show a progress bar")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(getattr(logging, str(args.log_level).upper(), logging.INFO), args.log_file)

    try:
        settings = SimSettings.from_csv(args.config) if args.config else SimSettings()
        overrides = {}
        if args.beams is not None:
            overrides["beam_count"] = args.beams
        if args.spread is not None:
            overrides["beam_spread_degrees"] = args.spread
        if overrides:
            settings = settings.replace(**overrides)

        scene = load_scene_csv(args.scene, settings) if args.scene else demo_scene(settings)
    except (LightboxError, OSError) as e:
        logger.error("%s", e)
        return 2

    if scene.LightSourceElement() is None:
        logger.warning("Scene has no light source; beams will not move")

    scheduler = FrameScheduler(scene)
    bounces = scheduler.RunFrames(args.frames, progress=args.progress)

    for beam in scene.beams:
        logger.info("%s: %s after %d point(s), %s", beam.name, beam.state.value, len(beam.trace), beam.position)
    logger.info("Total reflections: %d", bounces)

    if args.out:
        save_traces_csv(scene, args.out)
    return 0
