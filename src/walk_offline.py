"""Headless random walk render: no window, runs to completion and saves a PNG.

Steps are fired back to back instead of waiting ``speed`` ms apart, so even
large grids finish in seconds. Optionally records every Nth step into a GIF.

    python src/walk_offline.py [--grid-count 40] [--output walk.png]
    python src/walk_offline.py --format border --seed 3 --gif walk.gif --gif-every 5
"""

import argparse
import logging
import os
import time

import imageio.v3 as iio
import numpy as np
import pygame

from walk_canvas import BACKGROUND, GridCanvas
from walk_config import add_settings_arguments, describe, settings_from_args
from walk_driver import COMPLETED, WalkDriver
from walk_walker import make_rng

DEFAULT_MAX_STEPS = 1_000_000
PROGRESS_EVERY = 1000
GIF_FRAME_MS = 33  # ~30 fps


def build_parser():
    parser = argparse.ArgumentParser(description="Random walk offline renderer")
    add_settings_arguments(parser)
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for reproducibility"
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=DEFAULT_MAX_STEPS,
        help=f"Stop after this many steps even if unfinished (default: {DEFAULT_MAX_STEPS})",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="walk_render.png",
        help="Output filename (default: walk_render.png)",
    )
    parser.add_argument("--gif", type=str, default=None, help="Also save an animated GIF")
    parser.add_argument(
        "--gif-every", type=int, default=10, help="Capture every Nth step (default: 10)"
    )
    parser.add_argument("--verbose", action="store_true", help="Log walk events")
    return parser


def render(settings, seed=None, max_steps=DEFAULT_MAX_STEPS, gif_every=0, progress=print):
    """Run a walk to completion (or ``max_steps``) without a display.

    Returns ``(canvas, driver, frames)``; frames is empty unless gif_every > 0.
    """
    canvas = GridCanvas(settings)
    frames = []
    driver = WalkDriver(canvas.paint, on_restart=canvas.configure, rng=make_rng(seed))
    driver.restart(settings)

    while driver.state.tick_count < max_steps and driver.scheduler.run_next():
        tick = driver.state.tick_count
        if gif_every > 0 and tick % gif_every == 0:
            frames.append(canvas.to_array(BACKGROUND))
        if progress is not None and tick % PROGRESS_EVERY == 0:
            progress(f"  step {tick}  ({driver.cells_remaining()} cells remaining)")

    if gif_every > 0:
        frames.append(canvas.to_array(BACKGROUND))
    return canvas, driver, frames


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        format="%(asctime)s - %(levelname)s - %(message)s",
        level=logging.INFO if args.verbose else logging.WARNING,
    )
    settings = settings_from_args(args)

    # No window needed; offscreen surfaces only.
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    pygame.init()

    print(f"{args.output}")
    print("Settings:")
    print(describe(settings))
    print()

    t_start = time.time()
    canvas, driver, frames = render(
        settings,
        seed=args.seed,
        max_steps=args.max_steps,
        gif_every=args.gif_every if args.gif else 0,
    )
    total_time = time.time() - t_start

    print()
    if driver.status == COMPLETED:
        print(f"Square done after {driver.state.tick_count} color fills!")
    else:
        print(
            f"Stopped after {driver.state.tick_count} steps "
            f"({driver.cells_remaining()} cells below minimum_opacity)"
        )
    print(f"Simulation time: {total_time:.1f}s")

    canvas.save_png(args.output)
    print(f"Saved: {args.output} ({settings['canvas_size']}x{settings['canvas_size']})")

    if args.gif and frames:
        iio.imwrite(args.gif, np.stack(frames), duration=GIF_FRAME_MS, loop=0)
        print(f"Saved: {args.gif} ({len(frames)} frames)")

    pygame.quit()


if __name__ == "__main__":
    main()
