"""Realtime random walk: a cursor wanders the grid painting cells in shifting
hues until every cell has been covered enough.

    python src/walk_app.py [--grid-count 20] [--format grid] [--speed 10] ...
    python src/walk_app.py --format border --path-limit 60 --hue-shift 2
    python src/walk_app.py --seed 7 --gif walk.gif

Keys: SPACE pause/play, R restart with the same settings, S save PNG,
Shift+S pause and edit settings in the terminal (blank line resumes,
key=value pairs restart with them), ESC quit.
"""

import argparse
import logging
import time
from collections import deque

import imageio.v3 as iio
import numpy as np
import pygame

from walk_canvas import BACKGROUND, GridCanvas
from walk_config import add_settings_arguments, describe, parse_options, settings_from_args
from walk_driver import PAUSED, RUNNING, WalkDriver
from walk_walker import make_rng

# --- Display ---
FPS = 120
GIF_FRAME_MS = 33  # ~30 fps
MAX_GIF_FRAMES = 600


def build_parser():
    parser = argparse.ArgumentParser(description="Random walk painter")
    add_settings_arguments(parser)
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for reproducibility"
    )
    parser.add_argument(
        "--fps", type=int, default=FPS, help=f"Frame rate cap (default: {FPS})"
    )
    parser.add_argument(
        "--gif", type=str, default=None, help="Record frames and save a GIF on exit"
    )
    parser.add_argument("--verbose", action="store_true", help="Log walk events")
    return parser


def snapshot_name():
    return time.strftime("walk_%Y%m%d_%H%M%S.png")


def edit_settings(driver, prompt=None):
    """Pause, show the settings and read changes from the terminal.

    A blank line (or EOF) resumes the walk; anything else restarts it with
    the typed options merged over the current settings. Returns True on restart.
    """
    driver.pause()
    print("Paused. Current settings:")
    print(describe(driver.settings))
    try:
        text = (prompt or input)("New settings as key=value (blank to resume): ")
    except EOFError:
        text = ""

    options = parse_options(text)
    if not options:
        driver.play()
        return False
    driver.restart(options)
    print(describe(driver.settings))
    return True


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        format="%(asctime)s - %(levelname)s - %(message)s",
        level=logging.INFO if args.verbose else logging.WARNING,
    )
    settings = settings_from_args(args)

    pygame.init()
    screen = pygame.display.set_mode((settings["canvas_size"], settings["canvas_size"]))
    clock = pygame.time.Clock()

    canvas = GridCanvas(settings)
    frames = deque(maxlen=MAX_GIF_FRAMES)

    def done(total):
        print(f"Square done after {total} color fills!")

    driver = WalkDriver(
        canvas.paint, done=done, on_restart=canvas.configure, rng=make_rng(args.seed)
    )
    print("Settings:")
    print(describe(settings))
    driver.restart(settings)

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    if driver.status == RUNNING:
                        driver.pause()
                    elif driver.status == PAUSED:
                        driver.play()
                elif event.key == pygame.K_r:
                    driver.restart()
                elif event.key == pygame.K_s and event.mod & pygame.KMOD_SHIFT:
                    if edit_settings(driver):
                        size = driver.settings["canvas_size"]
                        if screen.get_size() != (size, size):
                            screen = pygame.display.set_mode((size, size))
                elif event.key == pygame.K_s:
                    print(f"Saved: {canvas.save_png(snapshot_name())}")

        driver.scheduler.poll()

        screen.blit(canvas.composite(BACKGROUND), (0, 0))
        pygame.display.flip()

        # --- Capture frame ---
        if args.gif and driver.status == RUNNING:
            frames.append(canvas.to_array(BACKGROUND))

        pygame.display.set_caption(
            f"Random walk — {driver.settings['format']}  |  "
            f"tick={driver.state.tick_count}  "
            f"remaining={driver.cells_remaining()}  "
            f"{driver.status}  [SPACE=pause R=restart S=save]"
        )

        clock.tick(args.fps)

    pygame.quit()

    if args.gif and frames:
        iio.imwrite(args.gif, np.stack(frames), duration=GIF_FRAME_MS, loop=0)
        print(f"Saved: {args.gif} ({len(frames)} frames)")


if __name__ == "__main__":
    main()
