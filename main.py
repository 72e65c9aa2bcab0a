# main.py
"""
Main entry point for the sand effect screens.

This script orchestrates the application lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Opens the window and builds the selected screen.
4. Runs the frame loop until the window is closed.
5. Handles clean shutdown.
"""
import logging
import time
import cProfile
import pstats
import io
from typing import Optional

import numpy as np
import pygame

from constants import CONFIG_PATH, DEFAULT_TITLE_IMAGE, DEFAULT_LOG_THROTTLE_FRAMES
from utils import setup_logging, load_config, session_seed

SCREENS = ("title", "pathway_sample")

PROFILE_ENTRIES = 20


def log_profile(profiler: cProfile.Profile, frames: int) -> None:
    """Logs the functions that dominated the frame loop, by cumulative time."""
    report = io.StringIO()
    stats = pstats.Stats(profiler, stream=report)
    stats.sort_stats(pstats.SortKey.CUMULATIVE).print_stats(PROFILE_ENTRIES)
    per_frame_ms = 1000.0 * stats.total_tt / frames if frames else 0.0
    logging.info(f"--- Frame loop profile: {frames} frames, {per_frame_ms:.2f} ms/frame ---")
    logging.info(f"\n{report.getvalue()}")


def build_screen(name: str, config: dict):
    """Creates the named screen from its config section."""
    from sand import PathwaySample
    from visualization import TitleScreen, PathwaySampleScreen, load_title_image

    if name == "title":
        title_params = config.get('title', {})
        image = load_title_image(title_params.get('image', DEFAULT_TITLE_IMAGE))
        return TitleScreen(
            image=image,
            seed=session_seed(title_params.get('seed')),
            reroll_jitter=title_params.get('reroll_jitter', True),
        )

    sample_params = config.get('pathway_sample', {})
    rng = np.random.default_rng(session_seed(sample_params.get('seed')))
    return PathwaySampleScreen(PathwaySample(sample_params, rng))


def main(screen_name: Optional[str] = None):
    """
    The main function to run a sand screen.
    """
    # Load configuration from the JSON file first.
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config(CONFIG_PATH)
    except Exception as e:
        print(f"FATAL: Could not load config.json. Error: {e}")
        raise SystemExit(1)

    setup_logging(config)

    run_params = config.get('run_control', {})
    screen_name = screen_name or run_params.get('screen', 'title')
    if screen_name not in SCREENS:
        logging.critical(f"Unknown screen '{screen_name}'. Expected one of {SCREENS}.")
        raise SystemExit(1)

    logging.info(f"--- Sand screen '{screen_name}' starting ---")

    from frame_clock import FrameClock
    from visualization import TitleScreen, PathwaySampleScreen, Visualizer

    caption = TitleScreen.caption if screen_name == "title" else PathwaySampleScreen.caption
    visualizer = Visualizer(caption)

    # The title image must exist before anything is shown.
    try:
        screen = build_screen(screen_name, config)
    except (FileNotFoundError, pygame.error) as e:
        logging.critical(f"FATAL: Could not start '{screen_name}'. Error: {e}")
        visualizer.close()
        raise SystemExit(1)

    frame_clock = FrameClock(on_frame=screen.update)

    log_throttle = run_params.get('log_throttle_frames', DEFAULT_LOG_THROTTLE_FRAMES)
    max_frames = run_params.get('max_frames')
    profiler = cProfile.Profile() if run_params.get('profile', False) else None

    running = True
    frame_num = 0

    if profiler:
        profiler.enable()
    while running:
        frame_clock.frame(time.perf_counter_ns())

        # The visualizer returns False once the user closes the window.
        if not visualizer.draw(screen):
            running = False
        frame_num += 1

        # Hot loops must throttle logs
        if log_throttle and frame_num % log_throttle == 0:
            logging.info(f"Frame {frame_num}")
            logging.debug(f"Frame {frame_num} | FPS: {visualizer.fps:.1f}")

        if max_frames is not None and frame_num >= max_frames:
            logging.info(f"Reached max_frames ({max_frames}). Stopping.")
            running = False
    if profiler:
        profiler.disable()

    frame_clock.stop()
    visualizer.close()
    logging.info("Frame loop finished.")

    if profiler:
        log_profile(profiler, frame_num)

    logging.info(f"--- Sand screen '{screen_name}' shutting down ---")


def title_main():
    main("title")


def pathway_sample_main():
    main("pathway_sample")


if __name__ == "__main__":
    main()
