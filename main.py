# main.py
"""
Main entry point for the particle field.

This script orchestrates the whole lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Resolves the theme and sets up the window, scheduler and renderer.
4. Runs the frame loop.
5. Handles clean shutdown.
"""
import argparse
import logging
from utils import setup_logging, load_config
import numpy as np
import cProfile
import pstats
import io


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Run the animated particle field.")
    parser.add_argument(
        "--config", "-c", default="config.json", help="Path to the JSON configuration file"
    )
    return parser.parse_args(argv)


def main(argv=None):
    """
    The main function to run the particle field.
    """
    args = parse_args(argv)

    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"FATAL: Could not load {args.config}. Error: {e}")
        return 1

    setup_logging(config["logging"])

    logging.info("--- Particle Field Starting ---")

    field_params = config.get('particle_field', {})
    run_params = config.get('run_control', {})
    vis_params = config.get('visualization', {})
    theme_params = config.get('theme', {})

    from constants import (
        DEFAULT_CAPACITY, DEFAULT_CONNECTION_DISTANCE, DEFAULT_SPATIAL_GRID_THRESHOLD
    )
    from renderer import ParticleFieldRenderer
    from scheduler import FrameScheduler
    from theme import ThemeStore
    from visualization import Visualizer

    # --- Component Initialization ---
    theme = ThemeStore(
        theme_params.get('preference_file', 'theme.json'),
        prefers_dark=theme_params.get('prefers_dark', False),
    )
    scheduler = FrameScheduler()
    renderer = ParticleFieldRenderer(
        scheduler,
        seed=field_params.get('seed'),
        spatial_grid_threshold=field_params.get(
            'spatial_grid_threshold', DEFAULT_SPATIAL_GRID_THRESHOLD
        ),
    )

    # The window has to exist before the renderer can read the canvas size.
    visualizer = Visualizer(renderer, theme, vis_params)
    renderer.initialize(
        visualizer.canvas,
        capacity=field_params.get('capacity', DEFAULT_CAPACITY),
        connection_distance=field_params.get('connection_distance', DEFAULT_CONNECTION_DISTANCE),
    )

    profiler = cProfile.Profile() if run_params.get('profile', False) else None

    log_throttle = run_params.get('log_throttle_frames', 600)
    max_frames = run_params.get('max_frames', 0)  # 0 runs until the window closes

    running = True
    frame_num = 0

    if profiler:
        profiler.enable()
    while running:
        if not visualizer.run_frame(scheduler):
            break
        frame_num += 1

        # Hot loops must throttle logs
        if log_throttle and frame_num % log_throttle == 0:
            logging.info(f"Frame {frame_num}")

            particles = renderer.particles
            avg_speed = np.mean(np.linalg.norm(particles.velocities, axis=1)) if len(particles) else 0.0
            logging.debug(
                f"Frame {frame_num} | Average Speed: {avg_speed:.4f} | "
                f"Connections: {renderer.last_connection_count}"
            )

        if max_frames and frame_num >= max_frames:
            logging.info(f"Reached max_frames ({max_frames}). Stopping.")
            running = False
    if profiler:
        profiler.disable()

    renderer.stop()
    visualizer.close()
    logging.info("Frame loop finished.")

    if profiler:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        # Sort by cumulative time spent in the function
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20)
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Particle Field Shutting Down ---")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
