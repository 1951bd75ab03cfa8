# main.py
"""
Main entry point for the particle heart.

This script orchestrates the entire lifecycle:
1. Loads configuration from `config.json` and resolves its preset.
2. Initializes the logging system.
3. Opens the window and places the particles inside the heart.
4. Runs the frame loop: draw, step, wait for the next frame.
5. Handles clean shutdown.
"""
import logging
import sys
from utils import setup_logging, load_config
import cProfile
import pstats
import io

def main(config_path: str = 'config.json'):
    """
    The main function to run the particle heart.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config(config_path)
    except Exception as e:
        print(f"FATAL: Could not load {config_path}. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Particle Heart Starting ---")

    sim_params = config['simulation_parameters']
    run_params = config.get('run_control', {})
    vis_params = config.get('visualization', {})

    from simulation import Simulation
    from visualization import Visualizer

    # --- Component Initialization ---
    # 1. The visualizer opens the window and so decides the surface size.
    visualizer = Visualizer(vis_params)

    # 2. The simulation context is built for that surface.
    try:
        sim = Simulation(sim_params, visualizer.width, visualizer.height)
    except ValueError:
        # Configuration and placement errors are already logged as critical.
        visualizer.close()
        raise

    fps = run_params.get('fps', 60)
    log_throttle = run_params.get('log_throttle_steps', 600)
    max_steps = run_params.get('max_steps', 0) # 0 runs until the window closes
    profiler = cProfile.Profile() if run_params.get('profile', False) else None

    running = True
    step_num = 0

    if profiler:
        profiler.enable()
    try:
        while running:
            # The visualizer drains input events into the simulation before
            # drawing, so each step sees a consistent snapshot.
            if not visualizer.draw(sim):
                break

            sim.step()
            step_num += 1

            # Hot loops must throttle logs
            if step_num % log_throttle == 0:
                logging.info(f"Frame {step_num} | {visualizer.clock.get_fps():.1f} fps")
                logging.debug(
                    f"Frame {step_num} | Mean displacement: {sim.particles.mean_displacement():.2f}px | "
                    f"Active ripples: {len(sim.ripples)} | Pointer: {sim.pointer}"
                )

            if max_steps and step_num >= max_steps:
                logging.info(f"Reached max_steps ({max_steps}). Stopping.")
                running = False

            visualizer.tick(fps)
    except KeyboardInterrupt:
        logging.info("Interrupted by user.")
    finally:
        if profiler:
            profiler.disable()
        visualizer.close()

    logging.info("Frame loop finished.")

    if profiler:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        # Sort by cumulative time spent in the function
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20) # Print top 20 slowest functions
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Particle Heart Shutting Down ---")


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else 'config.json')
