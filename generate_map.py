# generate_map.py

"""
================================================================================
MAP GENERATION SCRIPT
================================================================================
This script is a command-line tool that loads a map generation from a JSON
file, runs its pipeline and reports a summary of every generated attribute.
It is meant for checking a generation file; it doesn't render or store the
generated map.

Usage:
    python generate_map.py --config path/to/your/map.json
================================================================================
"""
import sys
import logging
import argparse

from map_generator import config as DEFAULTS
from map_generator.errors import GenerationConfigError
from map_generator.storage import JsonMapStorage


def summarize_map(map2d, logger: logging.Logger) -> None:
    """Logs the value range of each attribute."""
    for attribute_id, attribute in enumerate(map2d.get_all()):
        values = attribute.get_all()
        logger.info(
            f"  - [{attribute_id}] {attribute.name}: "
            f"min={int(values.min())} mean={float(values.mean()):.2f} max={int(values.max())}"
        )


def generate_map(config_path: str) -> int:
    """
    Loads the generation file, generates the map and logs its summary.
    Returns the exit code of the script.
    """
    # 1. --- Setup Logging ---
    logging.basicConfig(
        level=logging.INFO,
        format=DEFAULTS.LOG_FORMAT,
        stream=sys.stdout
    )
    logger = logging.getLogger("MapGenerator")

    # 2. --- Load the Map Generation ---
    logger.info(f"Loading map generation from: {config_path}")
    try:
        generation = JsonMapStorage().read(config_path)
    except (FileNotFoundError, GenerationConfigError) as e:
        logger.critical(f"Failed to load the map generation: {e}")
        return 1

    # 3. --- Generate ---
    generation.logger = logger
    map2d = generation.generate()

    logger.info(f"Map '{map2d.name}' has {len(map2d.get_all())} attributes:")
    summarize_map(map2d, logger)
    return 0


# --- Command-Line Interface ---
if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generates a map from a JSON generation file.")
    parser.add_argument(
        "--config",
        type=str,
        required=True,
        help="Path to the JSON file describing the map generation."
    )
    args = parser.parse_args()

    sys.exit(generate_map(args.config))
