# map_generator/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the map
generator. These values are used if they are not explicitly provided by a
stored map generation or on the command line.

DO NOT MODIFY THIS FILE FOR A SPECIFIC MAP.
Instead, describe the map in a generation file and load it with a storage
adapter.
================================================================================
"""

# --- Byte Range ---
# Every attribute stores one unsigned byte per cell.
MIN_VALUE = 0
MAX_VALUE = 255

# The number of distinct inputs a 2d lookup table has to partition per axis.
LOOKUP_TABLE_INPUT_RANGE = 256

# --- Pipeline ---
# A map generation needs at least one step to create an attribute and one
# step to modify it.
MIN_GENERATION_STEPS = 2

# --- Noise Generation ---
DEFAULT_SEED = 1337
# The map generator samples a single octave unless told otherwise.
NOISE_OCTAVES = 1
NOISE_PERSISTENCE = 0.5
NOISE_LACUNARITY = 2.0
# The size of the permutation table before it is doubled for wrap-around.
PERMUTATION_TABLE_SIZE = 256
# Added to the scaled coordinates, so a scale of 1 doesn't sample only
# integer lattice points.
NOISE_SAMPLE_OFFSET = 0.5

# --- Storage Defaults ---
DEFAULT_MAP_NAME = "map"
DEFAULT_MAP_WIDTH = 100
DEFAULT_MAP_HEIGHT = 100
DEFAULT_ATTRIBUTE_VALUE = 0
DEFAULT_MINIMUM = 0
JSON_INDENT = 2

# --- Logging ---
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
