# map_generator/noise.py

"""
================================================================================
NOISE GENERATION UTILITIES
================================================================================
This module provides seeded 2D Perlin noise and the Noise type, which maps
the noise field onto a byte range. The kernels are pure and stateless; the
only state of a Noise is its configuration and the permutation table derived
from its seed.

Data Contract:
---------------
- Inputs:
    - p: A pre-shuffled NumPy permutation table (int array).
    - x, y: Coordinates (scalars or NumPy arrays).
    - octaves, persistence, lacunarity: Standard noise parameters.
- Outputs:
    - Noise samples in the range [-1, 1].
    - Noise.generate*: bytes in the configured [min, max] range.
- Side Effects: None.
- Invariants: Given the same seed and configuration, the output is deterministic.
================================================================================
"""

import numpy as np
from numba import njit

from . import config as DEFAULTS
from .errors import GenerationConfigError, validate_byte
from .size import Size2d

# Pre-defined gradient vectors for performance.
_GRADIENT_VECTORS = np.array([[0, 1], [0, -1], [1, 0], [-1, 0]])

@njit
def _lerp(a, b, x):
    "Linear interpolation."
    return a + x * (b - a)

@njit
def _fade(t):
    "6t^5 - 15t^4 + 10t^3"
    return t * t * t * (t * (t * 6 - 15) + 10)

@njit
def _gradient(h, x, y):
    """Calculates the dot product between a gradient vector and coordinates."""
    g = _GRADIENT_VECTORS[h % 4]
    # Use explicit indexing for Numba compatibility
    return g[0] * x + g[1] * y

@njit
def perlin_noise_point(p, x, y, octaves=1, persistence=0.5, lacunarity=2.0):
    """Samples 2D Perlin noise at a single point."""
    noise_val = 0.0
    amplitude = 1.0
    frequency = 1.0

    for _ in range(octaves):
        x_sample = x * frequency
        y_sample = y * frequency

        xi = int(np.floor(x_sample))
        yi = int(np.floor(y_sample))

        xf = x_sample - xi
        yf = y_sample - yi

        u = _fade(xf)
        v = _fade(yf)

        px0 = xi % 256
        px1 = (px0 + 1) % 256
        py0 = yi % 256
        py1 = (py0 + 1) % 256

        # Numba requires scalar indexing
        idx00 = p[p[px0] + py0]
        idx01 = p[p[px0] + py1]
        idx10 = p[p[px1] + py0]
        idx11 = p[p[px1] + py1]

        g00 = _gradient(idx00, xf, yf)
        g01 = _gradient(idx01, xf, yf - 1)
        g10 = _gradient(idx10, xf - 1, yf)
        g11 = _gradient(idx11, xf - 1, yf - 1)

        x1 = _lerp(g00, g10, u)
        x2 = _lerp(g01, g11, u)
        octave_noise = _lerp(x1, x2, v)

        noise_val += octave_noise * amplitude
        amplitude *= persistence
        frequency *= lacunarity

    return noise_val

@njit
def perlin_noise_2d(p, x, y, octaves=1, persistence=0.5, lacunarity=2.0):
    """
    Generate 2D Perlin noise for 2D arrays of coordinates.
    Each cell gives exactly the same value as perlin_noise_point().
    """
    rows, cols = x.shape
    total_noise = np.zeros((rows, cols))

    for i in range(rows):
        for j in range(cols):
            total_noise[i, j] = perlin_noise_point(
                p, x[i, j], y[i, j], octaves, persistence, lacunarity
            )

    return total_noise


def create_permutation_table(seed: int) -> np.ndarray:
    """Shuffles the permutation table deterministically and doubles it for wrap-around."""
    p = np.arange(DEFAULTS.PERMUTATION_TABLE_SIZE, dtype=int)
    rng = np.random.default_rng(seed)
    rng.shuffle(p)
    return np.stack([p, p]).flatten()


class Noise:
    """
    Smooth noise mapped onto the byte range [min_value, max_value].

    Two instances are equal if their configuration is equal. The permutation
    table is derived from the seed and takes no part in the comparison.
    """

    def __init__(self, seed: int, scale: float, min_value: int, max_value: int):
        validate_byte(min_value, "noise's minimum")
        validate_byte(max_value, "noise's maximum")
        if scale <= 0:
            raise GenerationConfigError(f"The noise's scale must be greater 0, but is {scale}!")
        if min_value >= max_value:
            raise GenerationConfigError(
                f"The noise's minimum ({min_value}) must be below its maximum ({max_value})!"
            )

        self.seed = seed
        self.scale = scale
        self.min_value = min_value
        self.max_value = max_value
        self._base = 1.0 + min_value / 255.0
        self._factor = (max_value - min_value) / 2.0
        self._p = create_permutation_table(seed)

    def _to_value(self, sample: float) -> int:
        return int(np.clip((sample + self._base) * self._factor, DEFAULTS.MIN_VALUE, DEFAULTS.MAX_VALUE))

    def _to_noise_space(self, x, y):
        """Scales cell coordinates and moves them off the integer lattice, where Perlin noise is 0."""
        offset = DEFAULTS.NOISE_SAMPLE_OFFSET
        return x / self.scale + offset, y / self.scale + offset

    def _sample(self, x: float, y: float) -> float:
        noise_x, noise_y = self._to_noise_space(x, y)
        return perlin_noise_point(
            self._p, noise_x, noise_y,
            DEFAULTS.NOISE_OCTAVES, DEFAULTS.NOISE_PERSISTENCE, DEFAULTS.NOISE_LACUNARITY
        )

    def generate1d(self, input_value: int) -> int:
        return self._to_value(self._sample(float(input_value), 0.0))

    def generate2d(self, x: int, y: int) -> int:
        return self._to_value(self._sample(float(x), float(y)))

    def generate_grid(self, size: Size2d) -> np.ndarray:
        """Samples every cell of the size in one call and returns the row-major bytes."""
        xs = np.arange(size.width, dtype=np.float64)
        ys = np.arange(size.height, dtype=np.float64)
        x_grid, y_grid = np.meshgrid(xs, ys)
        noise_x, noise_y = self._to_noise_space(x_grid, y_grid)
        samples = perlin_noise_2d(
            self._p, noise_x, noise_y,
            DEFAULTS.NOISE_OCTAVES, DEFAULTS.NOISE_PERSISTENCE, DEFAULTS.NOISE_LACUNARITY
        )
        values = np.clip((samples + self._base) * self._factor, DEFAULTS.MIN_VALUE, DEFAULTS.MAX_VALUE)
        return values.astype(np.uint8).ravel()

    def _key(self):
        return self.seed, self.scale, self.min_value, self.max_value

    def __eq__(self, other):
        if not isinstance(other, Noise):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return (
            f"Noise(seed={self.seed}, scale={self.scale}, "
            f"min_value={self.min_value}, max_value={self.max_value})"
        )
