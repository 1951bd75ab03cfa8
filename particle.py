# particle.py
"""
Manages the state of all particles in the heart.

This module defines the ParticleSystem class, which is responsible for
placing the particles inside the heart curve and storing their data
(e.g., position, rest position, size, density, idle phase) in efficient
NumPy arrays.
"""
import logging
import numpy as np
from typing import Dict, Any, Optional
from geometry import sample_heart_points
from constants import (
    PARTICLE_SIZE_RANGE, PARTICLE_DENSITY_RANGE, PARTICLE_PHASE_RANGE
)

# --- Data Contracts ---
#
# class ParticleSystem:
#   - __init__(self, params, width, height, heart_scale, rng=None):
#     - Inputs:
#       - params: Dictionary of simulation parameters from config.json.
#         - "seed": int or None
#         - "particle_count": int
#         - "max_placement_attempts": int
#       - width: float, width of the drawing surface.
#       - height: float, height of the drawing surface.
#       - heart_scale: float, size of the heart in pixels.
#       - rng: Optional shared generator. When omitted one is created from "seed".
#     - Outputs: None
#     - Side Effects: Initializes internal NumPy arrays for particle state.
#       Raises geometry.PlacementError if the heart cannot be filled.
#     - Invariants:
#       - self.positions is a NumPy array of shape (N, 2) of dtype float64.
#       - self.base_positions has shape (N, 2), float64, and is read-only.
#       - self.sizes, self.densities, self.phases have shape (N,), float64.
#       - sizes lie in [1, 3), densities in [5, 15).


class ParticleSystem:
    """
    A container for all particles, managing their state via NumPy arrays.
    """
    def __init__(
        self,
        params: Dict[str, Any],
        width: float,
        height: float,
        heart_scale: float,
        rng: Optional[np.random.Generator] = None,
    ):
        """
        Places the particles inside the heart and initializes their state.

        Args:
            params (Dict[str, Any]): Simulation parameters from config.
            width (float): The width of the drawing surface.
            height (float): The height of the drawing surface.
            heart_scale (float): The heart size in pixels.
            rng (np.random.Generator, optional): Generator to draw from.
        """
        self.particle_count = int(params['particle_count'])
        self.seed = params.get('seed')
        self.width = width
        self.height = height
        self.heart_scale = heart_scale

        # All randomness flows from one generator so a seeded run is repeatable.
        self.rng = rng if rng is not None else np.random.default_rng(self.seed)

        points = sample_heart_points(
            self.rng,
            self.particle_count,
            heart_scale,
            width,
            height,
            int(params['max_placement_attempts']),
        )
        # The curve points down in screen coordinates, flip it upright.
        points[:, 1] = height - points[:, 1]

        self.base_positions = points
        self.base_positions.flags.writeable = False
        self.positions = points.copy()
        self.sizes = self.rng.uniform(*PARTICLE_SIZE_RANGE, size=self.particle_count)
        self.densities = self.rng.uniform(*PARTICLE_DENSITY_RANGE, size=self.particle_count)
        self.phases = self.rng.uniform(*PARTICLE_PHASE_RANGE, size=self.particle_count)

        logging.info(
            f"ParticleSystem initialized with {self.particle_count} particles "
            f"(heart scale {heart_scale:.1f}px on {width}x{height} surface)."
        )
        logging.debug(
            f"Particle data arrays created. "
            f"Positions shape: {self.positions.shape}, "
            f"Sizes shape: {self.sizes.shape}, "
            f"Phases shape: {self.phases.shape}"
        )

    def __len__(self) -> int:
        return self.particle_count

    def mean_displacement(self) -> float:
        """Average distance between each particle and its rest position."""
        return float(np.mean(np.linalg.norm(self.positions - self.base_positions, axis=1)))
