# ripple.py
"""
Registry of the expanding ripple waves triggered by clicks and taps.

Each ripple is one row of a (M, 4) float64 array so the whole registry can be
handed to the Numba update kernel without conversion.
"""
import logging
import numpy as np
from typing import Dict, Any

# Column layout of RippleField.data
RIPPLE_X = 0
RIPPLE_Y = 1
RIPPLE_RADIUS = 2
RIPPLE_STRENGTH = 3

# --- Data Contracts ---
#
# class RippleField:
#   - __init__(self, params: Dict[str, Any]):
#     - Inputs:
#       - params: Dictionary of simulation parameters from config.json.
#         - "ripple_initial_strength": float
#         - "ripple_decay": float in (0, 1)
#         - "ripple_wave_speed": float
#         - "ripple_strength_epsilon": float
#         - "max_ripples": int, 0 for no cap
#
#   - spawn(self, x: float, y: float) -> None:
#     - Side Effects: Appends a ripple with radius 0 and the initial strength.
#       When the soft cap is reached, the oldest ripple is dropped first.
#
#   - tick(self, surface_width: float) -> None:
#     - Side Effects: Grows every radius by wave_speed, decays every strength
#       by decay, then removes ripples that are too weak or have travelled
#       beyond twice the surface width.
#     - Invariants: self.data keeps shape (M, 4) and dtype float64.


class RippleField:
    """
    A growing, decaying, expiring set of circular wave sources.
    """
    def __init__(self, params: Dict[str, Any]):
        self.initial_strength = float(params['ripple_initial_strength'])
        self.decay = float(params['ripple_decay'])
        self.wave_speed = float(params['ripple_wave_speed'])
        self.strength_epsilon = float(params['ripple_strength_epsilon'])
        self.max_ripples = int(params.get('max_ripples', 0))
        self.data = np.empty((0, 4), dtype=np.float64)

    def __len__(self) -> int:
        return self.data.shape[0]

    @property
    def origins(self) -> np.ndarray:
        return self.data[:, RIPPLE_X:RIPPLE_Y + 1]

    @property
    def radii(self) -> np.ndarray:
        return self.data[:, RIPPLE_RADIUS]

    @property
    def strengths(self) -> np.ndarray:
        return self.data[:, RIPPLE_STRENGTH]

    def spawn(self, x: float, y: float) -> None:
        """Starts a new ripple at (x, y)."""
        if self.max_ripples and len(self) >= self.max_ripples:
            self.data = self.data[len(self) - self.max_ripples + 1:]
            logging.debug(f"Ripple cap of {self.max_ripples} reached, dropped the oldest.")

        ripple = np.array([[x, y, 0.0, self.initial_strength]], dtype=np.float64)
        self.data = np.vstack((self.data, ripple))
        logging.debug(f"Ripple spawned at ({x:.0f}, {y:.0f}). Active ripples: {len(self)}")

    def tick(self, surface_width: float) -> None:
        """Ages every ripple by one frame and prunes the expired ones."""
        if not len(self):
            return

        self.data[:, RIPPLE_RADIUS] += self.wave_speed
        self.data[:, RIPPLE_STRENGTH] *= self.decay

        alive = (
            (self.data[:, RIPPLE_STRENGTH] >= self.strength_epsilon)
            & (self.data[:, RIPPLE_RADIUS] <= 2 * surface_width)
        )
        if not alive.all():
            self.data = self.data[alive]
            logging.debug(f"Pruned {int((~alive).sum())} expired ripple(s).")

    def clear(self) -> None:
        """Removes every ripple."""
        self.data = np.empty((0, 4), dtype=np.float64)
