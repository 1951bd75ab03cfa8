# geometry.py
"""
Heart-curve geometry used to place the particles.

The heart is the implicit curve (x^2 + y^2 - 1)^3 = x^2 * y^3. A point is
inside the heart when the left-hand side minus the right-hand side is
non-positive. Particles are placed by rejection sampling against that test.
"""
import logging
import numpy as np
from typing import Any, Dict, Union
from constants import (
    DEFAULT_HEART_SCALE, DEFAULT_HEART_SCALE_DIVISOR, PLACEMENT_BATCH_SIZE
)

ArrayLike = Union[float, np.ndarray]

# --- Data Contracts ---
#
# is_inside_heart(x, y, scale, width, height) -> bool | np.ndarray:
#   - Inputs: point coordinates in surface pixels (scalars or equally shaped
#     arrays), the heart scale in pixels, and the surface dimensions.
#   - Outputs: True where the point lies inside or on the heart boundary.
#   - Side Effects: None.
#
# sample_heart_points(rng, count, scale, width, height, max_attempts) -> np.ndarray:
#   - Outputs: array of shape (count, 2), float64, in sampling (unflipped)
#     orientation. Every row satisfies is_inside_heart.
#   - Side Effects: Advances rng. Raises PlacementError when more than
#     max_attempts candidates are drawn without reaching count.


class PlacementError(ValueError):
    """Raised when rejection sampling cannot fill the heart."""


def is_inside_heart(x: ArrayLike, y: ArrayLike, scale: float, width: float, height: float):
    """
    Tests whether a point lies within the heart centred on the surface.

    Works element-wise when x and y are NumPy arrays.
    """
    heart_x = (x - width / 2) / scale
    heart_y = (y - height / 2) / scale
    heart_equation = (heart_x * heart_x + heart_y * heart_y - 1) ** 3 - heart_x * heart_x * heart_y ** 3
    return heart_equation <= 0


def compute_heart_scale(width: float, height: float, params: Dict[str, Any]) -> float:
    """
    Returns the heart scale in pixels for a surface of the given size.

    A numeric "heart_scale" is used as-is; "auto" follows the surface.
    """
    scale = params.get('heart_scale', DEFAULT_HEART_SCALE)
    if scale == "auto":
        divisor = params.get('heart_scale_divisor', DEFAULT_HEART_SCALE_DIVISOR)
        return min(width, height) / divisor
    return float(scale)


def sample_heart_points(
    rng: np.random.Generator,
    count: int,
    scale: float,
    width: float,
    height: float,
    max_attempts: int,
) -> np.ndarray:
    """
    Draws `count` uniform points inside the heart by rejection sampling.

    Candidates are drawn in batches over [0, width) x [0, height) and only
    the accepted ones are kept, in the order they were drawn.
    """
    count = int(count)
    max_attempts = int(max_attempts)
    accepted = []
    accepted_count = 0
    attempts = 0

    while accepted_count < count:
        if attempts >= max_attempts:
            msg = (
                f"Placement error: only {accepted_count} of {count} particles "
                f"fit inside the heart after {attempts} attempts "
                f"(scale {scale:.2f}, surface {width}x{height})."
            )
            logging.critical(msg)
            raise PlacementError(msg)

        batch_size = min(PLACEMENT_BATCH_SIZE, max_attempts - attempts)
        candidates = rng.uniform(low=[0, 0], high=[width, height], size=(batch_size, 2))
        attempts += batch_size

        mask = is_inside_heart(candidates[:, 0], candidates[:, 1], scale, width, height)
        hits = candidates[mask][:count - accepted_count]
        accepted.append(hits)
        accepted_count += len(hits)

    points = np.concatenate(accepted) if accepted else np.empty((0, 2), dtype=np.float64)
    logging.debug(
        f"Placed {count} heart points in {attempts} attempts "
        f"(acceptance {count / max(attempts, 1):.1%})."
    )
    return points
