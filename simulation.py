# simulation.py
"""
Handles the core simulation logic of the particle heart.

This module defines the Simulation class, the single context object that
owns every piece of shared state (particles, ripples, pointer, surface
size). Input handlers mutate it between frames; step() advances it by one
frame, ageing the ripples and then updating every particle with the
Numba-jitted force kernel.
"""
import logging
import numpy as np
from typing import Dict, Any, Optional, Tuple
from numba import jit
from particle import ParticleSystem
from ripple import RippleField
from geometry import compute_heart_scale

# --- Data Contracts ---
#
# class Simulation:
#   - __init__(self, params: Dict[str, Any], width: int, height: int):
#     - Inputs:
#       - params: Dictionary of simulation parameters (defaults and preset
#         already applied, see utils.apply_preset).
#       - width, height: initial drawing surface size.
#     - Side Effects: Validates params (ValueError on failure), builds the
#       RNG, the RippleField and the first ParticleSystem.
#
#   - resize(self, width, height) -> None:
#     - Side Effects: Recomputes heart_scale and replaces the whole
#       ParticleSystem. On PlacementError the previous population is kept
#       and the error is re-raised.
#
#   - set_pointer / clear_pointer / trigger_ripple: event-side mutations.
#
#   - step(self) -> None:
#     - Side Effects: Ages ripples, then updates positions and phases of
#       every particle in place.
#     - Invariants: base_positions never change. Particle count is constant.


@jit(nopython=True)
def idle_position(base_x, base_y, phase, amplitude):
    """
    Rest position plus the idle orbit offset for the given phase.

    Pure: the idle term is always re-derived from the base position rather
    than accumulated.
    """
    return base_x + np.cos(phase) * amplitude, base_y + np.sin(phase) * amplitude


@jit(nopython=True)
def _update_particles_numba(
    positions, base_positions, phases, densities,
    has_pointer, pointer_x, pointer_y, ripples,
    idle_speed, idle_amplitude, repulsion_radius, repulsion_gain,
    restore_divisor_x, restore_divisor_y
):
    """
    Numba-jitted per-particle update.

    Order per particle: idle (overwrites the position), then either pointer
    repulsion or restoring pull, then every ripple in registry order, each
    applied to the position produced so far.
    """
    particle_count = positions.shape[0]
    ripple_count = ripples.shape[0]

    for i in range(particle_count):
        base_x = base_positions[i, 0]
        base_y = base_positions[i, 1]

        # --- Idle orbit ---
        phases[i] += idle_speed
        x, y = idle_position(base_x, base_y, phases[i], idle_amplitude)

        # --- Pointer repulsion ---
        repelled = False
        if has_pointer:
            dx = pointer_x - x
            dy = pointer_y - y
            distance = np.sqrt(dx * dx + dy * dy)
            if distance < repulsion_radius:
                repelled = True
                # A pointer exactly on the particle has no direction.
                if distance > 0.0:
                    force = ((repulsion_radius - distance) / repulsion_radius) * repulsion_gain
                    x -= (dx / distance) * force * densities[i]
                    y -= (dy / distance) * force * densities[i]

        # --- Restoring pull, per axis ---
        if not repelled:
            if x != base_x:
                x += (base_x - x) / restore_divisor_x
            if y != base_y:
                y += (base_y - y) / restore_divisor_y

        # --- Ripple wave fronts ---
        for j in range(ripple_count):
            radius = ripples[j, 2]
            rdx = x - ripples[j, 0]
            rdy = y - ripples[j, 1]
            ripple_distance = np.sqrt(rdx * rdx + rdy * rdy)
            if ripple_distance > 0.0 and ripple_distance < radius:
                ripple_force = np.sin((ripple_distance / radius) * np.pi) * ripples[j, 3]
                x += (rdx / ripple_distance) * ripple_force
                y += (rdy / ripple_distance) * ripple_force

        positions[i, 0] = x
        positions[i, 1] = y


class Simulation:
    """
    Owns the shared state of the heart and advances it one frame at a time.
    """
    def __init__(self, params: Dict[str, Any], width: int, height: int):
        """
        Initializes the simulation environment.

        Args:
            params (Dict[str, Any]): Simulation parameters from config.
            width (int): Initial width of the drawing surface.
            height (int): Initial height of the drawing surface.
        """
        self.params = params
        self._validate_params(params)

        self.idle_amplitude = float(params['idle_amplitude'])
        self.idle_speed = float(params['idle_speed'])
        self.repulsion_radius = float(params['repulsion_radius'])
        self.repulsion_gain = float(params['repulsion_gain'])
        self.restore_divisors = tuple(float(d) for d in params['restore_divisors'])
        self.ripples_enabled = bool(params['ripples_enabled'])

        self.rng = np.random.default_rng(params.get('seed'))
        self.ripples = RippleField(params)
        self.pointer: Optional[Tuple[float, float]] = None
        self.step_count = 0

        self.width = width
        self.height = height
        self.heart_scale = compute_heart_scale(width, height, params)
        self.particles = ParticleSystem(params, width, height, self.heart_scale, self.rng)

        logging.info("Simulation logic initialized and configuration validated.")
        logging.info(
            f"Force model: idle {self.idle_amplitude}px @ {self.idle_speed} rad/frame, "
            f"repulsion radius {self.repulsion_radius}px x{self.repulsion_gain}, "
            f"restore divisors {self.restore_divisors}, "
            f"ripples {'on' if self.ripples_enabled else 'off'}."
        )

    @staticmethod
    def _validate_params(params: Dict[str, Any]) -> None:
        """Enforces the parameter contract, failing loudly on bad config."""
        problems = []
        for key in ('particle_count', 'max_placement_attempts', 'max_ripples'):
            value = params.get(key, 0)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value != int(value):
                problems.append(f"{key} must be a whole number, got {value!r}")
        if problems:
            msg = "Configuration error: " + "; ".join(problems) + "."
            logging.critical(msg)
            raise ValueError(msg)

        if int(params['particle_count']) <= 0:
            problems.append("particle_count must be positive")
        if int(params['max_placement_attempts']) <= 0:
            problems.append("max_placement_attempts must be positive")
        scale = params['heart_scale']
        if scale == "auto":
            if float(params['heart_scale_divisor']) <= 0:
                problems.append("heart_scale_divisor must be positive")
        elif isinstance(scale, bool) or not isinstance(scale, (int, float)) or scale <= 0:
            problems.append(f"heart_scale must be a positive number or 'auto', got {scale!r}")
        for key in ('repulsion_radius', 'ripple_wave_speed', 'ripple_strength_epsilon'):
            if float(params[key]) <= 0:
                problems.append(f"{key} must be positive")
        if not 0.0 < float(params['ripple_decay']) < 1.0:
            problems.append("ripple_decay must lie in (0, 1)")
        divisors = params['restore_divisors']
        if len(divisors) != 2 or any(float(d) <= 0 for d in divisors):
            problems.append("restore_divisors must be two positive numbers [x, y]")
        if int(params.get('max_ripples', 0)) < 0:
            problems.append("max_ripples must be 0 (no cap) or positive")

        if problems:
            msg = "Configuration error: " + "; ".join(problems) + "."
            logging.critical(msg)
            raise ValueError(msg)

    def resize(self, width: int, height: int) -> None:
        """
        Adapts to a new surface size by rebuilding the whole population.
        """
        heart_scale = compute_heart_scale(width, height, self.params)
        # Assign only after placement succeeds so a failure leaves a consistent state.
        particles = ParticleSystem(self.params, width, height, heart_scale, self.rng)
        self.width = width
        self.height = height
        self.heart_scale = heart_scale
        self.particles = particles
        logging.info(f"Surface resized to {width}x{height}. Heart scale now {heart_scale:.1f}px.")

    def set_pointer(self, x: float, y: float) -> None:
        self.pointer = (float(x), float(y))

    def clear_pointer(self) -> None:
        self.pointer = None

    def trigger_ripple(self, x: float, y: float) -> None:
        """Click or tap: start a ripple there and move the pointer to it."""
        if self.ripples_enabled:
            self.ripples.spawn(x, y)
        self.set_pointer(x, y)

    def step(self) -> None:
        """
        Executes one frame of the simulation.
        """
        # 1. Age and prune the ripple registry
        self.ripples.tick(self.width)

        # 2. Update every particle with the jitted force kernel
        has_pointer = self.pointer is not None
        pointer_x, pointer_y = self.pointer if has_pointer else (0.0, 0.0)
        particles = self.particles
        _update_particles_numba(
            particles.positions, particles.base_positions,
            particles.phases, particles.densities,
            has_pointer, pointer_x, pointer_y, self.ripples.data,
            self.idle_speed, self.idle_amplitude,
            self.repulsion_radius, self.repulsion_gain,
            self.restore_divisors[0], self.restore_divisors[1]
        )
        self.step_count += 1
