# constants.py
"""
Application-level constants.

These values are static and do not change between simulation runs.
They are fundamental to the application's framework, such as rendering
properties, default window sizes, or the named behaviour presets that are
layered underneath the experimental configuration in config.json.
"""
import math

# Visualization settings
# Set to True to run in borderless fullscreen mode.
# Set to False to run in a resizable window (WINDOW_SIZE).
FULLSCREEN = False
WINDOW_SIZE = (1200, 800)
WINDOW_CAPTION = "Particle Heart"
FPS = 60
BACKGROUND_COLOR = (0, 0, 0) # Black
PARTICLE_COLOR = (255, 0, 0) # Red

# --- Glow Effect ---
# Blur radius of the halo drawn behind every particle, in pixels.
DEFAULT_GLOW_RADIUS = 7
# RGBA of the halo. Alpha 204 matches an 80% opaque shadow.
DEFAULT_GLOW_COLOR = (255, 0, 0, 204)
# Number of concentric rings used to approximate the blur falloff.
GLOW_RINGS = 6

# --- Heart Geometry ---
# "auto" derives the scale from the smaller surface dimension.
DEFAULT_HEART_SCALE = "auto"
DEFAULT_HEART_SCALE_DIVISOR = 3
# Candidates drawn per rejection-sampling batch.
PLACEMENT_BATCH_SIZE = 4096

# --- Particle Attributes ---
PARTICLE_SIZE_RANGE = (1.0, 3.0)
PARTICLE_DENSITY_RANGE = (5.0, 15.0)
PARTICLE_PHASE_RANGE = (0.0, 2.0 * math.pi)

# Defaults for every simulation parameter. The config file and the selected
# preset only need to name what they change.
DEFAULT_SIMULATION_PARAMETERS = {
    "seed": None,
    "particle_count": 1000,
    "heart_scale": DEFAULT_HEART_SCALE,
    "heart_scale_divisor": DEFAULT_HEART_SCALE_DIVISOR,
    "max_placement_attempts": 1_000_000,
    "idle_amplitude": 6.0,
    "idle_speed": 0.008,
    "repulsion_radius": 150.0,
    "repulsion_gain": 4.0,
    "restore_divisors": [20.0, 20.0],
    "ripples_enabled": True,
    "ripple_initial_strength": 16.0,
    "ripple_decay": 0.95,
    "ripple_wave_speed": 5.0,
    "ripple_strength_epsilon": 0.1,
    "max_ripples": 0, # 0 disables the soft cap
}

# The three evolutionary versions of the heart, expressed as parameter sets.
# "classic" keeps the near-frozen return to base of the first version.
VARIANT_PRESETS = {
    "classic": {
        "simulation_parameters": {
            "heart_scale": 200,
            "restore_divisors": [2e13, 2e12],
            "ripples_enabled": False,
        },
        "visualization": {
            "glow_radius": 7,
            "touch_enabled": False,
        },
    },
    "touch": {
        "simulation_parameters": {
            "heart_scale": "auto",
            "restore_divisors": [20.0, 20.0],
            "ripples_enabled": False,
        },
        "visualization": {
            "glow_radius": 10,
            "touch_enabled": True,
        },
    },
    "ripple": {
        "simulation_parameters": {
            "heart_scale": "auto",
            "restore_divisors": [20.0, 20.0],
            "ripples_enabled": True,
        },
        "visualization": {
            "glow_radius": 12,
            "touch_enabled": True,
        },
    },
}
