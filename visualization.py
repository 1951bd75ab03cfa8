# visualization.py
"""
Handles the visualization of the particle heart using Pygame.

The Visualizer owns the window, turns Pygame input events into mutations of
the Simulation context and draws every particle with a static glow.
"""
import logging
import pygame
from typing import Optional, Tuple
from geometry import PlacementError
from constants import (
    BACKGROUND_COLOR, PARTICLE_COLOR, FULLSCREEN, WINDOW_SIZE, WINDOW_CAPTION,
    DEFAULT_GLOW_RADIUS, DEFAULT_GLOW_COLOR, GLOW_RINGS, PARTICLE_SIZE_RANGE
)

# Forward reference for type hinting to avoid circular import
from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from simulation import Simulation


# --- Data Contracts ---
#
# translate_event(event, simulation, touch_enabled=True, surface_size=None) -> None:
#   - Inputs: a pygame event, the Simulation context and the window size.
#     surface_size defaults to the simulation size; the visualizer passes
#     its own, which differs after a failed resize.
#   - Side Effects: Mouse move / touch move set the pointer, mouse leave /
#     touch end clear it, left click / touch start trigger a ripple.
#     Finger coordinates are normalized and are scaled to the surface size.
#
# class Visualizer:
#   - __init__(self, vis_params: Optional[dict] = None):
#     - Inputs:
#       - vis_params: "visualization" section of the config. Recognized keys:
#         "fullscreen", "window_size", "glow_radius", "glow_color",
#         "particle_color", "background_color", "touch_enabled".
#     - Side Effects: Initializes Pygame and creates a display surface.
#
#   - draw(self, simulation: "Simulation") -> bool:
#     - Outputs:
#       - bool: False if the user has quit, True otherwise.
#     - Side Effects: Drains pending events into the simulation, clears the
#       surface and renders every particle at its current position.

def translate_event(
    event: pygame.event.Event,
    simulation: "Simulation",
    touch_enabled: bool = True,
    surface_size: Optional[Tuple[int, int]] = None,
) -> None:
    """Applies a pointer, click or touch event to the simulation context."""
    if event.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
        # Touches are also reported as emulated mouse events; the finger
        # events below handle those.
        if getattr(event, 'touch', False):
            return
        if event.type == pygame.MOUSEMOTION:
            simulation.set_pointer(*event.pos)
        elif event.button == 1: # Left mouse click
            simulation.trigger_ripple(*event.pos)

    elif event.type == pygame.WINDOWLEAVE:
        simulation.clear_pointer()

    elif touch_enabled and event.type in (pygame.FINGERDOWN, pygame.FINGERMOTION, pygame.FINGERUP):
        if event.type == pygame.FINGERUP:
            simulation.clear_pointer()
            return
        width, height = surface_size if surface_size else (simulation.width, simulation.height)
        x = event.x * width
        y = event.y * height
        if event.type == pygame.FINGERDOWN:
            simulation.trigger_ripple(x, y)
        else:
            simulation.set_pointer(x, y)


class Visualizer:
    """
    Renders the particle heart and forwards user input to the simulation.
    """
    def __init__(self, vis_params: Optional[dict] = None):
        """
        Initializes Pygame and the display window.
        """
        self.vis_params = vis_params if vis_params is not None else {}
        pygame.init()

        self.fullscreen = self.vis_params.get('fullscreen', FULLSCREEN)
        if self.fullscreen:
            display_info = pygame.display.Info()
            width, height = display_info.current_w, display_info.current_h
            self.screen = pygame.display.set_mode((width, height), pygame.FULLSCREEN)
        else:
            width, height = self.vis_params.get('window_size', WINDOW_SIZE)
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)

        self.width, self.height = self.screen.get_size()
        pygame.display.set_caption(WINDOW_CAPTION)
        self.clock = pygame.time.Clock()

        self.background_color = self._parse_color('background_color', BACKGROUND_COLOR)
        self.particle_color = self._parse_color('particle_color', PARTICLE_COLOR)
        self.glow_color = self._parse_color('glow_color', DEFAULT_GLOW_COLOR)
        self.glow_radius = max(0, int(self.vis_params.get('glow_radius', DEFAULT_GLOW_RADIUS)))
        self.touch_enabled = bool(self.vis_params.get('touch_enabled', True))

        # --- Pre-render the glow sprite once, it is the same for every particle ---
        self.glow_surface = self._pre_render_glow()
        self.glow_offset = self.glow_surface.get_width() // 2 if self.glow_surface else 0

        logging.info(f"Visualizer initialized with Pygame display ({self.width}x{self.height}).")

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def _parse_color(self, key: str, default) -> pygame.Color:
        """Reads a colour from the config, falling back to the default."""
        value = self.vis_params.get(key)
        if value is None:
            return pygame.Color(default)
        try:
            return pygame.Color(value) if isinstance(value, str) else pygame.Color(*value)
        except (ValueError, TypeError) as e:
            logging.error(f"Could not parse {key} {value!r} from config: {e}. Falling back to {default}.")
            return pygame.Color(default)

    def _pre_render_glow(self) -> Optional[pygame.Surface]:
        """
        Pre-renders the halo drawn behind each particle.

        The blur is approximated by concentric discs whose alpha rises
        towards the centre.
        """
        if self.glow_radius == 0:
            logging.debug("Glow disabled (radius 0).")
            return None

        logging.debug("Pre-rendering particle glow surface...")
        outer_radius = int(PARTICLE_SIZE_RANGE[1]) + self.glow_radius
        diameter = outer_radius * 2
        glow_surf = pygame.Surface((diameter, diameter), pygame.SRCALPHA)
        for ring in range(GLOW_RINGS):
            falloff = (ring + 1) / GLOW_RINGS
            radius = outer_radius - (outer_radius - PARTICLE_SIZE_RANGE[0]) * ring / GLOW_RINGS
            ring_color = pygame.Color(
                self.glow_color.r, self.glow_color.g, self.glow_color.b,
                int(self.glow_color.a * falloff * falloff)
            )
            pygame.draw.circle(glow_surf, ring_color, (outer_radius, outer_radius), radius)
        logging.debug(f"Finished pre-rendering {diameter}x{diameter} glow surface.")
        return glow_surf

    def _handle_resize(self, width: int, height: int, simulation: "Simulation") -> None:
        """Resizes the window and rebuilds the heart for the new surface."""
        if width <= 0 or height <= 0:
            return
        if not self.fullscreen:
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        self.width, self.height = self.screen.get_size()
        if (self.width, self.height) == (simulation.width, simulation.height):
            return
        try:
            simulation.resize(self.width, self.height)
        except PlacementError as e:
            logging.error(f"Keeping the previous heart, resize placement failed: {e}")

    def draw(self, simulation: "Simulation") -> bool:
        """
        Handles pending events, then draws all particles.

        Returns:
            bool: False if the simulation should exit, True otherwise.
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received. Shutting down visualizer.")
                return False

            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    logging.info("ESC key pressed. Shutting down visualizer.")
                    return False
                if event.key == pygame.K_c:
                    simulation.ripples.clear()
                    logging.info("Ripples cleared by user.")

            elif event.type == pygame.VIDEORESIZE:
                self._handle_resize(event.w, event.h, simulation)

            else:
                translate_event(event, simulation, self.touch_enabled, self.size)

        # 1. Clear the surface
        self.screen.fill(self.background_color)

        # 2. Draw each particle over its glow
        particles = simulation.particles
        positions = particles.positions
        sizes = particles.sizes
        for i in range(particles.particle_count):
            x = positions[i, 0]
            y = positions[i, 1]
            if self.glow_surface is not None:
                self.screen.blit(self.glow_surface, (int(x) - self.glow_offset, int(y) - self.glow_offset))
            pygame.draw.circle(self.screen, self.particle_color, (x, y), sizes[i])

        pygame.display.flip()
        return True

    def tick(self, fps: int) -> None:
        """Waits for the next frame."""
        self.clock.tick(fps)

    def close(self):
        """Shuts down Pygame."""
        pygame.quit()
