import os

# Keep pygame headless and quiet under test
os.environ["SDL_VIDEODRIVER"] = "dummy"
os.environ["SDL_AUDIODRIVER"] = "dummy"
os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "1"

import pytest
from utils import apply_preset


@pytest.fixture
def make_params():
    """Builds resolved simulation parameters with a fixed seed."""
    def _make(**overrides):
        sim_params = {"seed": 1234}
        sim_params.update(overrides)
        return apply_preset({"simulation_parameters": sim_params})["simulation_parameters"]
    return _make
