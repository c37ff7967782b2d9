import pytest

from restaurant_sim.engine import RestaurantSimulation, default_initial_state
from restaurant_sim.models import SimulationState


@pytest.fixture
def make_state():
    """Build a validated state from the default restaurant with overrides."""
    def _make(**overrides) -> SimulationState:
        config = default_initial_state()
        config.update(overrides)
        return SimulationState.model_validate(config)
    return _make


@pytest.fixture
def state(make_state):
    return make_state()


@pytest.fixture
def simulation():
    return RestaurantSimulation({'total_days': 7})


class RecordingProvider:
    """Provider double that records requests and answers with empty decisions."""

    def __init__(self, fail_on_day=None, simulation=None):
        self.calls = []
        self.fail_on_day = fail_on_day
        self.simulation = simulation

    async def provide(self, scenario, input_data):
        if self.simulation is not None and self.simulation.state.day == self.fail_on_day:
            raise RuntimeError("provider unavailable")
        self.calls.append((scenario, input_data))
        return {'decision': {}, 'rationale': 'hold steady'}


@pytest.fixture
def recording_provider():
    return RecordingProvider()
