# Pytest configuration and fixtures

import pytest
import numpy as np
from pathlib import Path
import tempfile
import yaml

from kart_agent.agent import KartAgent
from kart_agent.core.config import AgentConfig
from kart_agent.core.types import InitMode


class FakeVehicle:
    """Vehicle service reporting a fixed speed and recording calls."""

    def __init__(self, speed=0.0):
        self.speed = speed
        self.commands = []
        self.resets = 0

    def normalized_speed(self):
        return self.speed

    def reset_velocities(self):
        self.resets += 1

    def apply_input(self, command):
        self.commands.append(command)


class FakeTransform:
    def __init__(self, position=(1.0, 0.5, -3.0), rotation=(0.0, 0.7071, 0.0, 0.7071)):
        self.position = position
        self.rotation = rotation


class FakeSensorService:
    def __init__(self):
        self.attached = {}
        self.detached = []
        self._next = 0

    def attach(self, descriptor):
        self._next += 1
        self.attached[self._next] = descriptor
        return self._next

    def detach(self, handle):
        self.detached.append(handle)
        self.attached.pop(handle, None)


@pytest.fixture
def seed():
    """Fixed seed for reproducibility."""
    return 42


@pytest.fixture
def rng(seed):
    return np.random.default_rng(seed)


@pytest.fixture
def zones():
    """Four checkpoint zones, zone 0 at the start line."""
    return ["cp0", "cp1", "cp2", "cp3"]


@pytest.fixture
def agent_config():
    return AgentConfig(mode=InitMode.HEADLESS)


@pytest.fixture
def vehicle():
    return FakeVehicle()


@pytest.fixture
def transform():
    return FakeTransform()


@pytest.fixture
def sensor_service():
    return FakeSensorService()


@pytest.fixture
def agent(transform, vehicle, zones, agent_config):
    """Headless agent with a running episode."""
    agent = KartAgent(transform, vehicle, zones, config=agent_config)
    agent.on_episode_start()
    return agent


@pytest.fixture
def config():
    """Standard test configuration."""
    return {
        "experiment": {
            "name": "test",
            "seed": 42,
        },
        "agent": {
            "checkpoint_reward": 10.0,
            "hit_penalty": -1.0,
            "time_penalty": -0.001,
            "speed_reward": 0.001,
            "dead_zone": 0.1,
            "terminate_on_lap_complete": False,
            "lap_complete_reward": 0.0,
            "mode": "training",
        },
        "camera": {
            "offset": [0.0, 1.5, 2.0],
            "rotation": [0.0, 0.0, 0.0],
            "width": 16,
            "height": 12,
            "fov": 60.0,
            "grayscale": False,
        },
        "course": {
            "name": "loop",
            "length": 40.0,
            "half_width": 6.0,
            "checkpoints": [0.0, 10.0, 20.0, 30.0],
        },
        "vehicle": {
            "max_speed": 20.0,
            "acceleration": 8.0,
            "dt": 0.05,
        },
        "runner": {
            "episodes": 2,
            "max_steps": 500,
        },
        "logging": {
            "level": "WARNING",
        },
    }


@pytest.fixture
def temp_dir():
    """Create temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config_file(config, temp_dir):
    """Create temporary config file."""
    config_path = temp_dir / "config.yaml"
    with open(config_path, "w") as f:
        yaml.dump(config, f)
    return config_path
