# Tests for the episodic control agent

import logging

import pytest
import numpy as np
from kart_agent.agent import KartAgent
from kart_agent.core.config import AgentConfig
from kart_agent.core.types import (
    InitMode,
    Pose,
    RewardKind,
    TerminalKind,
    VehicleCommand,
)


def total(contributions):
    return sum(c.magnitude for c in contributions)


def agent_state(agent, transform):
    return (
        agent.steering,
        agent.accelerate,
        agent.brake,
        agent.checkpoint_index,
        agent.spawn,
        agent.episode_active,
        agent.termination,
        transform.position,
        transform.rotation,
        len(agent.reward_log),
    )


class TestStep:
    
    def test_reward_composition(self, agent, vehicle):
        """One step at speed 5 with no events contributes 0.004."""
        vehicle.speed = 5.0
        agent.step([0.0, 1.0])
        assert total(agent.reward_log.drain()) == pytest.approx(0.004)
    
    def test_command_handed_to_vehicle(self, agent, vehicle):
        """Interpreted controls reach the vehicle each tick."""
        agent.step([0.5, 0.8])
        agent.step([-2.0, -0.8])
        assert vehicle.commands == [
            VehicleCommand(accelerate=True, brake=False, turn_input=0.5),
            VehicleCommand(accelerate=False, brake=True, turn_input=-1.0),
        ]
    
    def test_state_updated(self, agent):
        """Agent state mirrors the last interpreted action."""
        agent.step(np.array([-0.3, 0.05], dtype=np.float32))
        assert agent.steering == pytest.approx(-0.3)
        assert not agent.accelerate
        assert not agent.brake
    
    def test_nan_action(self, agent, vehicle):
        """NaN actions become neutral controls."""
        agent.step([np.nan, np.nan])
        assert vehicle.commands[-1] == VehicleCommand()
    
    def test_non_numeric_action(self, agent, vehicle):
        """Non-numeric components read as 0 and the tick still runs."""
        agent.step(["x", 1.0])
        assert vehicle.commands[-1] == VehicleCommand(accelerate=True, brake=False, turn_input=0.0)
        assert len(agent.reward_log) == 2
    
    def test_ragged_action(self, agent, vehicle):
        """A ragged action vector yields neutral controls."""
        agent.step([[0.1], [0.2, 0.3]])
        assert vehicle.commands[-1] == VehicleCommand()
    
    def test_non_finite_speed_reads_as_zero(self, agent, vehicle, caplog):
        """A NaN speed reading leaves only the time penalty."""
        vehicle.speed = float("nan")
        with caplog.at_level(logging.WARNING, logger="kart_agent"):
            agent.step([0.0, 1.0])
        entries = agent.reward_log.drain()
        assert [c.kind for c in entries] == [RewardKind.TIME, RewardKind.SPEED]
        assert all(np.isfinite(c.magnitude) for c in entries)
        assert total(entries) == pytest.approx(-0.001)
        assert "non-finite speed" in caplog.text
    
    def test_step_before_episode_ignored(self, transform, vehicle, zones, agent_config):
        """Steps outside a running episode do nothing."""
        agent = KartAgent(transform, vehicle, zones, config=agent_config)
        agent.step([0.0, 1.0])
        assert vehicle.commands == []
        assert len(agent.reward_log) == 0
    
    def test_missing_vehicle_skips_step(self, transform, zones, agent_config):
        """Without a vehicle service the tick is skipped."""
        agent = KartAgent(transform, None, zones, config=agent_config)
        agent.on_episode_start()
        agent.step([1.0, 1.0])
        assert len(agent.reward_log) == 0
        assert agent.steering == 0.0


class TestCheckpoints:
    
    def test_progress_rewards(self, agent):
        """Correct-order zones reward, skipped zones do not."""
        agent.on_zone_entered("cp2")
        assert agent.checkpoint_index == 0
        assert len(agent.reward_log) == 0
        
        agent.on_zone_entered("cp1")
        agent.on_zone_entered("cp2")
        entries = agent.reward_log.drain()
        assert agent.checkpoint_index == 2
        assert [c.kind for c in entries] == [RewardKind.CHECKPOINT] * 2
        assert total(entries) == pytest.approx(20.0)
    
    def test_out_of_order_zone_logged(self, agent, caplog):
        """Skipped zones are logged with the zone the agent expects."""
        with caplog.at_level(logging.DEBUG, logger="kart_agent"):
            agent.on_zone_entered("cp3")
        assert "expecting 'cp1'" in caplog.text
    
    def test_wraparound(self, agent):
        """From the last index, zone 0 loops back to index 0."""
        for zone in ("cp1", "cp2", "cp3", "cp0"):
            agent.on_zone_entered(zone)
        assert agent.checkpoint_index == 0
        assert agent.episode_active
    
    def test_no_zones_is_inert(self, transform, vehicle, agent_config):
        """An agent without checkpoints never fires checkpoint rewards."""
        agent = KartAgent(transform, vehicle, [], config=agent_config)
        agent.on_episode_start()
        agent.on_zone_entered("cp1")
        assert len(agent.reward_log) == 0
    
    def test_lap_rule(self, transform, vehicle, zones):
        """Optional lap rule grants the bonus and terminates."""
        config = AgentConfig(
            mode=InitMode.HEADLESS,
            terminate_on_lap_complete=True,
            lap_complete_reward=2.0,
        )
        agent = KartAgent(transform, vehicle, zones, config=config)
        agent.on_episode_start()
        for zone in ("cp1", "cp2", "cp3", "cp0"):
            agent.on_zone_entered(zone)
        
        entries = agent.reward_log.drain()
        assert entries[-1].kind == RewardKind.LAP
        assert total(entries) == pytest.approx(42.0)
        assert agent.termination == TerminalKind.LAP_COMPLETE
        assert not agent.episode_active
    
    def test_lap_rule_off_by_default(self, agent):
        """By default a completed lap neither ends the episode nor adds a bonus."""
        for zone in ("cp1", "cp2", "cp3", "cp0"):
            agent.on_zone_entered(zone)
        assert agent.episode_active
        assert all(c.kind == RewardKind.CHECKPOINT for c in agent.reward_log.entries)


class TestCollision:
    
    @pytest.mark.parametrize("progress", [[], ["cp1"], ["cp1", "cp2", "cp3"]])
    def test_collision_penalizes_once_and_terminates(self, agent, progress):
        """Collision adds the hit penalty once and ends the episode."""
        for zone in progress:
            agent.on_zone_entered(zone)
        agent.reward_log.drain()
        
        agent.on_collision()
        
        entries = agent.reward_log.drain()
        assert [c.kind for c in entries] == [RewardKind.COLLISION]
        assert entries[0].magnitude == -1.0
        assert agent.terminated
        assert not agent.episode_active
    
    def test_events_after_termination_ignored(self, agent, vehicle):
        """Nothing changes between termination and the next episode start."""
        agent.on_collision()
        agent.reward_log.drain()
        
        agent.on_collision()
        agent.on_zone_entered("cp1")
        agent.step([0.0, 1.0])
        
        assert len(agent.reward_log) == 0
        assert agent.checkpoint_index == 0
        assert vehicle.commands == []
    
    def test_unknown_terminal_event_ignored(self, agent):
        """Unrecognized terminal kinds are ignored."""
        agent.on_terminal_event("meteor")
        assert agent.episode_active
        assert len(agent.reward_log) == 0


class TestEpisodeStart:
    
    def test_reset_state(self, agent, transform, vehicle):
        """Episode start restores spawn, neutral controls and index 0."""
        agent.step([0.7, 1.0])
        agent.on_zone_entered("cp1")
        transform.position = (30.0, 0.0, 30.0)
        agent.on_collision()
        
        agent.on_episode_start()
        
        assert transform.position == (1.0, 0.5, -3.0)
        assert agent.checkpoint_index == 0
        assert agent.steering == 0.0
        assert not agent.accelerate and not agent.brake
        assert agent.episode_active
        assert agent.termination is None
        assert len(agent.reward_log) == 0
        assert vehicle.resets == 2
    
    def test_idempotent(self, agent, transform):
        """Two starts in a row equal one."""
        agent.step([0.4, 1.0])
        agent.on_zone_entered("cp1")
        
        agent.on_episode_start()
        once = agent_state(agent, transform)
        agent.on_episode_start()
        twice = agent_state(agent, transform)
        
        assert once == twice
    
    def test_always_original_spawn(self, agent, transform):
        """Every episode restarts at the first captured spawn."""
        original = agent.spawn
        for episode in range(5):
            transform.position = (float(episode * 10), 0.0, 3.0)
            agent.on_collision()
            agent.on_episode_start()
            assert agent.spawn == original
            assert transform.position == original.position
    
    def test_activate_before_episode(self, transform, vehicle, zones, agent_config):
        """activate captures spawn ahead of the first episode."""
        agent = KartAgent(transform, vehicle, zones, config=agent_config)
        assert agent.spawn is None
        spawn = agent.activate()
        transform.position = (0.0, 0.0, 0.0)
        agent.on_episode_start()
        assert agent.spawn == spawn == Pose.of((1.0, 0.5, -3.0), (0.0, 0.7071, 0.0, 0.7071))
        assert transform.position == (1.0, 0.5, -3.0)


class TestSurface:
    
    def test_generate_input(self, agent):
        """generate_input reflects the current controls."""
        agent.step([-0.5, -0.9])
        assert agent.generate_input() == VehicleCommand(accelerate=False, brake=True, turn_input=-0.5)
    
    def test_heuristic_passes_raw_axes(self):
        """Manual override forwards raw axes as the action vector."""
        action = KartAgent.heuristic(0.25, -1.0)
        assert action.dtype == np.float32
        assert np.allclose(action, [0.25, -1.0])
    
    def test_heuristic_goes_through_same_path(self, agent, vehicle):
        """Manual actions are interpreted like policy actions."""
        agent.step(KartAgent.heuristic(3.0, 0.5))
        assert vehicle.commands[-1] == VehicleCommand(accelerate=True, brake=False, turn_input=1.0)
    
    def test_no_vector_observations(self, agent):
        """Vector observations are empty; images come from the camera."""
        obs = agent.collect_observations()
        assert obs.shape == (0,)
    
    def test_mode_controls_sensor_setup(self, transform, vehicle, zones, sensor_service):
        """Headless skips the camera, training attaches it."""
        headless = KartAgent(transform, vehicle, zones, sensors=sensor_service, mode="headless")
        assert not headless.sensors.attached
        assert sensor_service.attached == {}
        
        training = KartAgent(transform, vehicle, zones, sensors=sensor_service, mode=InitMode.TRAINING)
        assert training.sensors.attached
        assert not training.sensors.descriptor.render_to_screen
        
        training.close()
        assert sensor_service.attached == {}
