# Tests for the camera sensor rig

import pytest
from kart_agent.core.config import CameraConfig
from kart_agent.core.types import InitMode
from kart_agent.sensors import CameraDescriptor, SensorRig


class TestCameraDescriptor:
    
    def test_from_default_config(self):
        """Default geometry matches the vision kart camera."""
        descriptor = CameraDescriptor.from_config(CameraConfig())
        assert descriptor.offset == (0.0, 1.5, 2.0)
        assert descriptor.rotation == (0.0, 0.0, 0.0)
        assert descriptor.field_of_view == 60.0
        assert (descriptor.width, descriptor.height) == (84, 84)
        assert descriptor.color_mode == "rgb"
        assert descriptor.near_clip == 0.1
        assert descriptor.far_clip == 200.0
        assert descriptor.sensor_name == "Vision"
        assert not descriptor.render_to_screen
    
    def test_grayscale(self):
        """Grayscale config maps to grayscale color mode."""
        descriptor = CameraDescriptor.from_config(CameraConfig(grayscale=True))
        assert descriptor.color_mode == "grayscale"


class TestSensorRig:
    
    def test_headless_attaches_nothing(self, sensor_service):
        """HEADLESS never touches the sensor service."""
        rig = SensorRig(sensor_service, CameraConfig())
        assert rig.setup(InitMode.HEADLESS) is None
        assert not rig.attached
        assert sensor_service.attached == {}
    
    def test_training_attaches_without_rendering(self, sensor_service):
        """TRAINING attaches the camera with on-screen rendering off."""
        rig = SensorRig(sensor_service, CameraConfig())
        descriptor = rig.setup(InitMode.TRAINING)
        assert rig.attached
        assert sensor_service.attached[rig.handle] is descriptor
        assert not descriptor.render_to_screen
    
    def test_interactive_renders(self, sensor_service):
        """INTERACTIVE renders the camera to screen."""
        rig = SensorRig(sensor_service, CameraConfig())
        assert rig.setup("interactive").render_to_screen
    
    def test_setup_replaces_existing_camera(self, sensor_service):
        """Setting up twice leaves exactly one camera attached."""
        rig = SensorRig(sensor_service, CameraConfig())
        rig.setup(InitMode.TRAINING)
        first = rig.handle
        rig.setup(InitMode.TRAINING)
        
        assert sensor_service.detached == [first]
        assert list(sensor_service.attached) == [rig.handle]
    
    def test_missing_service(self):
        """Without a sensor service setup degrades to a no-op."""
        rig = SensorRig(None, CameraConfig())
        assert rig.setup(InitMode.TRAINING) is None
        assert not rig.attached
    
    def test_teardown(self, sensor_service):
        """teardown detaches and forgets the camera."""
        rig = SensorRig(sensor_service, CameraConfig())
        rig.setup(InitMode.TRAINING)
        rig.teardown()
        assert not rig.attached
        assert rig.descriptor is None
        assert sensor_service.attached == {}
    
    @pytest.mark.parametrize("grayscale,channels", [(False, 3), (True, 1)])
    def test_observation_shape(self, grayscale, channels):
        """Observation shape is (height, width, channels)."""
        rig = SensorRig(None, CameraConfig(width=64, height=48, grayscale=grayscale))
        assert rig.observation_shape == (48, 64, channels)
