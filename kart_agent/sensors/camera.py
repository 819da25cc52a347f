# Observation camera configuration
# FORBIDDEN: gymnasium, agent.*, analysis.*

import logging
from dataclasses import dataclass
from typing import Hashable, Optional, Tuple

from ..core.config import CameraConfig
from ..core.interfaces import SensorService
from ..core.types import InitMode, Vector3

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CameraDescriptor:
    """Geometry handed to the sensor service.
    
    Offset and rotation are local to the agent body; rotation is euler
    degrees. The service owns capture and delivers frames to the policy.
    """
    offset: Vector3
    rotation: Vector3
    field_of_view: float
    width: int
    height: int
    color_mode: str
    near_clip: float
    far_clip: float
    sensor_name: str
    render_to_screen: bool = False
    
    @classmethod
    def from_config(cls, config: CameraConfig, render_to_screen: bool = False) -> "CameraDescriptor":
        return cls(
            offset=config.offset,
            rotation=config.rotation,
            field_of_view=config.fov,
            width=config.width,
            height=config.height,
            color_mode="grayscale" if config.grayscale else "rgb",
            near_clip=config.near_clip,
            far_clip=config.far_clip,
            sensor_name=config.sensor_name,
            render_to_screen=render_to_screen,
        )


class SensorRig:
    """Attaches exactly one observation camera to a sensor service."""
    
    def __init__(self, service: Optional[SensorService], config: CameraConfig):
        self.service = service
        self.config = config
        self.handle: Optional[Hashable] = None
        self.descriptor: Optional[CameraDescriptor] = None
    
    @property
    def attached(self) -> bool:
        return self.handle is not None
    
    @property
    def observation_shape(self) -> Tuple[int, int, int]:
        return (self.config.height, self.config.width, self.config.channels)
    
    def setup(self, mode: InitMode) -> Optional[CameraDescriptor]:
        """Attach the camera for the given mode.
        
        Any previously attached camera is detached first, so calling this
        again replaces the sensor rather than adding a second one.
        
        Args:
            mode: Init mode; HEADLESS attaches nothing
            
        Returns:
            The attached descriptor, or None if nothing was attached
        """
        mode = InitMode(mode)
        if not mode.configures_sensor:
            logger.debug("Headless mode, skipping camera setup")
            return None
        if self.service is None:
            logger.warning("No sensor service available, camera not attached")
            return None
        
        self.teardown()
        
        # Rendering to screen slows training down; only interactive runs show it.
        descriptor = CameraDescriptor.from_config(
            self.config,
            render_to_screen=mode is InitMode.INTERACTIVE,
        )
        self.handle = self.service.attach(descriptor)
        self.descriptor = descriptor
        logger.debug(
            f"Camera '{descriptor.sensor_name}' attached: "
            f"{descriptor.width}x{descriptor.height} {descriptor.color_mode}, "
            f"fov={descriptor.field_of_view}"
        )
        return descriptor
    
    def teardown(self) -> None:
        if self.handle is not None and self.service is not None:
            self.service.detach(self.handle)
        self.handle = None
        self.descriptor = None
