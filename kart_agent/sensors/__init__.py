# Sensors module - Camera geometry handed to the host's sensor service
# FORBIDDEN: gymnasium, agent.*, analysis.*

from .camera import CameraDescriptor, SensorRig
