# Kart agent - episodic control loop for a learning-driven racing kart

__version__ = "0.1.0"
