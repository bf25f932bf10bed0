"""
Exception types raised by the snake evolution trainer.

Configuration problems (bad network shapes, weight buffers or options) are
raised before training starts. Episode endings are never errors.
"""


class SnakeEvolutionError(Exception):
    """Base class for every error raised by this package"""


class ConfigurationError(SnakeEvolutionError, ValueError):
    """Invalid construct-time options"""


class ShapeMismatchError(ConfigurationError):
    """Activation count does not match the number of weighted layers"""


class WeightCountMismatchError(ConfigurationError):
    """Weight buffer length does not match the network shape"""


class InputSizeMismatchError(ConfigurationError):
    """Inference input length does not match the first layer size"""
