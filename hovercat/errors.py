class HovercatError(Exception):
    """Base class for all hovercat errors"""


class ConfigError(HovercatError, ValueError):
    """Raised when the configuration file or values are invalid"""


class InvalidTransition(HovercatError, RuntimeError):
    """Raised when the session is asked to move between two states that are not connected"""

    def __init__(self, source, target):
        super().__init__(f"Invalid session transition: {source.name} -> {target.name}")
        self.source = source
        self.target = target
