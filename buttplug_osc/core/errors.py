"""Domain-specific errors for buttplug-osc."""


class ButtplugOscError(Exception):
    """Base error for buttplug-osc."""


class ConfigError(ButtplugOscError):
    """Raised when startup configuration is invalid."""


class DecodeError(ButtplugOscError):
    """Base error for inbound messages that cannot be turned into a command."""


class InvalidCommandError(DecodeError):
    """Raised when the sub-command segment is not a known command."""


class InvalidArgumentError(DecodeError):
    """Raised when an argument name or value is missing or has the wrong type."""


class PatternValidationError(ButtplugOscError):
    """Raised when a pattern file does not conform to schema or semantics."""


class PatternLoadError(ButtplugOscError):
    """Raised when loading pattern sources fails."""


class TransportError(ButtplugOscError):
    """Base error for the device-control server connection."""


class TransportConnectError(TransportError):
    """Raised when connecting or scanning fails."""


class DeviceCommandError(TransportError):
    """Raised when a per-device operation fails."""


class ServerDisconnectedError(TransportError):
    """Raised when the device-control server drops the session."""
