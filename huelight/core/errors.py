"""Domain-specific errors for huelight."""


class HuelightError(Exception):
    """Base error for huelight."""


class ConfigLoadError(HuelightError):
    """Raised when bridge configuration cannot be read or is incomplete."""


class ConfigValidationError(HuelightError):
    """Raised when a configuration file does not conform to schema."""


class LightIndexError(HuelightError):
    """Raised when a light index is not available on the bridge."""


class LightNotFoundError(HuelightError):
    """Raised when no light matches a requested name."""


class LightDecodeError(HuelightError):
    """Raised when a light resource body cannot be decoded."""


class PatchValidationError(HuelightError):
    """Raised when a state patch field is out of range."""


class ColorResolutionError(HuelightError):
    """Raised when a named color is not in the color table."""


class BridgeError(HuelightError):
    """Base bridge transport error."""


class BridgeConnectError(BridgeError):
    """Raised when the bridge cannot be reached."""


class BridgeTimeoutError(BridgeError):
    """Raised when a bridge request times out."""


class BridgeRequestError(BridgeError):
    """Raised when the bridge answers with a non-success status."""
