"""Error types raised by the wind stat service."""


class WindStatError(Exception):
    """Base class for wind stat errors."""


class ConfigurationError(WindStatError):
    """Card configuration is unusable; no fetch cycle may run."""


class FetchFailure(WindStatError):
    """The history source call failed or returned an unreadable payload."""
