"""Exception types raised at the edges of the demo."""


class VoronoiError(Exception):
    """Base class for every error the demo reports to the user."""


class InputError(VoronoiError):
    """Malformed point data: unreadable JSON, bad entries, non-finite values."""


class ConfigError(VoronoiError):
    """Invalid startup configuration such as an empty drawing area."""
