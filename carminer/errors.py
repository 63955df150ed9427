"""
Exceptions raised by the class association rule miner.
"""


class CarMinerError(Exception):
    """Base class for all carminer errors."""


class ConfigurationError(CarMinerError, ValueError):
    """
    Invalid mining configuration.

    Raised before any mining starts: bad class index, non-positive delta,
    inverted support bounds, or a ranking metric this miner does not accept.
    """


class DataTypeError(CarMinerError, TypeError):
    """A column holds continuous values where a categorical one is required."""
