"""
Exception hierarchy for the Fortunopoly engine.

Rule violations during play are reported through return values; these
exceptions only cover the configuration and persistence boundaries.
"""


class FortunopolyError(Exception):
    """Base exception for all engine errors."""


class ConfigurationError(FortunopolyError, ValueError):
    """Game setup or board definition is invalid."""


class SnapshotError(FortunopolyError):
    """A saved snapshot could not be read or restored."""


class InvalidActionError(FortunopolyError):
    """Action name or parameters are not understood by the dispatcher."""
