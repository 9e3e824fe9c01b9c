"""Exceptions raised by camera format selection."""


class FormatSelectionError(Exception):
    """Base class for all camera format selection errors."""


class InvalidDimensionError(FormatSelectionError, ValueError):
    """A size with a zero or negative dimension reached the geometry code."""


class UnknownStabilizationModeError(FormatSelectionError, KeyError):
    """A stabilization mode has no entry in the scoring table."""


class CatalogError(FormatSelectionError):
    """A device catalog could not be read or validated."""
