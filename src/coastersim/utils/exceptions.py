"""Custom exceptions for ride simulation."""


class CoasterSimError(Exception):
    """Base exception for simulation errors."""


class ConfigurationError(CoasterSimError):
    """Raised when cart or solver configuration is invalid."""


class TrackDataError(CoasterSimError):
    """Raised when track data cannot be parsed or validated."""


class InvalidCurveError(TrackDataError):
    """Raised when control points cannot define a curve."""


class DegenerateFrameError(CoasterSimError):
    """Raised when a lateral axis cannot be derived from a reference axis."""
