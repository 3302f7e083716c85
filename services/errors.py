"""Errors raised by the analysis engine."""


class AnalysisError(Exception):
    """Base class for engine errors."""


class ValidationError(AnalysisError):
    """Input text is missing or exceeds a length limit.

    Deterministic for a given input, so callers should not retry.
    """
