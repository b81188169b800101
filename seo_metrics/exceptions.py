"""Exceptions raised by the SEO Metrics engine."""


class InvalidInputError(ValueError):
    """Raised when input data cannot be coerced to the engine's data model.

    Examples are a month outside 1-12, a negative search volume, or a
    non-numeric cost-per-click. Insufficient data is never an error; the
    analyzers degrade to documented defaults instead.
    """
