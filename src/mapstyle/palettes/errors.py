"""Exceptions raised while building palettes."""


class InvalidSpecError(ValueError):
    """Raised when palette construction parameters are malformed.

    Covers empty or unparseable color specs, unknown preset names, bin or
    quantile counts below one, and unusable breaks or samples. Always raised
    at build time, never while a palette is applied to data.
    """
