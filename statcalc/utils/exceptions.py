"""
File containing custom errors raised by the accumulator and its numeric domains.
"""

class DomainConfigurationError(ValueError):
    """Raised when the sentinel constants of a numeric domain cannot keep min <= max consistent."""
    pass

class UnsupportedDomainError(LookupError):
    """Raised when a numeric domain is requested by a name nobody registered"""
    pass
