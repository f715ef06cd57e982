"""Two-line element parsing and SGP4/SDP4 satellite orbit propagation."""

__version__ = "0.1.0"