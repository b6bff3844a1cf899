"""molights: chess rules core with SAN notation and game records."""

__version__ = "0.1.0"
