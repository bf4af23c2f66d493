"""Team matching and scoring engine for a staffing talent pool."""

__version__ = "0.1.0"
