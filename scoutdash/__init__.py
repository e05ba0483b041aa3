"""ScoutDash - terminal dashboard for Scout APM applications."""

__version__ = "0.1.0"

__all__ = ["__version__"]
