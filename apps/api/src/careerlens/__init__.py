"""CareerLens - AI-assisted career assessment backend."""

__version__ = "2.0.0"
