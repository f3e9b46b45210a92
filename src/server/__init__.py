"""Job search coach token service (FastAPI)."""

__version__ = "1.0.0"
