"""httpkit: small helpers for FastAPI request pipelines."""

__version__ = "1.0.0"
