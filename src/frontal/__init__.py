"""FrontAl — static performance analysis for frontend bundles."""

__version__ = "0.1.0"
