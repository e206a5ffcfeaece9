"""Turn-based robots pursuit game on a fixed grid."""

__version__ = "0.1.0"
