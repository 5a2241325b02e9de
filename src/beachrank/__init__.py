"""BeachRank - level-balanced doubles rounds and tie-break aware standings."""

__version__ = "0.1.0"
