"""Sample-by-sample models of Eurorack modules and their panel hardware."""

__version__ = "0.1.0"