"""Detect documentation that has drifted from the source code it describes."""

__version__ = "0.1.0"
