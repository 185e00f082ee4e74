"""Report model and output formatters."""

from .human import VIEWS, HumanFormatter
from .json_format import JSONFormatter
from .model import DirectoryCoverage, Formatter, Report, StaleDoc, Summary
from .sarif import SARIFFormatter

__all__ = [
    "DirectoryCoverage",
    "Formatter",
    "HumanFormatter",
    "JSONFormatter",
    "Report",
    "SARIFFormatter",
    "StaleDoc",
    "Summary",
    "VIEWS",
]
