"""Run results, report formatting and the seed log.

Exports:
    PropertyResult, Counterexample, RunReport, SkippedProperty: Result types
    ReportFormatter, OutputFormat: Text and JSON rendering
    SeedLog: JSON lines sink of failing properties

Python 3.13+.
"""

from .formatter import OutputFormat, ReportFormatter
from .report import Counterexample, PropertyResult, RunReport, SkippedProperty, render_value
from .seed_log import SeedLog, read_seed_log

__all__ = [
    "Counterexample",
    "OutputFormat",
    "PropertyResult",
    "ReportFormatter",
    "RunReport",
    "SeedLog",
    "SkippedProperty",
    "read_seed_log",
    "render_value",
]
