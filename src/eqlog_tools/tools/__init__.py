"""
EQ Log Analysis Tools

This package provides command line tools built on the log line classifier:
CSV export, line type frequency reports and unrecognized line listings.
"""

from .csv_exporter import LogCsvExporter
from .line_type_frequency import LineTypeFrequency
from .unrecognized_lines import UnrecognizedLinesReporter

__all__ = [
    'LogCsvExporter',
    'LineTypeFrequency',
    'UnrecognizedLinesReporter',
]
