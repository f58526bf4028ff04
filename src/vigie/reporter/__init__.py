"""
Logging for Vigie components.
"""

from vigie.reporter.system_reporter import LEVELS, SystemReporter

__all__ = [
    "SystemReporter",
    "LEVELS",
]
