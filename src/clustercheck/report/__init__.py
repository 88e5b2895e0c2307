"""Report rendering."""

from clustercheck.report.formatter import ReportFormatter

__all__ = ["ReportFormatter"]
