"""Report writers."""

from clp.reporting.workbook import ReportPaths, write_reports

__all__ = ["ReportPaths", "write_reports"]
