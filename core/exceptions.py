# =============================================================================
# core/exceptions.py - Report generation errors
# =============================================================================


class LAPSReportError(Exception):
    """Base class for report generation failures"""


class DirectorySourceError(LAPSReportError):
    """Active Directory could not be queried"""


class WriteError(LAPSReportError):
    """A report file could not be written"""
