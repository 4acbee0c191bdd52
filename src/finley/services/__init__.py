from .decompiler_service import DecompilerService
from .report_service import ReportService
from .progress_service import ProgressReporter, SearchNotice

__all__ = ["DecompilerService", "ReportService", "ProgressReporter", "SearchNotice"]
