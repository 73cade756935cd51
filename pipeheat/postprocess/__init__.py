"""Post-processing: per-step reports and export."""

from pipeheat.postprocess.report import PipeReport, ReportHistory

__all__ = [
    "PipeReport",
    "ReportHistory",
]
