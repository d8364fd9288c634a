"""Application exports."""

from .bill_analysis_pipeline import BillAnalysisPipeline
from .factory import BillCheckComponentFactory
from .progress import PipelineStage, ProgressCallback

__all__ = [
    'BillAnalysisPipeline',
    'BillCheckComponentFactory',
    'PipelineStage',
    'ProgressCallback',
]
