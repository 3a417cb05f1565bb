from .aggregator import FanOutAggregator
from .config import AggregatorConfig, SummaryPipelineConfig
from .outcomes import Failed, SegmentOutcome, Skipped, Summarized, SummaryReport
from .pipeline import DocumentSummarizer

__all__ = [
    "AggregatorConfig",
    "DocumentSummarizer",
    "Failed",
    "FanOutAggregator",
    "SegmentOutcome",
    "Skipped",
    "Summarized",
    "SummaryPipelineConfig",
    "SummaryReport",
]
