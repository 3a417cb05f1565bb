# Aggregation
from .aggregation import (
    AggregatorConfig,
    DocumentSummarizer,
    FanOutAggregator,
    SummaryPipelineConfig,
    SummaryReport,
)

# Chunking
from .chunking import Segment, split_text

# Errors
from .errors import (
    InsufficientContent,
    InvalidInputError,
    NoSummariesProduced,
    StudyKitError,
    SummarizationError,
)

# Grading
from .grading import AnswerSubmission, GradeSummary, grade

# Observability
from .observability import MetricsHook, NoOpMetricsHook

# Prompts
from .prompts import Prompt, PromptsLibrary

# Quiz
from .quiz import QuestionRefiner, QuizAssembler, QuizSet

# Summarization
from .summarization import (
    SummarizationClient,
    SummarizationConfig,
    create_summarization_client,
)

__all__ = [
    # Aggregation
    "AggregatorConfig",
    "DocumentSummarizer",
    "FanOutAggregator",
    "SummaryPipelineConfig",
    "SummaryReport",
    # Chunking
    "Segment",
    "split_text",
    # Errors
    "InsufficientContent",
    "InvalidInputError",
    "NoSummariesProduced",
    "StudyKitError",
    "SummarizationError",
    # Grading
    "AnswerSubmission",
    "GradeSummary",
    "grade",
    # Observability
    "MetricsHook",
    "NoOpMetricsHook",
    # Prompts
    "Prompt",
    "PromptsLibrary",
    # Quiz
    "QuestionRefiner",
    "QuizAssembler",
    "QuizSet",
    # Summarization
    "SummarizationClient",
    "SummarizationConfig",
    "create_summarization_client",
]
