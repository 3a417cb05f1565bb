# src/study_kit/observability/names.py

"""Standard metric names for study-kit observability.

Use these constants instead of hardcoded strings for consistency
across the codebase.

Note: All duration metrics are in milliseconds by convention.
Units are handled by the metrics backend (e.g., converted to seconds in Prometheus).
"""

# ============================================================================
# LLM Metrics
# ============================================================================

# Duration
LLM_COMPLETION_DURATION = "llm_completion_duration"

# Counters
LLM_REQUESTS_TOTAL = "llm_requests_total"
LLM_ERRORS_TOTAL = "llm_errors_total"

# Counters (token usage - monotonic over time for cost/rate tracking)
LLM_TOKENS_PROMPT = "llm_tokens_prompt"
LLM_TOKENS_COMPLETION = "llm_tokens_completion"
LLM_TOKENS_TOTAL = "llm_tokens_total"


# ============================================================================
# Summarization Metrics
# ============================================================================

# Duration
SUMMARIZATION_DURATION = "summarization_duration"

# Counters
SUMMARIZATION_REQUESTS_TOTAL = "summarization_requests_total"
SUMMARIZATION_ERRORS_TOTAL = "summarization_errors_total"

# Gauges (last observed provider quota)
SUMMARIZATION_RATE_LIMIT_REMAINING = "summarization_rate_limit_remaining"


# ============================================================================
# Aggregation Metrics
# ============================================================================

# Duration
AGGREGATION_DURATION = "aggregation_duration"

# Counters (labelled by outcome: summarized / skipped / failed)
AGGREGATION_SEGMENTS_TOTAL = "aggregation_segments_total"


# ============================================================================
# Chunking Metrics
# ============================================================================

# Duration
CHUNKING_DURATION = "chunking_duration"

# Counters (chunks accumulate over time)
CHUNKING_CHUNKS_CREATED = "chunking_chunks_created"
CHUNKING_HARD_SPLITS = "chunking_hard_splits"


# ============================================================================
# Quiz Metrics
# ============================================================================

# Duration
QUIZ_ASSEMBLY_DURATION = "quiz_assembly_duration"

# Counters
QUIZ_QUESTIONS_CREATED = "quiz_questions_created"
QUIZ_REFINEMENTS_TOTAL = "quiz_refinements_total"
QUIZ_REFINEMENT_FALLBACKS = "quiz_refinement_fallbacks"
