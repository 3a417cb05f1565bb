# src/study_kit/api/app.py

import io
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, File, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from study_kit.aggregation.pipeline import DocumentSummarizer
from study_kit.errors import (
    DocumentTooLargeError,
    EmptyDocumentError,
    InsufficientContent,
    InvalidInputError,
    NoSummariesProduced,
    StudyKitError,
    SummarizationTimeout,
)
from study_kit.grading.grader import grade
from study_kit.llms.base import LLMClient
from study_kit.llms.factory import create_llm_client
from study_kit.observability.base import MetricsHook, NoOpMetricsHook
from study_kit.parsers.registry import parser_for
from study_kit.quiz.assembler import QuizAssembler
from study_kit.quiz.concepts import ConceptExtractor
from study_kit.quiz.refiner import QuestionRefiner
from study_kit.summarization.base import SummarizationClient
from study_kit.summarization.factory import create_summarization_client

from .schemas import (
    ErrorResponse,
    GenerateQuizRequest,
    GradeQuizRequest,
    GradeResponse,
    QuizResponse,
    SummarizeRequest,
    SummaryResponse,
)
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

RATE_LIMITED_MESSAGE = (
    "Summarization service rate limit exceeded. Please try again later."
)


def _error(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in e['loc'])}: {e['msg']}" for e in exc.errors()
        )
        return _error(400, "Invalid request", problems)

    @app.exception_handler(InvalidInputError)
    async def invalid_input(request: Request, exc: InvalidInputError) -> JSONResponse:
        return _error(400, str(exc))

    @app.exception_handler(InsufficientContent)
    async def insufficient_content(
        request: Request, exc: InsufficientContent
    ) -> JSONResponse:
        return _error(400, str(exc))

    @app.exception_handler(NoSummariesProduced)
    async def no_summaries(request: Request, exc: NoSummariesProduced) -> JSONResponse:
        report = exc.report
        logger.error(
            "No summaries produced: failed=%s skipped=%s rate_limited=%s",
            report.failed_indices,
            report.skipped_indices,
            report.rate_limited_indices,
        )
        if exc.rate_limited:
            return _error(500, RATE_LIMITED_MESSAGE, str(exc))
        return _error(500, "Failed to generate any summaries", str(exc))

    @app.exception_handler(SummarizationTimeout)
    async def timed_out(request: Request, exc: SummarizationTimeout) -> JSONResponse:
        return _error(500, "Failed to summarize text", str(exc))

    @app.exception_handler(StudyKitError)
    async def unexpected(request: Request, exc: StudyKitError) -> JSONResponse:
        logger.error("Request failed: %s", exc)
        return _error(500, "Request failed", str(exc))


def create_app(
    settings: Settings | None = None,
    *,
    summarization_client: SummarizationClient | None = None,
    llm_client: LLMClient | None = None,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> FastAPI:
    """Build the HTTP service.

    Clients are created from settings unless given. Quiz refinement is only
    available when an LLM client is configured.
    """
    settings = settings or get_settings()

    owns_client = summarization_client is None
    if summarization_client is None:
        summarization_client = create_summarization_client(
            settings.summarization_config(), metrics_hook
        )
    llm_config = settings.quiz_llm_config()
    if llm_client is None and llm_config is not None:
        llm_client = create_llm_client(llm_config, metrics_hook)

    summarizer = DocumentSummarizer(
        summarization_client, settings.pipeline_config(), metrics_hook
    )
    quiz_config = settings.quiz_config()
    assembler = QuizAssembler(
        extractor=ConceptExtractor(threshold=quiz_config.importance_threshold),
        refiner=QuestionRefiner(llm_client) if llm_client is not None else None,
        metrics_hook=metrics_hook,
        max_document_chars=quiz_config.max_document_chars,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        aclose = getattr(summarization_client, "aclose", None)
        if owns_client and aclose is not None:
            await aclose()

    app = FastAPI(
        title="study-kit",
        description="Summaries and comprehension quizzes for long documents.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    _register_error_handlers(app)

    @app.get("/healthz", tags=["general"])
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/summarize", response_model=SummaryResponse, tags=["summaries"])
    async def summarize(body: SummarizeRequest) -> SummaryResponse:
        report = await summarizer.summarize(body.text)
        return SummaryResponse.from_report(report)

    @app.post(
        "/summarize-document", response_model=SummaryResponse, tags=["summaries"]
    )
    async def summarize_document(document: UploadFile = File(...)) -> SummaryResponse:
        filename = document.filename or ""
        parser = parser_for(filename)

        limit = settings.max_upload_bytes
        if document.size is not None and document.size > limit:
            raise DocumentTooLargeError(document.size, limit)
        # Never buffer more than one byte past the limit
        contents = await document.read(limit + 1)
        if not contents:
            raise EmptyDocumentError("Uploaded file is empty")
        if len(contents) > limit:
            raise DocumentTooLargeError(len(contents), limit)

        try:
            extracted = await run_in_threadpool(parser.parse, io.BytesIO(contents))
        except Exception as e:
            logger.warning("Could not read %s: %s", filename, e)
            raise InvalidInputError(f"Could not read document {filename!r}") from e

        if extracted.is_empty:
            raise EmptyDocumentError("No text content found in the document")

        logger.info(
            "Extracted %d characters from %s", len(extracted.text), filename
        )
        report = await summarizer.summarize(extracted.text)
        return SummaryResponse.from_report(report)

    @app.post("/generate-quiz", response_model=QuizResponse, tags=["quiz"])
    async def generate_quiz(body: GenerateQuizRequest) -> QuizResponse:
        count = body.count or quiz_config.target_count
        refine = quiz_config.refine if body.refine is None else body.refine
        if refine and assembler.refiner is None:
            logger.info("Refinement requested but no quiz LLM is configured; skipping")
            refine = False
        if refine:
            quiz = await assembler.assemble_and_refine(body.text, count)
        else:
            quiz = await run_in_threadpool(assembler.assemble, body.text, count)
        return QuizResponse.from_quiz(quiz)

    @app.post("/grade-quiz", response_model=GradeResponse, tags=["quiz"])
    async def grade_quiz(body: GradeQuizRequest) -> GradeResponse:
        summary = grade([answer.to_submission() for answer in body.answers])
        return GradeResponse.from_summary(summary)

    return app
