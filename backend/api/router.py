import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_provider, get_store
from config import settings
from models.requests import (
    MAX_JD_CHARS,
    AnalyzeRequest,
    ATSScoreRequest,
    ContrastiveRequest,
    ExampleUploadRequest,
    SemanticScoreRequest,
)
from models.responses import (
    AnalysisResponse,
    ATSScoreResponse,
    ContrastiveResponse,
    ExampleCreatedResponse,
    HealthResponse,
)
from models.schemas.semantic import SemanticScore
from services import auto_labeler, pdf_parser, resume_analyzer
from services.ats_engine import combine_ats_results, run_ats_analysis, run_supplementary_ats_analysis
from services.contrastive_analysis import analyze_contrastive_patterns, contrastive_insights_to_suggestions
from services.embeddings import EmbeddingProvider
from services.errors import (
    EmbeddingInputError,
    EmbeddingUnavailableError,
    LabelingError,
    NoMeaningfulSectionsError,
    VectorDimensionError,
)
from services.example_store import ExampleStore
from services.similarity import run_semantic_analysis

logger = logging.getLogger(__name__)

router = APIRouter()
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


async def _score_ats(
    resume_text: str, job_description: str, page_count: int | None, strict_mode: bool = True
) -> ATSScoreResponse:
    ats = run_ats_analysis(
        resume_text, job_description, page_count=page_count, strict_mode=strict_mode
    )
    supplementary = await run_supplementary_ats_analysis(
        resume_text,
        job_description,
        matched_keywords=ats.matched_keywords,
        missing_keywords=ats.missing_keywords,
        match_pct=ats.keyword_match_pct,
    )
    return ATSScoreResponse(ats=combine_ats_results(ats, supplementary), supplementary=supplementary)


@router.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(status="ok", llm_configured=bool(settings.gemini_api_key))


@router.post("/ats-score", response_model=ATSScoreResponse)
@limiter.limit("10/minute")
async def ats_score(request: Request, body: ATSScoreRequest):
    return await _score_ats(
        body.resume_text, body.job_description, body.page_count, body.strict_mode
    )


@router.post("/ats-score/upload", response_model=ATSScoreResponse)
@limiter.limit("10/minute")
async def ats_score_upload(
    request: Request,
    resume_file: UploadFile = File(...),
    job_description: str = Form(...),
):
    # Validate file type
    if not resume_file.filename or not resume_file.filename.lower().endswith(".pdf"):
        raise HTTPException(status_code=400, detail="Only PDF files are accepted")

    # Read and validate size
    content = await resume_file.read()
    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Max size: {settings.max_upload_size_mb}MB",
        )

    if not job_description.strip():
        raise HTTPException(status_code=400, detail="Job description is required")
    if len(job_description) > MAX_JD_CHARS:
        raise HTTPException(status_code=400, detail=f"Job description too long (max {MAX_JD_CHARS} chars)")

    # Extract text and page count from PDF
    try:
        resume_text, page_count = pdf_parser.extract_text_and_page_count(content)
    except Exception as e:
        logger.warning("PDF parsing failed: %s", e)
        raise HTTPException(status_code=400, detail="Could not parse PDF file")

    if not resume_text.strip():
        raise HTTPException(status_code=400, detail="No text could be extracted from PDF")

    return await _score_ats(resume_text, job_description, page_count)


@router.post("/semantic-score", response_model=SemanticScore)
@limiter.limit("10/minute")
async def semantic_score(
    request: Request,
    body: SemanticScoreRequest,
    provider: EmbeddingProvider = Depends(get_provider),
):
    try:
        analysis = await run_semantic_analysis(
            body.resume_text, body.job_description, provider=provider
        )
    except (NoMeaningfulSectionsError, EmbeddingInputError, VectorDimensionError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    except EmbeddingUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return analysis.score


@router.post("/analyze", response_model=AnalysisResponse)
@limiter.limit("10/minute")
async def analyze(
    request: Request,
    body: AnalyzeRequest,
    provider: EmbeddingProvider = Depends(get_provider),
    store: ExampleStore = Depends(get_store),
):
    return await resume_analyzer.analyze(
        body.resume_text,
        body.job_description,
        page_count=body.page_count,
        provider=provider,
        store=store,
    )


@router.post("/contrastive", response_model=ContrastiveResponse)
@limiter.limit("10/minute")
async def contrastive(request: Request, body: ContrastiveRequest):
    result = analyze_contrastive_patterns(body.positive, body.negative)
    suggestions = (
        contrastive_insights_to_suggestions(body.user_patterns, result)
        if body.user_patterns is not None
        else []
    )
    return ContrastiveResponse(result=result, suggestions=suggestions)


@router.post("/examples", response_model=ExampleCreatedResponse, status_code=201)
@limiter.limit("10/minute")
async def create_example(
    request: Request,
    body: ExampleUploadRequest,
    provider: EmbeddingProvider = Depends(get_provider),
    store: ExampleStore = Depends(get_store),
):
    try:
        labels = await auto_labeler.auto_label_example(body.resume_text, body.job_description)
    except LabelingError as e:
        raise HTTPException(status_code=502, detail=str(e))

    validation = auto_labeler.validate_label_result(labels)
    if not validation.valid:
        logger.warning("Auto-label issues: %s", "; ".join(validation.issues))

    try:
        record = await auto_labeler.build_example_record(
            body.resume_text, body.job_description, body.outcome_type, labels, provider=provider
        )
    except (EmbeddingInputError, VectorDimensionError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    except EmbeddingUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))

    await store.add(record)
    return ExampleCreatedResponse(
        id=record.id,
        outcome_type=record.outcome_type,
        industry=record.industry,
        role_level=record.role_level,
        validation=validation,
    )
