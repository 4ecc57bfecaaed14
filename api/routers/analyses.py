"""
Analysis endpoints.

POST /api/analyze                → Submit code as text (returns a pending analysis)
POST /api/analyze/upload         → Submit an uploaded source file
GET  /api/analyses               → All analyses, newest first
GET  /api/analyses/recent        → The most recent N analyses
GET  /api/analyses/{analysis_id} → One analysis (poll this until status != pending)
GET  /api/stats                  → Corpus-wide statistics
GET  /api/languages              → Supported languages

The API layer is intentionally thin:
- Validate input (Pydantic does this, with the pipeline's Submission model)
- Translate "not found" into 404
- Return the response

It does NOT scan anything — that happens on the worker pool.
"""

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from api.dependencies import get_pipeline
from api.schemas.analysis import AnalysisResponse, AnalysisStatsResponse, AnalyzeRequest
from config.settings import settings
from pipeline.orchestrator import AnalysisPipeline
from pipeline.upload import check_upload, decode_upload, detect_language

router = APIRouter(prefix="/api", tags=["analyses"])


@router.post("/analyze", response_model=AnalysisResponse, status_code=201)
def analyze_code(
    body: AnalyzeRequest,
    pipeline: AnalysisPipeline = Depends(get_pipeline),
) -> AnalysisResponse:
    """
    Submit code for analysis.

    The analysis is stored with status=pending and queued on the worker
    pool; this returns before the scan runs. Poll GET /api/analyses/{id}
    (about once a second) until the status is completed or failed.
    """
    record = pipeline.submit(code=body.code, language=body.language, filename=body.filename)
    return AnalysisResponse.model_validate(record)


@router.post("/analyze/upload", response_model=AnalysisResponse, status_code=201)
async def analyze_upload(
    file: UploadFile = File(...),
    pipeline: AnalysisPipeline = Depends(get_pipeline),
) -> AnalysisResponse:
    """
    Submit an uploaded source file.

    The language comes from the file extension (.py, .sol, .js/.ts/.jsx/.tsx;
    anything else is treated as JavaScript). Files over MAX_UPLOAD_BYTES or
    outside the extension allow-list are rejected.
    """
    filename = file.filename or ""
    # Read one byte past the limit so oversized files are detected without reading them whole
    content = await file.read(settings.MAX_UPLOAD_BYTES + 1)
    check_upload(filename, len(content))

    try:
        record = await run_in_threadpool(
            pipeline.submit,
            code=decode_upload(content),
            language=detect_language(filename),
            filename=filename,
        )
    except ValidationError as e:
        # e.g. an empty file; answer with the same 422 a bad JSON body gets
        raise RequestValidationError(
            [{**err, "loc": ("body", *err["loc"])} for err in e.errors(include_url=False)]
        ) from e
    return AnalysisResponse.model_validate(record)


@router.get("/analyses", response_model=list[AnalysisResponse])
def list_analyses(
    pipeline: AnalysisPipeline = Depends(get_pipeline),
) -> list[AnalysisResponse]:
    """All analyses, newest first."""
    return [AnalysisResponse.model_validate(r) for r in pipeline.list_all()]


@router.get("/analyses/recent", response_model=list[AnalysisResponse])
def list_recent_analyses(
    limit: int = Query(5, ge=0, le=100, description="How many analyses to return"),
    pipeline: AnalysisPipeline = Depends(get_pipeline),
) -> list[AnalysisResponse]:
    return [AnalysisResponse.model_validate(r) for r in pipeline.list_recent(limit)]


@router.get("/analyses/{analysis_id}", response_model=AnalysisResponse)
def get_analysis(
    analysis_id: str,
    pipeline: AnalysisPipeline = Depends(get_pipeline),
) -> AnalysisResponse:
    """Get a single analysis by id."""
    record = pipeline.get(analysis_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Analysis {analysis_id} not found")
    return AnalysisResponse.model_validate(record)


@router.get("/stats", response_model=AnalysisStatsResponse)
def get_stats(
    pipeline: AnalysisPipeline = Depends(get_pipeline),
) -> AnalysisStatsResponse:
    """
    Corpus-wide statistics.

    bugsFound and vulnerabilities only count completed analyses;
    totalAnalyses counts every analysis regardless of status.
    """
    return AnalysisStatsResponse.model_validate(pipeline.stats())


@router.get("/languages", response_model=list[str])
def get_languages() -> list[str]:
    return AnalysisPipeline.languages()
