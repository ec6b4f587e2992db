"""
VitalPath Clinical Decision API - FastAPI Application

Endpoints:
- Health checks
- Patient record analysis (ranked conditions, tests, pathways, overall risk)
- Read-only views of the condition registry, knowledge base and thresholds
"""
from contextlib import asynccontextmanager
from datetime import datetime
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from vitalpath.config import settings
from vitalpath.core.clinical import ClinicalDecisionEngine, find_condition
from vitalpath.core.clinical.knowledge import group_tests_by_priority
from vitalpath.models.screening import (
    PatientRecordInput,
    AnalysisResponse,
    HealthResponse,
)
from vitalpath.utils import (
    get_logger,
    setup_logging,
    VitalPathError,
    RecordValidationError,
    KnowledgeBaseError,
)

logger = get_logger(__name__)

START_TIME = datetime.now()

_engine = ClinicalDecisionEngine()


# ---- Application Lifespan ----

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level, settings.log_file)
    logger.info(
        f"{settings.app_name} {settings.version} ready "
        f"(thresholds {_engine.thresholds.version})"
    )
    yield
    logger.info("VitalPath API shut down.")


# ---- FastAPI Application ----

app = FastAPI(
    title=settings.app_name,
    description="Rule-based cardiometabolic risk screening. Advisory signals only.",
    version=settings.version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(VitalPathError)
async def vitalpath_error_handler(request: Request, exc: VitalPathError):
    if isinstance(exc, KnowledgeBaseError):
        status_code = 404
    elif isinstance(exc, RecordValidationError):
        status_code = 400
    else:
        status_code = 500
    logger.warning(f"{request.url.path}: {exc.code} — {exc.message}")
    return JSONResponse(status_code=status_code, content=exc.to_dict())


# ---- Health ----

def _health() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=settings.version,
        timestamp=datetime.now(),
        threshold_version=_engine.thresholds.version,
        uptime_seconds=(datetime.now() - START_TIME).total_seconds(),
    )


@app.get("/", response_model=HealthResponse, tags=["Health"])
async def root():
    return _health()


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    return _health()


# ---- Analysis ----

@app.post("/api/v1/analyze", response_model=AnalysisResponse, tags=["Analysis"])
async def analyze_record(request: PatientRecordInput):
    """
    Analyze one patient record.

    Field ranges are validated by the request model (HTTP 422 on failure);
    the engine runs only on records that passed validation.
    """
    record = request.to_record()
    result = _engine.analyze(record)

    analysis_id = f"ANL-{uuid.uuid4().hex[:8].upper()}"
    logger.info(
        f"{len(result.conditions)} condition(s), "
        f"overall risk {result.overall_risk.level.value}",
        extra={"analysis_id": analysis_id},
    )

    payload = result.to_dict()
    grouped = group_tests_by_priority(result.diagnostic_tests)
    return AnalysisResponse(
        analysis_id=analysis_id,
        timestamp=datetime.now(),
        tests_by_priority={
            tier: [t.to_dict() for t in tests] for tier, tests in grouped.items()
        },
        readings=_engine.categorize(record),
        summary=ClinicalDecisionEngine.summarise(result),
        **payload,
    )


# ---- Reference data ----

@app.get("/api/v1/conditions", tags=["Reference"])
async def list_conditions():
    """List the conditions the engine can report, in evaluation order."""
    return {
        "conditions": [
            {"id": c.name.lower(), "name": c.value}
            for c in ClinicalDecisionEngine.registered_conditions()
        ]
    }


@app.get("/api/v1/knowledge/{condition}", tags=["Reference"])
async def get_knowledge(condition: str):
    """Diagnostic tests and care pathway for one condition."""
    return _engine.knowledge_base.entry(find_condition(condition))


@app.get("/api/v1/thresholds", tags=["Reference"])
async def get_thresholds():
    """The clinical threshold table in use."""
    return _engine.thresholds.to_dict()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
