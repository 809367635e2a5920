"""
DSPN Nerve Conduction Scoring - FastAPI Application

API endpoints for:
- Health checks
- Supported nerve reference listing
- Score #2 / Score #4 analysis of a nerve-conduction study
"""
from datetime import datetime
from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dspn import __version__, config
from dspn.core.base import NERVE_PARAMETERS, NERVE_TYPES, NerveId, NerveReading
from dspn.core.scoring import NerveConductionEngine
from dspn.models import (
    AnalysisRequest,
    HealthResponse,
    NerveInfo,
    NerveListResponse,
)
from dspn.utils import (
    InputValidationError,
    NerveConductionError,
    get_logger,
    setup_logging,
)

setup_logging(config.LOG_LEVEL, config.LOG_FILE or None)
logger = get_logger(__name__)


# ---- FastAPI Application ----

app = FastAPI(
    title=config.API_TITLE,
    description="Percentile-based electrophysiological classification of diabetic polyneuropathy",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

START_TIME = datetime.now()

_engine = NerveConductionEngine()


# ---- Error Handling ----

@app.exception_handler(NerveConductionError)
async def nerve_conduction_error_handler(request: Request, exc: NerveConductionError):
    status_code = 422 if isinstance(exc, InputValidationError) else 500
    if status_code == 500:
        logger.error(f"Analysis failed [{exc.code}]: {exc.message} {exc.details}")
    return JSONResponse(status_code=status_code, content=exc.to_dict())


# ---- Utility Functions ----

def _to_readings(request: AnalysisRequest) -> List[NerveReading]:
    """Convert request readings, rejecting a nerve that appears twice."""
    seen = set()
    readings = []
    for item in request.readings:
        if item.nerve in seen:
            raise InputValidationError(
                f"Duplicate reading for nerve '{item.nerve.value}'",
                field="readings",
                details={"nerve": item.nerve.value},
            )
        seen.add(item.nerve)
        readings.append(item.to_reading())
    return readings


def _health() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        timestamp=datetime.now().isoformat(),
        uptime_seconds=(datetime.now() - START_TIME).total_seconds(),
    )


# ---- API Endpoints ----

@app.get("/", response_model=HealthResponse, tags=["Health"])
async def root():
    """API root - health check."""
    return _health()


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return _health()


@app.get("/api/v1/nerves", response_model=NerveListResponse, tags=["Reference"])
async def list_nerves(language: str = config.DEFAULT_LANGUAGE):
    """
    List the supported nerves and the parameters each one is scored on.
    """
    catalog = _engine.catalog(language)
    return NerveListResponse(
        nerves=[
            NerveInfo(
                nerve=nerve.value,
                type=NERVE_TYPES[nerve].value,
                label=catalog.nerve_label(nerve),
                parameters=[p.value for p in NERVE_PARAMETERS[NERVE_TYPES[nerve]]],
            )
            for nerve in NerveId
        ]
    )


@app.post("/api/v1/analysis", tags=["Analysis"])
async def run_analysis(request: AnalysisRequest) -> Dict[str, Any]:
    """
    Score a nerve-conduction study (Score #2 diagnosis, Score #4 severity).
    """
    readings = _to_readings(request)
    result = _engine.analyze(readings, request.patient.to_patient(), request.language)
    return result.to_dict()


# ---- Run with uvicorn ----
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)
