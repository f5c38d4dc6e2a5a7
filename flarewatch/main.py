"""
Flare Risk Engine - FastAPI Application

Main application entry point with API endpoints for:
- Per-disease flare risk scoring
- Daily symptom observations and lifestyle records
- Prodromal, UV and lifestyle flare predictions
- Flare diary triggers and clinic reports
"""
import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

# Load environment variables
load_dotenv()

from flarewatch.config import settings
from flarewatch.core.base import Disease
from flarewatch.core.errors import UnknownDiseaseError, UnknownRecordKindError
from flarewatch.core.prediction import predict_from_prodromal_symptoms, predict_lupus_flare
from flarewatch.core.scoring import MODEL_CONFIGS, DiseaseAssessment, assess_inputs
from flarewatch.models.api import (
    AssessmentResponse,
    DailyIndexRequest,
    DiseaseSelection,
    HealthResponse,
    ProdromalRequest,
    ScoreRequest,
    UVPredictionRequest,
)
from flarewatch.models.records import SymptomObservation
from flarewatch.services import FlareManagementService

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

_service: Optional[FlareManagementService] = None


def get_service() -> FlareManagementService:
    """Shared service instance, created on first use."""
    global _service
    if _service is None:
        _service = FlareManagementService()
    return _service


def _parse_disease(name: str) -> Disease:
    try:
        return Disease.from_string(name)
    except UnknownDiseaseError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _assessment_response(assessment: DiseaseAssessment) -> AssessmentResponse:
    return AssessmentResponse(**assessment.to_dict())


# ---- FastAPI Application ----

app = FastAPI(
    title=settings.app_name,
    description="Explainable flare risk scoring for autoimmune conditions",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

API = settings.api_prefix


# ---- API Endpoints ----

@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        timestamp=datetime.now().isoformat(),
        components={
            "scoring": "ready",
            "correlation": "ready",
            "record_store": "ready",
        },
    )


@app.get(f"{API}/diseases", tags=["Reference"])
async def list_diseases():
    """Supported conditions with their index names and cut points."""
    return {
        "diseases": [
            {
                "disease": config.disease.value,
                "index_name": config.index_name,
                "cut_points": list(config.cut_points),
                "indicators": config.keys,
            }
            for config in MODEL_CONFIGS.values()
        ]
    }


@app.post(f"{API}/score", response_model=AssessmentResponse, tags=["Scoring"])
async def score_disease(request: ScoreRequest):
    """Score flat indicator values for one disease."""
    disease = _parse_disease(request.disease)
    assessment = assess_inputs(request.inputs, disease, request.baselines)
    return _assessment_response(assessment)


# ---- Observations ----

@app.post(f"{API}/observations", tags=["Observations"])
async def save_observation(observation: SymptomObservation,
                           service: FlareManagementService = Depends(get_service)):
    """Save a daily check-in; an existing entry for the date is replaced."""
    saved = service.save_observation(observation)
    return saved.model_dump(mode="json")


@app.get(f"{API}/observations", tags=["Observations"])
async def list_observations(service: FlareManagementService = Depends(get_service)):
    return [o.model_dump(mode="json") for o in service.list_observations()]


@app.get(f"{API}/observations/{{day}}/assessment", response_model=List[AssessmentResponse],
         tags=["Observations"])
async def assess_observation_day(
    day: date,
    disease: Optional[List[str]] = Query(default=None),
    service: FlareManagementService = Depends(get_service),
):
    """
    Score a stored observation.

    Uses the requested diseases, or the stored disease selection when none
    are given. A missing disease sub-record yields status insufficient_data.
    """
    if service.get_observation(day) is None:
        raise HTTPException(status_code=404, detail=f"No observation recorded for {day}")
    diseases = [_parse_disease(name) for name in disease] if disease else None
    return [_assessment_response(a) for a in service.assess_day(day, diseases)]


# ---- Predictions ----

@app.post(f"{API}/predictions/prodromal", tags=["Predictions"])
async def prodromal_prediction(request: ProdromalRequest):
    return predict_from_prodromal_symptoms(request.to_input()).to_dict()


@app.post(f"{API}/predictions/lupus-uv", tags=["Predictions"])
async def lupus_uv_prediction(request: UVPredictionRequest):
    return predict_lupus_flare(request.to_forecast(), request.sun_exposure_hours).to_dict()


@app.post(f"{API}/daily-index", tags=["Predictions"])
async def daily_index(request: DailyIndexRequest,
                      service: FlareManagementService = Depends(get_service)):
    """Today's flare index from prodromal, environmental and lifestyle scores."""
    today = request.today or date.today()
    return service.daily_index(request.to_input(), request.environmental_score, today)


# ---- Lifestyle records ----

@app.post(f"{API}/records/{{kind}}", tags=["Records"])
async def add_record(kind: str, payload: Dict[str, Any],
                     service: FlareManagementService = Depends(get_service)):
    try:
        record = service.add_record(kind, payload)
    except UnknownRecordKindError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))
    return record.model_dump(mode="json")


@app.get(f"{API}/records/{{kind}}", tags=["Records"])
async def list_records(kind: str, service: FlareManagementService = Depends(get_service)):
    try:
        records = service.list_records(kind)
    except UnknownRecordKindError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return [r.model_dump(mode="json") for r in records]


@app.delete(f"{API}/records/{{kind}}/{{record_id}}", tags=["Records"])
async def delete_record(kind: str, record_id: str,
                        service: FlareManagementService = Depends(get_service)):
    try:
        deleted = service.delete_record(kind, record_id)
    except UnknownRecordKindError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail="Record not found")
    return {"deleted": record_id}


# ---- Analyses ----

@app.get(f"{API}/analysis/lifestyle", tags=["Analysis"])
async def lifestyle_analysis(today: Optional[date] = None,
                             service: FlareManagementService = Depends(get_service)):
    return service.analyze_lifestyle(today or date.today())


@app.get(f"{API}/analysis/emotion", tags=["Analysis"])
async def emotion_analysis(today: Optional[date] = None,
                           weeks: int = Query(default=4, ge=1, le=52),
                           service: FlareManagementService = Depends(get_service)):
    return service.emotion_correlation(today or date.today(), weeks).to_dict()


@app.get(f"{API}/diary/triggers", tags=["Diary"])
async def diary_triggers(service: FlareManagementService = Depends(get_service)):
    return [t.to_dict() for t in service.flare_triggers()]


@app.get(f"{API}/diary/report", tags=["Diary"])
async def diary_report(today: Optional[date] = None,
                       period_days: Optional[int] = Query(default=None, ge=1),
                       service: FlareManagementService = Depends(get_service)):
    return service.hospital_report(today or date.today(), period_days).to_dict()


# ---- Profile ----

@app.get(f"{API}/profile/diseases", tags=["Profile"])
async def get_selected_diseases(service: FlareManagementService = Depends(get_service)):
    return {"diseases": [d.value for d in service.store.get_selected_diseases()]}


@app.put(f"{API}/profile/diseases", tags=["Profile"])
async def set_selected_diseases(selection: DiseaseSelection,
                                service: FlareManagementService = Depends(get_service)):
    diseases = [_parse_disease(name) for name in selection.diseases]
    service.store.set_selected_diseases(diseases)
    return {"diseases": [d.value for d in diseases]}


@app.get(f"{API}/profile/severity", tags=["Profile"])
async def get_severity_profile(service: FlareManagementService = Depends(get_service)):
    return service.store.get_severity_profile()


@app.put(f"{API}/profile/severity", tags=["Profile"])
async def set_severity_profile(profile: Dict[str, Any],
                               service: FlareManagementService = Depends(get_service)):
    service.store.set_severity_profile(profile)
    return profile


# ---- Application Lifecycle ----

@app.on_event("startup")
async def startup_event():
    """Initialize on startup."""
    logger.info(f"{settings.app_name} starting up...")
    logger.info("API ready to accept requests")


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown."""
    logger.info(f"{settings.app_name} shutting down...")


# ---- Run with uvicorn ----
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
