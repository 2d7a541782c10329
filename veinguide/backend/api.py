"""
FastAPI Backend for Vein Guide
Thin HTTP layer over the needle recommendation engine and vein comparison
"""

import logging
from datetime import datetime
from typing import Any, List, Optional, Union

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from veinguide.core.config import config
from veinguide.core.comparison import PatientContext, VeinAnalyzer, VeinMeasurement, build_context
from veinguide.core.recommender import RecommendationEngine

logging.basicConfig(
    level=config.logging_config['level'],
    format=config.logging_config['format'],
)
logger = logging.getLogger("veinguide")

app = FastAPI(title="Vein Guide API", version="1.0.0")

# CORS middleware for React frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.api_config['cors_origins'],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Stateless services, created once at startup
engine: Optional[RecommendationEngine] = None
analyzer: Optional[VeinAnalyzer] = None

# Raw numbers or form strings; the engine does the validation
RawNumber = Optional[Union[float, str]]


class HealthResponse(BaseModel):
    status: str
    timestamp: str


class RecommendRequest(BaseModel):
    """Request body for a single needle recommendation"""
    model_config = ConfigDict(populate_by_name=True)

    vein_depth: RawNumber = Field(None, alias="veinDepth")
    vein_diameter: RawNumber = Field(None, alias="veinDiameter")
    age_group: Optional[str] = Field(None, alias="ageGroup")
    stability_index: RawNumber = Field(None, alias="stabilityIndex")
    patient_history: Optional[str] = Field(None, alias="patientHistory")


class MeasurementBundle(BaseModel):
    """One candidate vein as measured by the scanner"""
    model_config = ConfigDict(populate_by_name=True)

    vein_id: str = Field(..., alias="veinId")
    depth: RawNumber = None
    diameter: RawNumber = None
    stability: RawNumber = None
    puncture_score: RawNumber = Field(0.0, alias="punctureScore")
    name: str = ""
    anatomical_region: str = Field("", alias="anatomicalRegion")


class CompareRequest(BaseModel):
    """Request body for ranking several veins for one patient"""
    model_config = ConfigDict(populate_by_name=True)

    vein_ids: Optional[List[str]] = Field(None, alias="veinIds")
    measurements: Optional[List[MeasurementBundle]] = None
    age_group: Optional[str] = Field(None, alias="ageGroup")
    patient_history: Optional[str] = Field(None, alias="patientHistory")


@app.on_event("startup")
async def startup_event():
    """Initialize on startup"""
    global engine, analyzer
    logger.info("Starting Vein Guide API...")

    engine = RecommendationEngine(config.recommender_config)
    analyzer = VeinAnalyzer(config.get_comparison_config(), engine=engine)
    logger.info(
        "Recommendation engine ready (%d gauges, %d reference veins)",
        len(engine.catalog), len(analyzer.registry.all_ids()),
    )


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint"""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now().isoformat()
    )


@app.post("/api/recommend")
async def recommend_endpoint(request: RecommendRequest):
    """Needle gauge, length and success estimate for one vein measurement"""
    result = engine.generate(
        vein_depth=request.vein_depth,
        vein_diameter=request.vein_diameter,
        age_group=request.age_group,
        stability_index=request.stability_index,
        patient_history=request.patient_history,
    )
    status_code = 422 if result.error else 200
    return JSONResponse(status_code=status_code, content=result.to_dict())


@app.post("/api/compare")
async def compare_endpoint(request: CompareRequest):
    """
    Rank candidate veins for a patient.
    Measurement bundles are ranked as supplied; otherwise reference veins are
    looked up by id (all of them when no ids are given).
    """
    context = _context_or_422(request.age_group, request.patient_history)
    if isinstance(context, JSONResponse):
        return context

    if request.measurements is not None:
        bundles = [VeinMeasurement(**m.model_dump()) for m in request.measurements]
        ranked = analyzer.compare_measurements(bundles, context)
    else:
        ranked = analyzer.compare_veins(request.vein_ids, context)

    return [analysis.to_dict() for analysis in ranked]


@app.get("/api/veins")
async def list_veins():
    """Reference veins with their best puncture site, best site first"""
    return [analyzer.registry.hotspot_data(v.id) for v in analyzer.registry.by_puncture_score()]


@app.get("/api/veins/{vein_id}")
async def analyze_vein_endpoint(
    vein_id: str,
    age_group: Optional[str] = None,
    patient_history: Optional[str] = None,
):
    """Full analysis of one reference vein: recommendation, procedure steps, segments"""
    context = _context_or_422(age_group, patient_history)
    if isinstance(context, JSONResponse):
        return context

    if analyzer.registry.get(vein_id) is None:
        raise HTTPException(status_code=404, detail=f"Unknown vein: {vein_id}")

    outcome = analyzer.analyze_vein(vein_id, context)
    if outcome.error:
        return JSONResponse(status_code=422, content=outcome.to_dict())
    return outcome.to_dict()


@app.get("/api/veins/{vein_id}/hotspot")
async def hotspot_endpoint(
    vein_id: str,
    age_group: Optional[str] = None,
    patient_history: Optional[str] = None,
):
    """Compact tooltip payload for a tapped hotspot in the AR overlay"""
    context = _context_or_422(age_group, patient_history)
    if isinstance(context, JSONResponse):
        return context

    hotspot = analyzer.registry.hotspot_data(vein_id)
    if hotspot is None:
        raise HTTPException(status_code=404, detail=f"Unknown vein: {vein_id}")
    return analyzer.quick_recommend_from_hotspot(hotspot, context)


def _context_or_422(age_group: Any, patient_history: Any) -> Union[PatientContext, JSONResponse]:
    context, errors = build_context(age_group, patient_history)
    if errors:
        logger.info("Rejected patient context: %s", "; ".join(errors))
        return JSONResponse(status_code=422, content={"error": True, "messages": errors})
    return context


if __name__ == "__main__":
    import uvicorn
    logger.info(
        "Starting Vein Guide API Server on http://%s:%d",
        config.api_config['host'], config.api_config['port'],
    )
    uvicorn.run(app, host=config.api_config['host'], port=config.api_config['port'], log_level="info")
