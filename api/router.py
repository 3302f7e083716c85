from fastapi import APIRouter, HTTPException

from models.matching import MatchResult
from models.requests import AnalyzeTextRequest, MatchRequest
from models.responses import AnalysisResponse
from services import resume_analyzer
from services.errors import ValidationError

router = APIRouter()


@router.get("/health")
def health():
    return {"status": "ok"}


@router.post("/analyze/text", response_model=AnalysisResponse)
def analyze_text(body: AnalyzeTextRequest):
    try:
        return resume_analyzer.analyze(body.resume_text, body.job_description)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/match", response_model=MatchResult)
def match(body: MatchRequest):
    try:
        return resume_analyzer.match_text(body.resume_text, body.job_description)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
