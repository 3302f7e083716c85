from pydantic import BaseModel

from models.matching import MatchResult
from models.resume import SectionMap
from models.scoring import Recommendation, ScoreBreakdown


class DocumentMetadata(BaseModel):
    text_length: int = 0
    word_count: int = 0


class AnalysisResponse(BaseModel):
    sections: SectionMap = SectionMap()
    ats_score: ScoreBreakdown = ScoreBreakdown()
    recommendations: list[Recommendation] = []
    critical_issue_count: int = 0
    match_result: MatchResult | None = None
    metadata: DocumentMetadata = DocumentMetadata()
    degraded: bool = False
