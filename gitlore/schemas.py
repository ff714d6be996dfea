"""
Request, response and model-exchange schemas.
"""

import math
from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, Field, StrictStr, field_validator


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity."""
    return math.floor(value + 0.5)


# ============ Model client exchange ============

class ChatMessage(BaseModel):
    id: str
    role: Literal["user"] = "user"
    content: str
    createdAt: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ChatConfig(BaseModel):
    model: str
    maxTokens: int
    streaming: bool = False


class Completion(BaseModel):
    content: str = ""


# ============ Structured model output ============

class RiskAssessment(BaseModel):
    """Risk score for a single function, 1 (benign) to 10 (high risk)."""

    score: int
    reason: StrictStr

    @field_validator("score", mode="before")
    @classmethod
    def clamp_score(cls, value):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("score must be a number")
        if not math.isfinite(value):
            raise ValueError("score must be finite")
        return max(1, min(10, round_half_up(value)))


class ImpactFields(BaseModel):
    """The model-produced part of an impact assessment."""

    riskLabel: StrictStr
    riskColor: StrictStr
    summary: StrictStr


class ImpactAssessment(ImpactFields):
    score: int = Field(ge=0, le=100)


class FileSummary(BaseModel):
    summary: StrictStr
    mermaid: StrictStr = ""


# ============ Request bodies ============

class ImpactRequest(BaseModel):
    codeSnippet: Optional[str] = None


class NarrateRequest(BaseModel):
    fileContent: Optional[str] = None
    filePath: Optional[str] = None


class SearchRequest(BaseModel):
    query: Optional[str] = None
    context: Optional[str] = None


class FileSummaryRequest(BaseModel):
    owner: Optional[str] = None
    name: Optional[str] = None
    path: Optional[str] = None


class FileSummaryResponse(FileSummary):
    path: str
    code: str
