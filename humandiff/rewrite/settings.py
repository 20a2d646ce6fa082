"""Transformation settings shared by the web API, the CLI and the provider client.

Field names are snake_case in Python and camelCase on the wire, matching the
JSON the rewriting backend accepts and returns.
"""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class TransformationMode(str, Enum):
    PARAPHRASE = "paraphrase"
    STYLE = "style"
    TONE = "tone"
    VOCABULARY = "vocabulary"


class TargetAudience(str, Enum):
    GENERAL = "general"
    ACADEMIC = "academic"
    PROFESSIONAL = "professional"
    CASUAL = "casual"
    TECHNICAL = "technical"


class Verbosity(str, Enum):
    CONCISE = "concise"
    BALANCED = "balanced"
    DETAILED = "detailed"


MODE_INFO: Dict[TransformationMode, Dict[str, str]] = {
    TransformationMode.PARAPHRASE: {
        "label": "Paraphrase",
        "description": "Rephrase the text with different wording while maintaining meaning",
    },
    TransformationMode.STYLE: {
        "label": "Style",
        "description": "Adjust the writing style for better readability and flow",
    },
    TransformationMode.TONE: {
        "label": "Tone",
        "description": "Modify the emotional tone and voice of the text",
    },
    TransformationMode.VOCABULARY: {
        "label": "Vocabulary",
        "description": "Replace with more sophisticated or varied word choices",
    },
}

AUDIENCE_INFO: Dict[TargetAudience, str] = {
    TargetAudience.GENERAL: "General Audience",
    TargetAudience.ACADEMIC: "Academic",
    TargetAudience.PROFESSIONAL: "Professional",
    TargetAudience.CASUAL: "Casual",
    TargetAudience.TECHNICAL: "Technical",
}


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TransformationRequest(_CamelModel):
    """Request model for a text transformation."""

    original_text: str
    mode: TransformationMode = TransformationMode.PARAPHRASE
    formality: int = Field(default=50, ge=0, le=100)
    target_audience: TargetAudience = TargetAudience.GENERAL
    verbosity: Verbosity = Verbosity.BALANCED
    deep_humanization: bool = True


class TransformationResponse(_CamelModel):
    """A completed transformation, as returned by the API and kept in history.

    The timestamp is in epoch milliseconds.
    """

    id: str
    original_text: str
    humanized_text: str
    mode: TransformationMode
    formality: int
    target_audience: TargetAudience
    verbosity: Verbosity
    deep_humanization: bool
    timestamp: int

    @classmethod
    def from_request(
        cls, id: str, request: TransformationRequest, humanized_text: str, timestamp: int
    ) -> "TransformationResponse":
        return cls(
            id=id,
            original_text=request.original_text,
            humanized_text=humanized_text,
            mode=request.mode,
            formality=request.formality,
            target_audience=request.target_audience,
            verbosity=request.verbosity,
            deep_humanization=request.deep_humanization,
            timestamp=timestamp,
        )

    @property
    def created_at(self) -> datetime:
        return EPOCH + timedelta(milliseconds=self.timestamp)


def now_millis() -> int:
    """Current UTC time in epoch milliseconds."""
    return (datetime.now(timezone.utc) - EPOCH) // timedelta(milliseconds=1)
