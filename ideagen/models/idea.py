"""
Shared data models for generation requests, ideas and provider results.
"""

import uuid
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class MarketSize(str, Enum):
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


def generate_id() -> str:
    """Generate an opaque token identifying an idea within a batch."""
    return uuid.uuid4().hex[:12]


class GenerationRequest(BaseModel):
    """Parameters the user supplies for one generation batch."""

    model_config = ConfigDict(frozen=True)

    industry: str = Field(..., description="Industry the ideas should target")
    targetMarket: str = Field(..., description="Target market, e.g. small businesses")
    technologies: str = Field(..., description="Preferred technology")
    additionalNotes: str = Field("", description="Optional free-text requirements")


class IdeaRecord(BaseModel):
    """Model representing one idea normalized from a provider reply."""

    id: str = Field(default_factory=generate_id)
    title: str = Field(..., min_length=1, description="Short idea title")
    description: str = Field(..., description="What the product does")
    marketSize: MarketSize = MarketSize.MEDIUM
    difficulty: Difficulty = Difficulty.MEDIUM
    isFavorite: bool = False
    source: str = Field(..., description="Display name of the provider that produced the idea")


class ProviderResult(BaseModel):
    """Outcome of one provider within a generation batch."""

    ideas: List[IdeaRecord] = Field(default_factory=list)
    error: Optional[str] = None
    source: str

    @property
    def ok(self) -> bool:
        return self.error is None
