"""Models for AI analysis results."""

from pydantic import BaseModel, Field


class FoodEstimate(BaseModel):
    """Single food component estimated by a provider."""

    name: str
    calories: float = Field(ge=0.0)
    weight_g: float | None = Field(default=None, ge=0.0)
    protein_g: float = Field(default=0.0, ge=0.0)
    carbs_g: float = Field(default=0.0, ge=0.0)
    fat_g: float = Field(default=0.0, ge=0.0)


class FoodAnalysis(BaseModel):
    """Structured output for food image or text analysis."""

    foods: list[FoodEstimate]


class SportAnalysis(BaseModel):
    """Structured output for activity analysis."""

    name: str
    calories: float = Field(ge=0.0)
    duration_min: float | None = Field(default=None, ge=0.0)
    intensity: str | None = None
