"""Similarity Engine output."""

from pydantic import BaseModel, Field


class SimilarityScore(BaseModel):
    """Composite similarity from the requesting user to one peer."""
    peer_id: str
    score: float = Field(ge=0.0, le=1.0)
