"""Evidence request/response schemas. JSON keys are camelCase on the wire."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Union

from pydantic import UUID4, BaseModel, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel

REQUIRED_SUBMISSION_FIELDS = ("team", "level", "points", "link")


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class EvidenceSubmission(_CamelModel):
    """Body of POST /evidence. Presence of required fields is checked by the service."""

    # Text fields accept numbers and keep their string form.
    model_config = ConfigDict(coerce_numbers_to_str=True)

    team: Optional[str] = None
    team_class: Optional[str] = None
    level: Optional[int] = None
    points: Optional[float] = None
    link: Optional[str] = None
    note: Optional[str] = None

    def missing_fields(self) -> List[str]:
        # Falsy counts as missing, so points=0 and level=0 are rejected too.
        return [name for name in REQUIRED_SUBMISSION_FIELDS if not getattr(self, name)]


class CorrectionRequest(_CamelModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    correction_note: Optional[str] = None

    @property
    def has_note(self) -> bool:
        """True when the key was sent, even as "" or null."""
        return "correction_note" in self.model_fields_set


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class EvidenceRead(_CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID4
    team: str
    team_class: Optional[str] = None
    level: int
    points: Union[int, float]
    link: str
    note: Optional[str] = None
    validated: bool
    correction_note: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @field_serializer("points")
    def serialize_points(self, points: Union[int, float]) -> Union[int, float]:
        # Whole numbers go out as 5, not 5.0.
        if isinstance(points, float) and points.is_integer():
            return int(points)
        return points
