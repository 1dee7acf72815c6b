"""Schemas for the mental model and narrative catalog."""
from __future__ import annotations

from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

TransformationKey = Literal["P", "IN", "CO", "DE", "RE", "SY"]
EvidenceQuality = Literal["A", "B", "C"]
Difficulty = Literal["Beginner", "Intermediate", "Advanced"]
ContentType = Literal["mental-model", "narrative"]


class _CatalogModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Source(_CatalogModel):
    name: str
    reference: str = ""


class ModelMeta(_CatalogModel):
    added: Optional[str] = None
    updated: Optional[str] = None
    is_core: Optional[bool] = Field(default=None, alias="isCore")
    difficulty: Optional[int] = None


class MentalModel(_CatalogModel):
    id: Optional[str] = None
    name: str
    code: str
    description: str = ""
    example: Optional[str] = None
    category: str = ""
    tags: List[str] = Field(default_factory=list)
    transformations: List[TransformationKey] = Field(default_factory=list)
    sources: List[Source] = Field(default_factory=list)
    meta: Optional[ModelMeta] = None

    @field_validator("code")
    @classmethod
    def _validate_code(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("code is required")
        return cleaned

    @property
    def primary_transformation(self) -> Optional[str]:
        if self.transformations:
            return self.transformations[0]
        return None

    @property
    def difficulty(self) -> int:
        if self.meta is None or self.meta.difficulty is None:
            return 0
        return self.meta.difficulty


class Complexity(_CatalogModel):
    cognitive_load: str = ""
    time_to_elicit: str = ""
    expertise_required: str = ""


class Example(_CatalogModel):
    scenario: str
    application: str = ""
    outcome: str = ""


class Signal(_CatalogModel):
    signal_id: str
    signal_type: str = ""
    weight: float = 0.0
    context: str = ""


class Relationship(_CatalogModel):
    type: str
    target: str
    description: str = ""


class Citation(_CatalogModel):
    author: str
    year: Union[int, str] = ""
    title: str = ""
    source: str = ""


class Method(_CatalogModel):
    method: str
    description: str = ""
    duration: str = ""
    difficulty: Optional[Difficulty] = None


class Narrative(_CatalogModel):
    id: Optional[str] = None
    narrative_id: str
    version: str = "1.0"
    provenance_hash: str = ""
    title: str
    content: str = ""
    summary: str = ""
    category: str = ""
    tags: List[str] = Field(default_factory=list)
    domain: List[str] = Field(default_factory=list)
    evidence_quality: EvidenceQuality = "C"
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    complexity: Optional[Complexity] = None
    examples: List[Union[Example, str]] = Field(default_factory=list)
    linked_signals: List[Signal] = Field(default_factory=list)
    relationships: List[Relationship] = Field(default_factory=list)
    related_frameworks: List[str] = Field(default_factory=list)
    citations: List[Citation] = Field(default_factory=list)
    methods: Optional[List[Method]] = None
    last_updated: Optional[str] = Field(default=None, alias="lastUpdated")
    approved: Optional[bool] = None

    @field_validator("narrative_id")
    @classmethod
    def _validate_narrative_id(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("narrative_id is required")
        return cleaned


class CatalogDocument(_CatalogModel):
    version: str = "1.0"
    last_updated: Optional[str] = Field(default=None, alias="lastUpdated")
    transformations: Dict[str, str] = Field(default_factory=dict)
    models: List[MentalModel] = Field(default_factory=list)
    narratives: List[Narrative] = Field(default_factory=list)
