# catalog/schemas.py
"""
Pydantic shapes for the admin-authored parts of a template.

A template's ``sections`` is an ordered list of section declarations. Each
declaration names a section ``type`` (hero, projects, ...) which selects the
renderer component and the shape of the portfolio content stored for it.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from portfoliohub.errors import ValidationFailed
from portfolio.sections import Shape, canonical_type, shape_for


class TemplateSection(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    id: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    fields: List[str] = Field(default_factory=list)
    layout: Optional[str] = None
    styling: Dict[str, Any] = Field(default_factory=dict)
    is_required: bool = Field(False, alias='isRequired')
    is_removable: bool = Field(True, alias='isRemovable')
    is_repeatable: bool = Field(False, alias='isRepeatable')
    default_content: Optional[Any] = Field(None, alias='defaultContent')

    @field_validator('id', 'type')
    @classmethod
    def strip_names(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('must not be blank')
        return v

    @field_validator('styling', mode='before')
    @classmethod
    def null_styling(cls, v):
        return v or {}

    @property
    def data_key(self) -> str:
        """Key this section's content is stored under in a portfolio's customData."""
        return canonical_type(self.type)

    @property
    def shape(self) -> Shape:
        """Content shape this section expects in a portfolio's customData."""
        return shape_for(self.type, repeatable=self.is_repeatable)

    def to_document(self):
        return self.model_dump(by_alias=True)


class SectionStylePreset(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    section_type: str = Field(..., alias='sectionType')
    preset_name: str = Field(..., alias='presetName')
    styles: Dict[str, Any] = Field(default_factory=dict)


class CustomizationOptions(BaseModel):
    """Suggested values shown in the editor. Advisory only, never enforced."""

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    colors: List[str] = Field(default_factory=list)
    fonts: List[str] = Field(default_factory=list)
    layouts: List[str] = Field(default_factory=list)
    spacing: List[str] = Field(default_factory=list)
    animations: List[str] = Field(default_factory=list)
    section_styles: List[SectionStylePreset] = Field(default_factory=list, alias='sectionStyles')

    def to_document(self):
        return self.model_dump(by_alias=True)


def _error_text(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = '.'.join(str(p) for p in err['loc'])
        parts.append(f'{loc}: {err["msg"]}' if loc else err['msg'])
    return '; '.join(parts)


def parse_sections(raw) -> List[TemplateSection]:
    if not isinstance(raw, list) or not raw:
        raise ValidationFailed('Template sections must be a non-empty list')
    try:
        sections = [TemplateSection.model_validate(item) for item in raw]
    except ValidationError as exc:
        raise ValidationFailed(f'Invalid template section: {_error_text(exc)}')
    seen = set()
    duplicates = []
    for section in sections:
        if section.id in seen:
            duplicates.append(section.id)
        seen.add(section.id)
    if duplicates:
        raise ValidationFailed(
            f'Duplicate section ids: {", ".join(duplicates)}', invalid=duplicates
        )
    return sections


def parse_customization_options(raw) -> CustomizationOptions:
    try:
        return CustomizationOptions.model_validate(raw or {})
    except ValidationError as exc:
        raise ValidationFailed(f'Invalid customization options: {_error_text(exc)}')
