from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from portfoliohub.errors import ValidationFailed


class CustomizationPatch(BaseModel):
    """Editor payload for PUT /<id>/customize. Absent fields are left untouched."""

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    slug: Optional[str] = None
    seo_settings: Optional[Dict[str, Any]] = Field(None, alias='seoSettings')
    settings: Optional[Dict[str, Any]] = None
    active_sections: Optional[List[Any]] = Field(None, alias='activeSections')
    custom_data: Optional[Dict[str, Any]] = Field(None, alias='customData')
    custom_styling: Optional[Dict[str, Any]] = Field(None, alias='customStyling')

    @classmethod
    def parse(cls, data):
        try:
            return cls.model_validate(data or {})
        except ValidationError as exc:
            fields = sorted({str(err['loc'][0]) for err in exc.errors() if err['loc']})
            raise ValidationFailed(f'Invalid customization: {", ".join(fields)}', invalid=fields)
