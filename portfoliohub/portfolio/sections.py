# portfolio/sections.py
"""
Section kinds and the content they carry.

Every section type a template can declare maps to a ``SectionKind``: the
shape of its content in ``customData`` (a single object for hero/about/
contact, a list of items for repeatable sections) and whether a renderer
component exists for it. Content is wrapped in ``ObjectContent`` or
``ListContent`` so merge code dispatches on the declared shape instead of
guessing from the incoming value.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from portfoliohub.errors import ValidationFailed


class Shape(str, Enum):
    OBJECT = 'object'
    LIST = 'list'


@dataclass(frozen=True)
class SectionKind:
    name: str
    shape: Shape
    has_component: bool = True


SECTION_KINDS: Dict[str, SectionKind] = {
    kind.name: kind for kind in (
        SectionKind('hero', Shape.OBJECT),
        SectionKind('about', Shape.OBJECT),
        SectionKind('contact', Shape.OBJECT),
        SectionKind('projects', Shape.LIST),
        SectionKind('skills', Shape.LIST),
        SectionKind('experience', Shape.LIST),
        SectionKind('education', Shape.LIST),
        SectionKind('testimonials', Shape.LIST),
        SectionKind('services', Shape.LIST),
        SectionKind('blog', Shape.LIST),
        SectionKind('awards', Shape.LIST),
        SectionKind('process', Shape.LIST),
        SectionKind('clients', Shape.LIST),
        # filled from the profile but has no renderer component yet
        SectionKind('certifications', Shape.LIST, has_component=False),
    )
}

COMPONENT_KINDS = tuple(name for name, kind in SECTION_KINDS.items() if kind.has_component)

# Older templates and portfolios call the projects section "portfolio".
TYPE_ALIASES = {'portfolio': 'projects'}


def canonical_type(section_type: str) -> str:
    return TYPE_ALIASES.get(section_type, section_type)


def shape_for(section_type: str, repeatable: bool = False) -> Shape:
    kind = SECTION_KINDS.get(canonical_type(section_type))
    if kind is not None:
        return kind.shape
    return Shape.LIST if repeatable else Shape.OBJECT


def component_for(section_type: str) -> Optional[str]:
    kind = SECTION_KINDS.get(canonical_type(section_type))
    if kind is not None and kind.has_component:
        return kind.name
    return None


@dataclass
class ObjectContent:
    key: str
    value: Dict[str, Any] = field(default_factory=dict)
    shape = Shape.OBJECT

    def merge(self, patch):
        if isinstance(patch, list):
            raise ValidationFailed(
                f'Section "{self.key}" holds a single object, got a list', invalid=[self.key]
            )
        if not isinstance(patch, dict):
            return patch
        return {**self.value, **patch}

    @property
    def raw(self):
        return self.value


@dataclass
class ListContent:
    key: str
    items: List[Any] = field(default_factory=list)
    shape = Shape.LIST

    def merge(self, patch):
        # Lists are replaced wholesale, never merged element by element
        if isinstance(patch, dict):
            raise ValidationFailed(
                f'Section "{self.key}" holds a list of items, got an object', invalid=[self.key]
            )
        return patch

    @property
    def raw(self):
        return self.items


def wrap_content(key: str, raw: Any, shape: Shape):
    if shape is Shape.LIST:
        return ListContent(key, list(raw) if isinstance(raw, list) else [])
    return ObjectContent(key, dict(raw) if isinstance(raw, dict) else {})


def empty_content(shape: Shape):
    return [] if shape is Shape.LIST else {}
