# portfolio/renderer.py
"""
Turn a portfolio into an ordered list of renderable sections.

Each active section id is resolved through one table built from the
template: section id -> (data key, component, template styling). The data
key is the section's canonical type, which is also the key its content
lives under in ``customData``. Ids the template no longer describes are
treated as a type of the same name.
"""
import copy
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from django.template.loader import render_to_string

from portfoliohub.errors import ValidationFailed
from .sections import SECTION_KINDS, TYPE_ALIASES, canonical_type, component_for, empty_content, shape_for

logger = logging.getLogger(__name__)

# Components with their own partial; the rest share the generic item list.
DEDICATED_PARTIALS = {'hero', 'about', 'contact', 'projects', 'skills', 'experience', 'education'}

# Template styling keys applied directly on the section element
INLINE_STYLES = (
    ('bgColor', 'background-color'),
    ('bgGradient', 'background-image'),
    ('textColor', 'color'),
    ('textAlign', 'text-align'),
)


class RenderMode(str, Enum):
    EDIT = 'edit'
    VIEW = 'view'

    @classmethod
    def parse(cls, value):
        try:
            return cls((value or cls.VIEW.value).lower())
        except ValueError:
            return cls.VIEW


@dataclass(frozen=True)
class SectionRoute:
    section_id: str
    data_key: str
    component: Optional[str]
    styling: Dict[str, Any] = field(default_factory=dict)
    repeatable: bool = False


def resolution_table(sections):
    return {
        section.id: SectionRoute(
            section_id=section.id,
            data_key=section.data_key,
            component=component_for(section.type),
            styling=dict(section.styling or {}),
            repeatable=section.is_repeatable,
        )
        for section in sections
    }


def resolve(section_id, table):
    route = table.get(section_id)
    if route is not None:
        return route
    data_key = canonical_type(section_id)
    return SectionRoute(section_id=section_id, data_key=data_key, component=component_for(data_key))


def effective_styling(custom_styling, section_id, template_styling, section_ids):
    """Global styling, then the template's section defaults, then the per-section override."""
    custom_styling = custom_styling or {}
    styling = {key: copy.deepcopy(value) for key, value in custom_styling.items() if key not in section_ids}
    styling.update(copy.deepcopy(template_styling or {}))
    override = custom_styling.get(section_id)
    if isinstance(override, dict):
        styling.update(copy.deepcopy(override))
    return styling


@dataclass
class RenderedSection:
    section_id: str
    data_key: str
    component: Optional[str]
    data: Any
    styling: Dict[str, Any]
    mode: RenderMode = RenderMode.VIEW

    @property
    def placeholder(self):
        return self.component is None

    @property
    def editable(self):
        return self.mode is RenderMode.EDIT

    @property
    def inline_style(self):
        css = [(prop, self.styling.get(key)) for key, prop in INLINE_STYLES]
        return '; '.join(f'{prop}: {value}' for prop, value in css if isinstance(value, str) and value)

    @property
    def partial(self):
        if self.placeholder:
            return 'portfolio/sections/placeholder.html'
        name = self.component if self.component in DEDICATED_PARTIALS else 'list'
        return f'portfolio/sections/{name}.html'

    def field_patch(self, name, value):
        """Customization patch setting one field of an object section."""
        return {'customData': {self.data_key: {name: value}}}

    def item_patch(self, index, name, value):
        """
        Customization patch setting one field of one list item. Lists replace
        wholesale on merge, so the patch carries the whole updated list.
        """
        if not isinstance(index, int) or index < 0:
            raise ValidationFailed(f'Item index must be a non-negative integer, got {index!r}')
        items = copy.deepcopy(self.data) if isinstance(self.data, list) else []
        while len(items) <= index:
            items.append({})
        item = items[index]
        # plain values (e.g. a bare skill name) become the item's "value" field
        items[index] = {**(item if isinstance(item, dict) else {'value': item}), name: value}
        return {'customData': {self.data_key: items}}

    def as_dict(self):
        data = {
            'sectionId': self.section_id,
            'dataKey': self.data_key,
            'component': self.component,
            'data': self.data,
            'styling': self.styling,
            'mode': self.mode.value,
        }
        if self.placeholder:
            data['placeholder'] = f'{self.section_id} section coming soon'
        return data


def section_order(active_sections, sections):
    # An empty selection shows every template section in template order.
    if active_sections:
        return list(active_sections)
    return [section.id for section in sections]


def render_sections(active_sections, custom_data, custom_styling, sections, mode=RenderMode.VIEW):
    mode = RenderMode.parse(mode) if not isinstance(mode, RenderMode) else mode
    table = resolution_table(sections)
    # overrides are keyed by section id, including ids the template has since dropped
    section_ids = set(table) | set(active_sections or []) | set(SECTION_KINDS) | set(TYPE_ALIASES)
    custom_data = custom_data or {}
    rendered = []
    for section_id in section_order(active_sections, sections):
        route = resolve(section_id, table)
        if route.component is None and mode is RenderMode.VIEW:
            logger.debug('No component for section %s, skipped', section_id)
            continue
        data = custom_data.get(route.data_key)
        if data is None:
            data = empty_content(shape_for(route.data_key, route.repeatable))
        rendered.append(RenderedSection(
            section_id=section_id,
            data_key=route.data_key,
            component=route.component,
            data=copy.deepcopy(data),
            styling=effective_styling(custom_styling, section_id, route.styling, section_ids),
            mode=mode,
        ))
    return rendered


def render(portfolio, template=None, mode=RenderMode.VIEW):
    template = template or portfolio.template
    return render_sections(
        portfolio.active_sections,
        portfolio.custom_data,
        portfolio.custom_styling,
        template.section_list(),
        mode,
    )


def render_html(portfolio, sections=None, template=None):
    """Read-only HTML page for a published portfolio."""
    if sections is None:
        sections = render(portfolio, template=template, mode=RenderMode.VIEW)
    styling = portfolio.custom_styling or {}
    context = {
        'portfolio': portfolio,
        'seo': portfolio.seo_settings or {},
        'colors': styling.get('colors') or {},
        'fonts': styling.get('fonts') or {},
        'sections': sections,
        'show_branding': (portfolio.settings or {}).get('showBranding', True),
    }
    return render_to_string('portfolio/page.html', context)
