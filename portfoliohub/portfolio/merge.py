# portfolio/merge.py
"""
Merge rules for editor patches.

``customData`` is keyed by section type. Where the template (or the section
registry) declares the shape of a key, the existing value is wrapped in the
matching content type and the patch is merged through it: lists replace,
objects shallow-merge, scalars and null replace. Keys no section declares
fall back to inspecting the patch value.
"""
import copy

from portfoliohub.errors import ValidationFailed
from .sections import SECTION_KINDS, wrap_content


def shallow_merge(existing, patch):
    return {**(existing or {}), **(patch or {})}


def declared_shapes(sections):
    """Section type -> Shape for every type the template declares."""
    return {section.data_key: section.shape for section in sections}


def _merge_undeclared(current, value):
    if isinstance(value, dict):
        return {**(current if isinstance(current, dict) else {}), **value}
    return value


def merge_custom_data(existing, patch, shapes=None):
    shapes = shapes or {}
    merged = copy.deepcopy(existing or {})
    for key, value in patch.items():
        shape = shapes.get(key)
        if shape is None and key in SECTION_KINDS:
            shape = SECTION_KINDS[key].shape
        if shape is None:
            merged[key] = _merge_undeclared(merged.get(key), value)
        else:
            merged[key] = wrap_content(key, merged.get(key), shape).merge(value)
    return merged


def merge_custom_styling(existing, patch):
    merged = copy.deepcopy(existing or {})
    for key, value in patch.items():
        if isinstance(value, dict):
            current = merged.get(key)
            merged[key] = {**(current if isinstance(current, dict) else {}), **value}
        else:
            merged[key] = value
    return merged


def validate_active_sections(requested, section_ids):
    """Return ``requested`` as a list, or fail naming every id the template lacks."""
    if not isinstance(requested, list) or not all(isinstance(s, str) for s in requested):
        raise ValidationFailed('activeSections must be a list of section ids')
    known = set(section_ids)
    invalid = [s for s in requested if s not in known]
    if invalid:
        raise ValidationFailed(
            f'Invalid sections provided: {", ".join(invalid)}. '
            'These sections are not part of the selected template.',
            invalid=invalid,
        )
    duplicates = sorted({s for s in requested if requested.count(s) > 1})
    if duplicates:
        raise ValidationFailed(f'Sections listed more than once: {", ".join(duplicates)}', invalid=duplicates)
    return list(requested)
