# portfolio/autofill.py
"""
Initial portfolio content built from the owner's profile.

``generate`` walks the template's sections and produces the starting
``customData`` map, keyed by section type. It never fails and never writes:
missing profile values fall back to placeholders or empty values.
"""
from .sections import empty_content

DEFAULT_PROFICIENCY = 'intermediate'


def _hero(profile):
    name = profile.display_name
    return {
        'name': name,
        'title': profile.title or 'Professional',
        'description': profile.bio or f"Welcome to my portfolio. I'm {name}.",
        'profileImage': profile.profile_picture or '',
        'email': profile.email,
        'location': profile.location or '',
        'socialLinks': dict(profile.social_links or {}),
    }


def _about(profile):
    return {
        'description': profile.bio or '',
        'skills': list(profile.skills),
        'experience': profile.experience or '',
        'education': list(profile.education),
        'phone': profile.phone or '',
        'location': profile.location or '',
        'website': profile.website or '',
    }


def _contact(profile):
    return {
        'email': profile.email,
        'phone': profile.phone or '',
        'location': profile.location or '',
        'socialLinks': dict(profile.social_links or {}),
        'website': profile.website or '',
    }


def _skills(profile):
    return [{'skillName': skill, 'proficiency': DEFAULT_PROFICIENCY} for skill in profile.skills]


def _experience(profile):
    # free-text experience ("5 years") only belongs in the about section
    return list(profile.experience) if isinstance(profile.experience, list) else []


FILLERS = {
    'hero': _hero,
    'about': _about,
    'contact': _contact,
    'projects': lambda profile: [],
    'skills': _skills,
    'experience': _experience,
    'education': lambda profile: list(profile.education),
    'certifications': lambda profile: list(profile.certifications),
}


def generate(profile, sections):
    """
    Build ``customData`` for ``sections`` (parsed template sections) from a
    ``ProfileSnapshot``. Types without a profile analog start empty in the
    shape their section declares.
    """
    data = {}
    for section in sections:
        filler = FILLERS.get(section.data_key)
        if filler is not None:
            data[section.data_key] = filler(profile)
        elif section.data_key not in data:
            data[section.data_key] = empty_content(section.shape)
    return data
