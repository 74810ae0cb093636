"""
Read-only view of a user's profile, shaped for portfolio auto-fill.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .models import get_profile, default_social_links


@dataclass(frozen=True)
class ProfileSnapshot:
    username: str
    email: str = ''
    full_name: str = ''
    bio: str = ''
    phone: str = ''
    location: str = ''
    website: str = ''
    profile_picture: str = ''
    social_links: Dict[str, str] = field(default_factory=default_social_links)
    title: str = ''
    company: str = ''
    experience: Any = ''
    skills: List[str] = field(default_factory=list)
    education: List[Dict[str, Any]] = field(default_factory=list)
    certifications: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def display_name(self):
        return self.full_name or self.username


def profile_snapshot(user):
    profile = get_profile(user)
    info = profile.professional_info or {}
    return ProfileSnapshot(
        username=user.username,
        email=user.email or '',
        full_name=profile.full_name or user.get_full_name(),
        bio=profile.bio or '',
        phone=profile.phone or '',
        location=profile.location or '',
        website=profile.website or '',
        profile_picture=profile.profile_picture or '',
        social_links={**default_social_links(), **(profile.social_links or {})},
        title=info.get('title') or '',
        company=info.get('company') or '',
        experience=info.get('experience') or '',
        skills=list(info.get('skills') or []),
        education=list(info.get('education') or []),
        certifications=list(info.get('certifications') or []),
    )
