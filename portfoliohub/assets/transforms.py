"""Cloudinary transformation presets, keyed by the section receiving the image."""

SECTION_TRANSFORMATIONS = {
    'hero': 'w_1920,h_1080,c_fill,q_auto:good',
    'about': 'w_500,h_500,c_fill,q_auto:good',
    'projects': 'w_600,h_400,c_fill,q_auto:good',
    'testimonials': 'w_100,h_100,c_fill,g_face,r_max,q_auto:eco',
    'services': 'w_200,h_200,c_pad,q_auto:eco',
    'blog': 'w_800,h_450,c_fill,q_auto:good',
    'awards': 'w_200,h_200,c_limit,q_auto:eco',
    'clients': 'w_200,h_150,c_limit,q_auto:eco',
    'profile-avatar': 'w_150,h_150,c_fill,q_auto:eco',
    'template-thumbnail': 'w_400,h_225,c_fill,q_auto:best',
    'template-preview': 'w_800,h_450,c_limit,q_auto:good',
}

DEFAULT_TRANSFORMATION = 'w_1200,c_limit,q_auto'


def transformation_for(section):
    return SECTION_TRANSFORMATIONS.get(section, DEFAULT_TRANSFORMATION)
