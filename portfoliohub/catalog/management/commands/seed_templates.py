import logging

from django.contrib.auth.models import User
from django.core.management.base import BaseCommand
from django.db import transaction

from catalog.models import Template
from catalog.schemas import parse_customization_options, parse_sections

logger = logging.getLogger(__name__)


def _section(key, fields, layout, styling, required=False, repeatable=False):
    return {
        'id': key,
        'type': key,
        'fields': fields,
        'layout': layout,
        'styling': styling,
        'isRequired': required,
        'isRepeatable': repeatable,
    }


STARTER_TEMPLATES = [
    {
        'name': 'Simple Developer',
        'slug': 'simple-developer',
        'category': 'developer',
        'is_premium': False,
        'price': 0,
        'sections': [
            _section('hero', ['name', 'title', 'description'], 'centered',
                     {'textAlign': 'center', 'bgColor': '#ffffff', 'textColor': '#333333'}, required=True),
            _section('about', ['description'], 'single-column',
                     {'bgColor': '#f8f9fa', 'textColor': '#333333'}),
            _section('projects', ['title', 'description', 'githubUrl'], 'simple-list',
                     {'bgColor': '#ffffff', 'textColor': '#333333'}, required=True, repeatable=True),
            _section('contact', ['email'], 'centered',
                     {'bgColor': '#f8f9fa', 'textColor': '#333333'}, required=True),
        ],
        'customization_options': {
            'colors': ['#ffffff', '#f8f9fa', '#333333'],
            'fonts': ['Arial', 'Helvetica'],
            'layouts': ['centered', 'single-column'],
        },
        'tags': ['developer', 'simple', 'basic', 'free'],
    },
    {
        'name': 'Basic Portfolio',
        'slug': 'basic-portfolio',
        'category': 'designer',
        'is_premium': False,
        'price': 0,
        'sections': [
            _section('hero', ['name', 'title'], 'simple-header',
                     {'textAlign': 'left', 'bgColor': '#ffffff', 'textColor': '#000000'}, required=True),
            _section('portfolio', ['title', 'image'], 'simple-grid',
                     {'columns': 2, 'bgColor': '#ffffff'}, required=True, repeatable=True),
            _section('contact', ['email', 'phone'], 'simple-contact',
                     {'bgColor': '#f5f5f5', 'textColor': '#000000'}, required=True),
        ],
        'customization_options': {
            'colors': ['#ffffff', '#f5f5f5', '#000000', '#666666'],
            'fonts': ['Arial', 'Times New Roman'],
            'layouts': ['simple-header', 'simple-grid'],
        },
        'tags': ['designer', 'basic', 'simple', 'free'],
    },
    {
        'name': 'Pro Developer Studio',
        'slug': 'pro-developer-studio',
        'category': 'developer',
        'is_premium': True,
        'price': 29,
        'sections': [
            _section('hero', ['name', 'title', 'description', 'profileImage', 'ctaText', 'socialLinks'],
                     'fullscreen-animated',
                     {'overlay': 'gradient', 'animation': 'typewriter',
                      'bgGradient': 'linear-gradient(135deg, #667eea 0%, #764ba2 100%)'}, required=True),
            _section('about', ['description', 'skills', 'experience', 'achievements', 'personalImage'],
                     'interactive-timeline', {'animation': 'slideInLeft', 'skillBars': 'animated'}),
            _section('projects', ['title', 'description', 'image', 'technologies', 'liveUrl', 'githubUrl'],
                     'interactive-showcase', {'hover': 'advanced-3d', 'lightbox': True},
                     required=True, repeatable=True),
            _section('skills', ['skillName', 'proficiency', 'category', 'icon'], 'interactive-bars',
                     {'chartType': 'radar', 'animation': 'progressive'}, repeatable=True),
            _section('experience', ['company', 'position', 'duration', 'description', 'logo'],
                     'vertical-timeline', {'timelineStyle': 'modern', 'animation': 'fadeInUp'}, repeatable=True),
            _section('testimonials', ['name', 'role', 'company', 'testimonial', 'avatar', 'rating'],
                     'carousel-3d', {'autoplay': True, 'navigation': 'arrows'}, repeatable=True),
            _section('blog', ['title', 'excerpt', 'image', 'publishDate', 'url'], 'masonry-cards',
                     {'columns': 3, 'lazyLoad': True}, repeatable=True),
            _section('services', ['title', 'description', 'icon', 'price', 'features'], 'pricing-cards',
                     {'cardStyle': 'glassmorphism', 'hover': 'scale-glow'}, repeatable=True),
            _section('contact', ['email', 'phone', 'location', 'socialLinks', 'contactForm'], 'split-with-map',
                     {'bgColor': '#1a1a1a', 'textColor': '#ffffff', 'formStyle': 'modern'}, required=True),
        ],
        'customization_options': {
            'colors': ['#667eea', '#764ba2', '#f093fb', '#f5576c', '#1a1a1a', '#ffffff'],
            'fonts': ['Inter', 'Poppins', 'Roboto', 'Montserrat', 'JetBrains Mono'],
            'layouts': ['fullscreen', 'split-screen', 'centered', 'grid', 'timeline', 'cards'],
        },
        'tags': ['developer', 'premium', 'advanced', 'interactive', 'animated', 'modern'],
    },
    {
        'name': 'Luxury Creative Studio',
        'slug': 'luxury-creative-studio',
        'category': 'designer',
        'is_premium': True,
        'price': 39,
        'sections': [
            _section('hero', ['name', 'title', 'tagline', 'heroImage', 'logo'], 'parallax-fullscreen',
                     {'parallax': True, 'overlay': 'gradient-animated'}, required=True),
            _section('about', ['description', 'philosophy', 'awards', 'experience', 'photo'],
                     'storytelling-scroll', {'typography': 'large-artistic'}, required=True),
            _section('portfolio', ['title', 'category', 'image', 'description', 'client', 'year'],
                     'fullscreen-gallery', {'zoom': 'advanced-lightbox', 'transition': 'liquid'},
                     required=True, repeatable=True),
            _section('process', ['step', 'title', 'description', 'icon', 'duration'], 'interactive-flow',
                     {'animation': 'progressive-draw'}, repeatable=True),
            _section('clients', ['name', 'logo', 'testimonial', 'industry'], 'logo-showcase-3d',
                     {'logoFilter': 'grayscale-hover'}, repeatable=True),
            _section('awards', ['title', 'organization', 'year', 'image', 'description'], 'trophy-display',
                     {'displayStyle': '3d-shelf'}, repeatable=True),
            _section('services', ['title', 'description', 'icon', 'price', 'duration'], 'service-cards-luxury',
                     {'cardStyle': 'glassmorphism-gold'}, repeatable=True),
            _section('contact', ['email', 'phone', 'socialLinks', 'contactForm', 'location'], 'elegant-split',
                     {'bgColor': '#000000', 'formStyle': 'minimal-luxury'}, required=True),
        ],
        'customization_options': {
            'colors': ['#000000', '#ffffff', '#C9A96E', '#F4E4BC', '#2C3E50', '#8E44AD'],
            'fonts': ['Playfair Display', 'Cormorant Garamond', 'Montserrat', 'Raleway', 'Oswald'],
            'layouts': ['fullscreen-immersive', 'split-diagonal', 'asymmetric-grid', 'magazine-style'],
        },
        'tags': ['designer', 'premium', 'luxury', 'animated', 'creative'],
    },
]


class Command(BaseCommand):
    help = 'Create or refresh the starter template catalog'

    def add_arguments(self, parser):
        parser.add_argument('--admin', default='admin', help='Username recorded as the templates\' author')

    def handle(self, *args, **options):
        admin, created = User.objects.get_or_create(
            username=options['admin'],
            defaults={'email': 'admin@portfoliohub.com', 'is_staff': True, 'is_superuser': True},
        )
        if created:
            admin.set_unusable_password()
            admin.save()
            self.stdout.write(f'Created admin user {admin.username} (set a password with changepassword)')

        with transaction.atomic():
            for entry in STARTER_TEMPLATES:
                values = dict(entry)
                values['sections'] = [s.to_document() for s in parse_sections(values['sections'])]
                values['customization_options'] = parse_customization_options(
                    values['customization_options']
                ).to_document()
                template, created = Template.objects.update_or_create(
                    slug=values.pop('slug'), defaults={**values, 'created_by': admin}
                )
                logger.info('%s template %s', 'Created' if created else 'Updated', template.slug)
                self.stdout.write(f"{'Created' if created else 'Updated'} {template.name}")

        self.stdout.write(self.style.SUCCESS(f'Seeded {len(STARTER_TEMPLATES)} templates'))
