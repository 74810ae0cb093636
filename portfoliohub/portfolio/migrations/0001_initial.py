from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone

import portfolio.models
import portfoliohub.fields


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('catalog', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Portfolio',
            fields=[
                ('_id', portfoliohub.fields.ObjectIdField(primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=200)),
                ('slug', models.CharField(max_length=200)),
                ('active_sections', models.JSONField(blank=True, default=list)),
                ('custom_data', models.JSONField(blank=True, default=dict)),
                ('custom_styling', models.JSONField(blank=True, default=portfolio.models.default_styling)),
                ('seo_settings', models.JSONField(blank=True, default=portfolio.models.default_seo_settings)),
                ('settings', models.JSONField(blank=True, default=portfolio.models.default_settings)),
                ('is_published', models.BooleanField(default=False)),
                ('is_draft', models.BooleanField(default=True)),
                ('published_at', models.DateTimeField(blank=True, null=True)),
                ('version', models.PositiveIntegerField(default=1)),
                ('views', models.PositiveIntegerField(default=0)),
                ('unique_visitors', models.PositiveIntegerField(default=0)),
                ('last_viewed', models.DateTimeField(blank=True, null=True)),
                ('shares', models.PositiveIntegerField(default=0)),
                ('contact_forms', models.PositiveIntegerField(default=0)),
                ('last_edited_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='portfolios', to=settings.AUTH_USER_MODEL)),
                ('template', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='portfolios', to='catalog.template')),
            ],
            options={
                'ordering': ['-updated_at'],
            },
        ),
        migrations.AddConstraint(
            model_name='portfolio',
            constraint=models.UniqueConstraint(fields=('owner', 'slug'), name='unique_portfolio_slug_per_owner'),
        ),
    ]
