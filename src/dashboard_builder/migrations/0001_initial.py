# Generated manually for the Dashboard model

import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

import dashboard_builder.components


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Dashboard',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True, default='')),
                ('is_public', models.BooleanField(default=False)),
                ('layout', models.JSONField(default=dashboard_builder.components.empty_layout)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='dashboards', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-updated_at'],
                'indexes': [
                    models.Index(fields=['created_by', '-updated_at'], name='dashboard_owner_updated_idx'),
                    models.Index(fields=['is_public', '-updated_at'], name='dashboard_public_updated_idx'),
                ],
            },
        ),
    ]
