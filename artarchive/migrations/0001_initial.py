# Generated migration for the archive schema and AI translation cache

import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Artwork',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=255)),
                ('year', models.IntegerField(blank=True, null=True)),
                ('medium', models.CharField(blank=True, max_length=255, null=True)),
                ('series', models.CharField(blank=True, max_length=255, null=True)),
                ('dimensions', models.CharField(blank=True, max_length=100, null=True)),
                ('image_url', models.URLField(max_length=500)),
                ('description', models.TextField(blank=True, null=True)),
                ('short_description', models.TextField(blank=True, null=True)),
                ('seo_title', models.CharField(blank=True, max_length=255, null=True)),
                ('alt_text', models.CharField(blank=True, max_length=255, null=True)),
                ('ai_generated', models.BooleanField(default=False)),
                ('ai_confidence_score', models.FloatField(blank=True, null=True)),
                ('ai_generated_at', models.DateTimeField(blank=True, null=True)),
                ('ai_prompt_version', models.CharField(blank=True, max_length=20, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
        ),
        migrations.CreateModel(
            name='TranslationCache',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('source_table', models.CharField(max_length=50)),
                ('source_id', models.CharField(help_text='Record id, or the fixed AI placeholder id for unattached content', max_length=36)),
                ('source_field', models.CharField(max_length=100)),
                ('source_hash', models.CharField(max_length=32)),
                ('target_language', models.CharField(max_length=5)),
                ('translated_content', models.TextField()),
                ('translation_service', models.CharField(default='deepl', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'constraints': [models.UniqueConstraint(fields=('source_table', 'source_id', 'source_field', 'target_language'), name='uniq_translation_cache_source')],
                'indexes': [models.Index(fields=['source_hash', 'target_language'], name='trans_cache_hash_lang_idx')],
            },
        ),
        migrations.CreateModel(
            name='ArtworkTag',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('tag', models.CharField(max_length=100)),
                ('ai_suggested', models.BooleanField(default=False)),
                ('artwork', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='tags', to='artarchive.artwork')),
            ],
            options={
                'indexes': [models.Index(fields=['artwork', 'ai_suggested'], name='artwork_tag_ai_idx')],
            },
        ),
        migrations.CreateModel(
            name='AIGenerationLog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('generation_type', models.CharField(choices=[('single', 'Single'), ('regenerate', 'Regenerate')], default='single', max_length=20)),
                ('prompt_version', models.CharField(max_length=20)),
                ('tokens_used', models.IntegerField(blank=True, null=True)),
                ('cost_usd', models.FloatField(blank=True, null=True)),
                ('processing_time_ms', models.IntegerField(blank=True, null=True)),
                ('success', models.BooleanField(default=False)),
                ('generated_description', models.TextField(blank=True, default='')),
                ('confidence_score', models.FloatField(blank=True, null=True)),
                ('error_message', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('artwork', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='generation_logs', to='artarchive.artwork')),
            ],
        ),
    ]
