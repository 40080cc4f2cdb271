from django.apps import AppConfig


class ArtarchiveConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'artarchive'
    verbose_name = 'Art archive'
