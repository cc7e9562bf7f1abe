from django.apps import AppConfig


class LinksConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.links'
    label = 'links'
    verbose_name = 'Links'
