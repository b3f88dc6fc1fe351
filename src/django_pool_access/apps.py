from django.apps import AppConfig


class DjangoPoolAccessConfig(AppConfig):
    name = "django_pool_access"
    verbose_name = "Pool Access"
    default_auto_field = "django.db.models.BigAutoField"
