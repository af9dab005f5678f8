"""Django app configuration for SmartStock."""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class SmartstockConfig(AppConfig):
    """Configuration for SmartStock app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "smartstock"
    verbose_name = _("Gestão de Armazém")
