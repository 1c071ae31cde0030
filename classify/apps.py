"""
Classify Application Configuration

Django application configuration for the Classify learning platform.

Author: Classify Development Team
Version: 1.0.0
"""

from django.apps import AppConfig


class ClassifyConfig(AppConfig):
    """
    Configuration class for the Classify Django application.

    Attributes:
        default_auto_field: Default primary key field type for models
        name: Application name for Django registration
        verbose_name: Human-readable application name for admin interface
    """

    default_auto_field: str = "django.db.models.BigAutoField"
    name: str = "classify"
    verbose_name: str = "Classify Learning Platform"

    def ready(self) -> None:
        """
        Register signal handlers.

        Importing the modules is enough: the receivers are connected with the
        @receiver decorator at import time.
        """
        super().ready()
        from .users import models as _user_models  # noqa: F401
        from .authentication import token_codec as _token_codec  # noqa: F401
