from django.apps import AppConfig


class ExperiencesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "experiences"

    def ready(self) -> None:
        from experiences import signals  # noqa: F401
