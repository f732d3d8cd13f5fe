import os


def get_settings_module() -> str:
    # APP_ENV picks the settings module, default is development
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "hygienist_visits.config.production"

    if env in {"test", "testing"}:
        return "hygienist_visits.config.testing"

    return "hygienist_visits.config.development"
