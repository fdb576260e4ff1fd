import os


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "arena_booking.config.production"

    if env in {"test", "testing"}:
        return "arena_booking.config.testing"

    return "arena_booking.config.development"
