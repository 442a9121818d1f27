import os

DEFAULT_ENV = "development"

# APP_ENV value -> settings module
_ENV_ALIASES = {
    "dev": "development",
    "development": "development",
    "local": "development",
    "test": "testing",
    "testing": "testing",
    "prod": "production",
    "production": "production",
}


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", DEFAULT_ENV).strip().lower()
    return f"config.{_ENV_ALIASES.get(env, DEFAULT_ENV)}"
