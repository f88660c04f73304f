import os

_ENVIRONMENTS = {
    "dev": "config.development",
    "development": "config.development",
    "test": "config.testing",
    "testing": "config.testing",
    "prod": "config.production",
    "production": "config.production",
}


def get_settings_module() -> str:
    """Dotted path of the settings module for this process.

    ``SETTINGS_MODULE`` names one directly (e.g. a site-specific file);
    otherwise ``APP_ENV`` picks one of the bundled modules.
    """
    explicit = os.getenv("SETTINGS_MODULE", "").strip()
    if explicit:
        return explicit

    env = os.getenv("APP_ENV", "development").strip().lower()
    try:
        return _ENVIRONMENTS[env]
    except KeyError:
        raise ValueError(f"Unknown APP_ENV {env!r}; expected one of {sorted(set(_ENVIRONMENTS))}") from None
