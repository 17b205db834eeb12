"""i18n-keysync: keep per-language translation files in sync with their source keys."""

__version__ = "0.1.0"
