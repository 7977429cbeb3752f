from __future__ import annotations


class ConfigurationError(RuntimeError):
    """An environment setting (locales, import attempts, log level, ...) is unusable."""
