"""Custom exceptions for configuration management."""


class ConfigError(Exception):
    """Raised when configuration or pagination options cannot be processed."""
