# app/errors.py


class TypeworksError(Exception):
    """Base class for errors raised by typeworks."""


class SettingsError(TypeworksError):
    """Engine settings could not be read or failed validation."""
