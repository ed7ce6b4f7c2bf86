# errors.py - exception types shared across the package


class PredictiveNotesError(Exception):
    """Base class for every error raised by predictive_notes."""


class StorageError(PredictiveNotesError):
    """A key-value load or save was rejected by the store."""


class ConfigError(PredictiveNotesError):
    """Unknown config option or a value that cannot be coerced."""
