"""Exceptions raised by the progress engine."""


class CogniTrainError(Exception):
    """Base class for every error the engine raises."""


class StorageError(CogniTrainError):
    """The data directory could not be written or cleaned up."""


class InvalidOutcomeError(CogniTrainError, ValueError):
    """A game outcome was rejected before it reached the ledger."""
