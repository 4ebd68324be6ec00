from __future__ import annotations


class ChangedFilesError(RuntimeError):
    pass


class ConfigurationError(ChangedFilesError):
    pass


class ExecutionError(ChangedFilesError):
    pass


class ParseError(ChangedFilesError):
    pass


class RemoteStatusError(ChangedFilesError):
    pass


class UnsupportedStatusError(ChangedFilesError):
    pass


class FormatValidationError(ChangedFilesError):
    pass


class RemoteOrderingWarning(UserWarning):
    """Head commit is not strictly ahead of the base commit."""
