"""Exceptions raised by the CV pipeline collaborators (configuration, Drive, Sheets)."""


class CVPipelineError(Exception):
    """Base error for the CV intake pipeline."""


class ConfigurationError(CVPipelineError):
    """A required setting (folder id, spreadsheet id, key file) is missing."""


class StorageError(CVPipelineError):
    """Uploading the original file to Google Drive failed."""


class SheetsError(CVPipelineError):
    """Appending the summary row to Google Sheets failed."""
