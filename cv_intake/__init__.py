"""CV intake pipeline: résumé upload, section extraction and delivery to Drive, Sheets and email."""

__version__ = "0.1.0"
