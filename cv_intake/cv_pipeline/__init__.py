"""CV pipeline: text extraction (PDF/DOCX) and rule-based section extraction."""

from .section_extractor import LABEL_CATALOG, extract, match_label
from .text_extractor import extract_text_from_file, is_supported_file

__all__ = ["extract", "match_label", "LABEL_CATALOG", "extract_text_from_file", "is_supported_file"]
