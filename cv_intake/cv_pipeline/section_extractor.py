"""
Rule-based résumé section extractor.

Splits plain CV text into a personal-info header (everything before the first
known section label) and labelled sections. A line opens a section when its
lowercased form starts with a catalog label; the first catalog entry that
matches wins, so catalog order matters for labels sharing a prefix.
"""

import re
from typing import Dict, List, Optional, Sequence

from cv_intake.schemas.extracted_record import ExtractedRecord, ExtractionError, ExtractionResult
from cv_intake.utils.logger import get_logger

logger = get_logger(__name__)

# Lowercase section labels, checked in this order. "techinal skills" is a
# misspelling seen in real CVs and is matched on purpose.
LABEL_CATALOG: tuple = (
    "summary",
    "projects",
    "techinal skills",
    "technical skills",
    "experience",
    "soft skills",
    "education",
    "achievements",
    "participation",
    "references",
)

EMAIL_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b", re.ASCII)
# Loose on purpose: may also catch a year or postcode that precedes the phone.
PHONE_PATTERN = re.compile(r"\+?[0-9][0-9\s\-]+")
_LABEL_SEPARATOR = re.compile(r"^[:\-\s]+")


def match_label(line: str, labels: Sequence[str] = LABEL_CATALOG) -> Optional[str]:
    """Return the first label that prefixes the lowercased line, else None."""
    lowered = line.lower()
    for label in labels:
        if lowered.startswith(label):
            return label
    return None


def _split_lines(text: str) -> List[str]:
    return [ln.strip() for ln in text.split("\n") if ln.strip()]


def _first_match(pattern: re.Pattern, text: str) -> Optional[str]:
    m = pattern.search(text)
    return m.group(0).strip() if m else None


def _collect_sections(lines: List[str], labels: Sequence[str]) -> Dict[str, str]:
    """Scan lines from the first label on; a repeated label restarts its section."""
    sections: Dict[str, str] = {}
    current: Optional[str] = None
    for line in lines:
        label = match_label(line, labels)
        if label:
            current = label
            sections[label] = _LABEL_SEPARATOR.sub("", line[len(label):])
        elif current:
            sections[current] += "\n" + line
    return {label: content.strip() for label, content in sections.items()}


def _extract(text: str, labels: Sequence[str]) -> ExtractedRecord:
    lines = _split_lines(text)
    first_label_index = next(
        (i for i, ln in enumerate(lines) if match_label(ln, labels)),
        None,
    )

    name: Optional[str] = None
    personal_info: Optional[str] = None
    sections: Dict[str, str] = {}
    if first_label_index is not None:
        header = lines[:first_label_index]
        if header:
            name = header[0]
        if len(header) > 1:
            personal_info = "\n".join(header[1:]).strip()
        sections = _collect_sections(lines[first_label_index:], labels)

    return ExtractedRecord(
        name=name,
        personal_info=personal_info,
        email=_first_match(EMAIL_PATTERN, text),
        phone=_first_match(PHONE_PATTERN, text),
        sections=sections,
    )


def extract(text: str, labels: Sequence[str] = LABEL_CATALOG) -> ExtractionResult:
    """
    Extract name, contact details and labelled sections from CV text.
    Never raises: any failure (including non-string input) comes back as an
    ExtractionError carrying the underlying message.
    """
    try:
        return _extract(text, labels)
    except Exception as e:
        logger.exception("Error extracting CV data: %s", e)
        return ExtractionError(details=str(e))
