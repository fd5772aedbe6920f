"""Extract raw text from uploaded CV files (PDF, DOCX). In-memory only."""

import re
import unicodedata
from io import BytesIO
from typing import List, Optional

from cv_intake.utils.logger import get_logger

logger = get_logger(__name__)

SUPPORTED_EXTENSIONS = (".pdf", ".docx")


def _normalize_unicode(text: str) -> str:
    """Normalize unicode (NFC) and replace problematic chars."""
    if not text:
        return ""
    return unicodedata.normalize("NFC", text).replace("\u00a0", " ")


def _clean_cv_text(text: str) -> str:
    """
    Collapse runs of spaces/tabs and blank lines, keeping one line per
    line of the document; the section extractor works line by line.
    """
    if not text or not text.strip():
        return ""
    t = _normalize_unicode(text)
    t = t.replace("\r\n", "\n").replace("\r", "\n")
    t = re.sub(r"[ \t]+", " ", t)
    t = re.sub(r" *\n *", "\n", t)
    t = re.sub(r"\n{3,}", "\n\n", t)
    return t.strip()


def _extract_pdf(bytes_io: BytesIO) -> Optional[str]:
    """Extract text from PDF using pdfplumber."""
    try:
        import pdfplumber
    except ImportError:
        logger.warning("pdfplumber not installed; install with: pip install pdfplumber")
        return None
    try:
        with pdfplumber.open(bytes_io) as pdf:
            parts = []
            for page in pdf.pages:
                ptext = page.extract_text()
                if ptext:
                    parts.append(ptext)
            return "\n\n".join(parts) if parts else None
    except Exception as e:
        logger.exception("PDF extraction failed: %s", e)
        return None


def _extract_docx(bytes_io: BytesIO) -> Optional[str]:
    """Extract text from DOCX using python-docx: body paragraphs, then table cells."""
    try:
        from docx import Document
    except ImportError:
        logger.warning("python-docx not installed; install with: pip install python-docx")
        return None
    try:
        doc = Document(bytes_io)
        parts: List[str] = [p.text for p in doc.paragraphs if p.text.strip()]
        for table in doc.tables:
            for row in table.rows:
                for cell in row.cells:
                    parts.extend(p.text for p in cell.paragraphs if p.text.strip())
        return "\n".join(parts) if parts else None
    except Exception as e:
        logger.exception("DOCX extraction failed: %s", e)
        return None


def is_supported_file(filename: str) -> bool:
    """True for .pdf and .docx file names (case-insensitive)."""
    return (filename or "").lower().strip().endswith(SUPPORTED_EXTENSIONS)


def extract_text_from_file(file_bytes: bytes, filename: str) -> Optional[str]:
    """
    Extract and clean text from an uploaded CV file (PDF or DOCX).
    File is read from bytes in memory; no disk write.
    Returns cleaned text or None if unsupported type or extraction fails.
    """
    if not is_supported_file(filename):
        logger.warning("Unsupported file type: %s", filename)
        return None

    bio = BytesIO(file_bytes)
    raw: Optional[str] = None
    if filename.lower().strip().endswith(".pdf"):
        raw = _extract_pdf(bio)
    else:
        raw = _extract_docx(bio)

    if not raw or not raw.strip():
        return None
    return _clean_cv_text(raw)
