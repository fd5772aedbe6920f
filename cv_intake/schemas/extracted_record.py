"""Structured record produced by the section extractor, and its error counterpart."""

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

EXTRACTION_ERROR_MESSAGE = "Error extracting CV data"


class ExtractedRecord(BaseModel):
    """Candidate fields and labelled résumé sections extracted from plain text."""

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = Field(default=None, description="First line before the first section label")
    personal_info: Optional[str] = Field(default=None, description="Remaining lines before the first label")
    email: Optional[str] = Field(default=None, description="First email address found in the text")
    phone: Optional[str] = Field(default=None, description="First phone-like number found in the text")
    sections: Dict[str, str] = Field(
        default_factory=dict,
        description="Section label -> accumulated text, in order of first appearance",
    )

    def get(self, field: str, default: Optional[str] = None) -> Optional[str]:
        """Look up a contact field or a section by its label, e.g. 'education'."""
        return self.as_flat_dict().get(field, default)

    def as_flat_dict(self) -> Dict[str, str]:
        """Flat view keyed by field/label name; unset fields are omitted."""
        flat: Dict[str, str] = {}
        for key in ("name", "personal_info", "email", "phone"):
            value = getattr(self, key)
            if value is not None:
                flat[key] = value
        flat.update(self.sections)
        return flat


class ExtractionError(BaseModel):
    """Returned in place of a record when extraction fails; never raised."""

    model_config = ConfigDict(frozen=True)

    error: str = Field(default=EXTRACTION_ERROR_MESSAGE, description="Error marker")
    details: str = Field(default="", description="Underlying failure message")

    def as_flat_dict(self) -> Dict[str, Any]:
        return self.model_dump()


ExtractionResult = Union[ExtractedRecord, ExtractionError]


def is_error(result: ExtractionResult) -> bool:
    """True when the extractor returned an error value instead of a record."""
    return isinstance(result, ExtractionError)
