"""Payload schema for the outbound CV notification API."""

from typing import List

from pydantic import BaseModel, Field


class PersonalInfo(BaseModel):
    """Candidate contact details taken from the extracted record."""

    name: str = Field(default="", description="Candidate name")
    email: str = Field(default="", description="Candidate email")
    phone: str = Field(default="", description="Candidate phone number")


class CVData(BaseModel):
    """Structured CV sections forwarded to the notification API."""

    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    education: List[str] = Field(default_factory=list, description="Education section, one block per entry")
    qualifications: List[str] = Field(default_factory=list, description="Qualifications, if extracted")
    projects: List[str] = Field(default_factory=list, description="Projects section, one block per entry")
    cv_public_link: str = Field(default="", description="Public Google Drive link to the original file")


class PayloadMetadata(BaseModel):
    """Processing metadata sent alongside the CV data."""

    applicant_name: str = Field(default="", description="Candidate name")
    email: str = Field(default="", description="Candidate email")
    status: str = Field(default="prod", description="Deployment status reported to the receiver")
    cv_processed: bool = Field(default=True, description="Always true once extraction has run")
    processed_timestamp: str = Field(..., description="ISO-8601 UTC timestamp of processing")


class CVPayload(BaseModel):
    """Full request body for the notification API."""

    cv_data: CVData
    metadata: PayloadMetadata
