"""Structured view of a resume produced by the document segmenter."""

from typing import ClassVar, Literal

from pydantic import BaseModel

SectionKind = Literal["contact", "summary", "experience", "education", "skills"]


class ContactInfo(BaseModel):
    email: str | None = None
    phone: str | None = None
    linkedin: str | None = None
    github: str | None = None
    website: str | None = None
    location: str | None = None

    model_config = {"frozen": True}

    @property
    def is_empty(self) -> bool:
        return not any(self.model_dump().values())

    @property
    def is_reachable(self) -> bool:
        """True when there is a way to get in touch; a location alone is not one."""
        return any((self.email, self.phone, self.linkedin, self.github, self.website))


class ExperienceEntry(BaseModel):
    """A job heading line followed by its bullet lines."""
    title: str
    description: list[str] = []

    model_config = {"frozen": True}


class EducationEntry(BaseModel):
    """A degree heading line followed by its bullet lines."""
    degree: str
    details: list[str] = []

    model_config = {"frozen": True}


class SectionMap(BaseModel):
    """Section map for one document. Built once by the segmenter."""
    contact: ContactInfo = ContactInfo()
    summary: str = ""
    experience: list[ExperienceEntry] = []
    education: list[EducationEntry] = []
    skills: list[str] = []
    section_order: list[SectionKind] = []  # order of appearance in the document
    raw_text: str = ""

    model_config = {"frozen": True}

    # Fixed key order of the section fields, independent of the document
    SECTION_KEYS: ClassVar[tuple[SectionKind, ...]] = (
        "contact", "summary", "experience", "education", "skills",
    )
