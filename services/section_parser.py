"""Resume section segmentation and contact extraction."""

import logging
import re
from dataclasses import dataclass

from models.resume import (
    ContactInfo,
    EducationEntry,
    ExperienceEntry,
    SectionKind,
    SectionMap,
)
from services.text_utils import non_empty_lines, normalize_newlines

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SectionRule:
    """Header synonyms that open a section of the given kind."""
    kind: SectionKind
    patterns: tuple[str, ...]


# Checked in order; the first rule whose header matches wins.
SECTION_RULES: tuple[SectionRule, ...] = (
    SectionRule("summary", (
        r"summary",
        r"professional\s+summary",
        r"profile",
        r"objective",
        r"about\s+me",
        r"career\s+objective",
    )),
    SectionRule("experience", (
        r"experience",
        r"work\s+experience",
        r"employment\s+history",
        r"professional\s+experience",
        r"work\s+history",
    )),
    SectionRule("education", (
        r"education",
        r"academic\s+background",
        r"qualifications",
        r"academic\s+qualifications",
    )),
    SectionRule("skills", (
        r"skills",
        r"technical\s+skills",
        r"core\s+competencies",
        r"expertise",
        r"proficiencies",
    )),
)

# Synonym at the start of the line, ending on a word boundary so
# "Experienced engineer" is not a header. What may follow is decided by
# classify_header.
_COMPILED_RULES: tuple[tuple[SectionKind, re.Pattern], ...] = tuple(
    (
        rule.kind,
        re.compile(rf"^(?:{'|'.join(rule.patterns)})\b\s*(?P<tail>.*)$", re.IGNORECASE),
    )
    for rule in SECTION_RULES
)
_HEADER_JOINERS = ("&", "(", "/", "|", "+")

BULLET_PREFIXES = ("•", "-")
_BULLET_STRIP_RE = re.compile(r"^[•\-]\s*")
_SKILL_SPLIT_RE = re.compile(r"[,;|•\-]")

# Contact info patterns
EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
PHONE_RE = re.compile(r"(?:\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")
LINKEDIN_RE = re.compile(r"linkedin\.com/(?:in|pub)/[a-zA-Z0-9-]+", re.IGNORECASE)
GITHUB_RE = re.compile(r"github\.com/[a-zA-Z0-9-]+", re.IGNORECASE)
WEBSITE_RE = re.compile(
    r"(?:https?://)?(?:www\.)?[a-zA-Z0-9-]+(?:\.[a-zA-Z0-9-]+)*"
    r"\.(?:com|org|net|io|dev|me|co|ai|app|info|tech|site|xyz|us|uk|ca|in)\b"
    r"(?:/\S*)?",
    re.IGNORECASE,
)
_SOCIAL_DOMAINS = ("linkedin.com", "github.com")
LOCATION_RE = re.compile(r"[A-Z][a-z]+(?: [A-Z][a-z]+)*,[ \t]*(?:[A-Z]{2}|[A-Z][a-z]+)\b")


def _header_tail(tail: str) -> str | None:
    """Inline content carried by a header tail, or None if the line is prose.

    Accepted tails: nothing ("Skills"), ": content" ("Skills: Python"),
    a joined heading ("Skills & Tools", "Experience (2015-2024)") or an
    all-caps continuation ("TECHNICAL SKILLS AND TOOLS").
    """
    if not tail:
        return ""
    if tail.startswith(":"):
        return tail[1:].strip()
    if tail.startswith(_HEADER_JOINERS) or tail.isupper():
        return ""
    return None


def classify_header(line: str) -> tuple[SectionKind, str] | None:
    """Return (section kind, inline content) if ``line`` is a section header."""
    for kind, pattern in _COMPILED_RULES:
        match = pattern.match(line.strip())
        if match:
            inline = _header_tail(match.group("tail").strip())
            if inline is not None:
                return kind, inline
    return None


def _parse_entries(lines: list[str]) -> list[tuple[str, list[str]]]:
    """Group lines into (heading, bullets) pairs.

    A non-bullet line opens a new entry; bullet lines attach to the open
    entry with their marker stripped. Bullets before any heading are dropped.
    """
    entries: list[tuple[str, list[str]]] = []
    for line in lines:
        if not line.startswith(BULLET_PREFIXES):
            entries.append((line, []))
        elif entries:
            entries[-1][1].append(_BULLET_STRIP_RE.sub("", line, count=1))
    return entries


def parse_experience(lines: list[str]) -> list[ExperienceEntry]:
    return [
        ExperienceEntry(title=title, description=bullets)
        for title, bullets in _parse_entries(lines)
    ]


def parse_education(lines: list[str]) -> list[EducationEntry]:
    return [
        EducationEntry(degree=degree, details=bullets)
        for degree, bullets in _parse_entries(lines)
    ]


def parse_skills(lines: list[str]) -> list[str]:
    """Split skill lines on common delimiters, keeping first occurrences."""
    skills: list[str] = []
    seen: set[str] = set()
    for line in lines:
        for part in _SKILL_SPLIT_RE.split(line):
            skill = part.strip()
            if skill and skill not in seen:
                seen.add(skill)
                skills.append(skill)
    return skills


def _finalize(collected: dict, order: list[SectionKind], kind: SectionKind, lines: list[str]) -> None:
    # A repeated header replaces the earlier section; an empty one changes nothing.
    if not lines:
        return
    if kind == "summary":
        collected[kind] = " ".join(lines)
    elif kind == "experience":
        collected[kind] = parse_experience(lines)
    elif kind == "education":
        collected[kind] = parse_education(lines)
    else:
        collected[kind] = parse_skills(lines)
    if kind not in order:
        order.append(kind)


def _find_website(text: str, email: str | None) -> str | None:
    for match in WEBSITE_RE.finditer(text):
        candidate = match.group()
        lowered = candidate.lower()
        if any(domain in lowered for domain in _SOCIAL_DOMAINS):
            continue
        # Skip both halves of an email address
        start, end = match.span()
        if (start > 0 and text[start - 1] == "@") or (end < len(text) and text[end] == "@"):
            continue
        if email and candidate in email:
            continue
        return candidate
    return None


def _preamble(text: str) -> str:
    """Lines above the first section header (all of them if there is none)."""
    lines = text.split("\n")
    for index, line in enumerate(lines):
        if classify_header(line):
            return "\n".join(lines[:index])
    return text


def extract_contact_info(text: str) -> ContactInfo:
    """Extract contact fields from the resume text.

    Email, phone, profile links and website are searched over the whole
    text. The location is only taken from the lines above the first section
    header, where "Python, Java" style skill lists cannot be mistaken for a
    "City, Country" pair.
    """
    email_match = EMAIL_RE.search(text)
    phone_match = PHONE_RE.search(text)
    linkedin_match = LINKEDIN_RE.search(text)
    github_match = GITHUB_RE.search(text)
    location_match = LOCATION_RE.search(_preamble(text))

    email = email_match.group() if email_match else None

    return ContactInfo(
        email=email,
        phone=phone_match.group().strip() if phone_match else None,
        linkedin=linkedin_match.group() if linkedin_match else None,
        github=github_match.group() if github_match else None,
        website=_find_website(text, email),
        location=location_match.group() if location_match else None,
    )


def segment(raw_text: str) -> SectionMap:
    """Split resume text into a section map.

    Lines before the first recognised header only contribute to contact
    extraction. Missing headers leave the corresponding section empty.
    Degenerate input yields an empty map instead of an error.
    """
    text = normalize_newlines(raw_text or "")
    lines = non_empty_lines(text)
    if not lines:
        logger.warning("No text to segment, returning empty section map")
        return SectionMap(raw_text=text)

    collected: dict = {}
    order: list[SectionKind] = []
    current: SectionKind | None = None
    buffer: list[str] = []

    for line in lines:
        header = classify_header(line)
        if header:
            if current:
                _finalize(collected, order, current, buffer)
            current, inline = header
            buffer = [inline] if inline else []
        elif current:
            buffer.append(line)

    if current:
        _finalize(collected, order, current, buffer)

    contact = extract_contact_info(text)
    if contact.is_reachable:
        order.insert(0, "contact")

    section_map = SectionMap(
        contact=contact,
        summary=collected.get("summary", ""),
        experience=collected.get("experience", []),
        education=collected.get("education", []),
        skills=collected.get("skills", []),
        section_order=order,
        raw_text=text,
    )
    logger.debug(
        "Segmented resume: order=%s experience=%d education=%d skills=%d",
        order, len(section_map.experience), len(section_map.education), len(section_map.skills),
    )
    return section_map


def is_degenerate(section_map: SectionMap) -> bool:
    """True when segmentation found no section and no way to reach the candidate."""
    return not section_map.section_order
