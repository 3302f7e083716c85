from models.resume import EducationEntry, ExperienceEntry, SectionMap
from services.section_parser import (
    classify_header,
    extract_contact_info,
    is_degenerate,
    parse_skills,
    segment,
)


def test_segment_detects_all_sections(sample_sections):
    assert sample_sections.summary.startswith("Experienced software engineer")
    assert len(sample_sections.experience) == 2
    assert len(sample_sections.education) == 1
    assert sample_sections.skills
    assert sample_sections.section_order == [
        "contact", "summary", "experience", "education", "skills",
    ]


def test_segment_experience_entries(sample_sections):
    first, second = sample_sections.experience
    assert first.title == "Senior Software Engineer | TechCorp | 2021 - 2024"
    assert first.description == ["Built REST APIs serving 1M requests/day", "Led team of 5 engineers"]
    assert second.title == "Software Engineer | StartupXYZ | 2019 - 2021"
    assert second.description == ["Developed React frontend components"]


def test_segment_skills_split_on_delimiters(sample_sections):
    assert sample_sections.skills == [
        "Python", "JavaScript", "React", "Docker", "AWS", "PostgreSQL", "Git",
    ]


def test_segment_bullets_become_description_and_details():
    text = (
        "EXPERIENCE\nSenior Developer\n• Built scalable apps\n• Led team of 5\n"
        "EDUCATION\nBS Computer Science"
    )
    sections = segment(text)
    assert sections.experience == [
        ExperienceEntry(title="Senior Developer", description=["Built scalable apps", "Led team of 5"])
    ]
    assert sections.education == [EducationEntry(degree="BS Computer Science", details=[])]


def test_segment_summary_joins_lines():
    text = "PROFESSIONAL SUMMARY\nExperienced software engineer\nwith 5 years of experience"
    sections = segment(text)
    assert sections.summary == "Experienced software engineer with 5 years of experience"
    assert sections.experience == []


def test_segment_inline_header_content():
    sections = segment("Skills: Python, Go\nKubernetes")
    assert sections.skills == ["Python", "Go", "Kubernetes"]


def test_segment_dash_bullets_and_orphan_bullets():
    sections = segment("Work Experience\n- orphan bullet\nDeveloper\n- shipped features")
    assert sections.experience == [ExperienceEntry(title="Developer", description=["shipped features"])]


def test_segment_skills_deduplicated():
    assert parse_skills(["Python, Go", "Go | Rust"]) == ["Python", "Go", "Rust"]


def test_segment_without_headers_yields_empty_sections():
    sections = segment("Just a paragraph of text with no structure")
    assert sections.summary == ""
    assert sections.experience == []
    assert sections.education == []
    assert sections.skills == []


def test_segment_empty_text():
    sections = segment("")
    assert sections == SectionMap()
    assert is_degenerate(sections)
    assert is_degenerate(segment("   \n\t\n"))


def test_segment_not_degenerate_with_content(sample_sections):
    assert not is_degenerate(sample_sections)


def test_segment_normalizes_crlf():
    sections = segment("SKILLS\r\nPython, Java\r\n")
    assert sections.skills == ["Python", "Java"]
    assert "\r" not in sections.raw_text


def test_segment_is_idempotent(sample_resume):
    assert segment(sample_resume) == segment(sample_resume)


def test_classify_header():
    assert classify_header("WORK EXPERIENCE") == ("experience", "")
    assert classify_header("Core Competencies:") == ("skills", "")
    assert classify_header("Academic Background") == ("education", "")
    assert classify_header("About Me") == ("summary", "")
    assert classify_header("Experienced engineer building APIs") is None
    assert classify_header("Senior Developer") is None


# --- Contact extraction ---

def test_extract_contact_info(sample_resume):
    contact = extract_contact_info(sample_resume)
    assert contact.email == "john.doe@email.com"
    assert contact.phone == "(555) 123-4567"
    assert contact.linkedin == "linkedin.com/in/johndoe"
    assert contact.github == "github.com/johndoe"
    assert contact.website == "johndoe.dev"
    assert contact.location == "San Francisco, CA"


def test_extract_contact_phone_styles():
    assert extract_contact_info("Phone: (555) 123-4567").phone == "(555) 123-4567"
    assert extract_contact_info("Call 555.123.4567").phone == "555.123.4567"
    assert extract_contact_info("Call 555-123-4567 today").phone == "555-123-4567"


def test_extract_contact_location():
    assert extract_contact_info("Based in San Francisco, CA").location == "San Francisco, CA"
    assert extract_contact_info("Lives in Berlin, Germany").location == "Berlin, Germany"


def test_extract_contact_website_skips_email_and_social():
    contact = extract_contact_info(
        "jane@example.com linkedin.com/in/jane github.com/jane https://www.janedoe.io/work"
    )
    assert contact.website == "https://www.janedoe.io/work"

    email_only = extract_contact_info("Contact me at john.doe@example.com for opportunities")
    assert email_only.email == "john.doe@example.com"
    assert email_only.website is None


def test_extract_contact_empty():
    contact = extract_contact_info("no contact details here")
    assert contact.is_empty


def test_segment_compound_headers():
    text = "WORK EXPERIENCE & PROJECTS\nEngineer\n- shipped x\nTECHNICAL SKILLS & TOOLS\nPython, Go"
    sections = segment(text)
    assert sections.experience == [ExperienceEntry(title="Engineer", description=["shipped x"])]
    assert sections.skills == ["Python", "Go"]
    assert sections.section_order == ["experience", "skills"]


def test_classify_header_prefix_forms():
    assert classify_header("Skills & Tools") == ("skills", "")
    assert classify_header("EDUCATION (2015 - 2019)") == ("education", "")
    assert classify_header("Experience / Projects") == ("experience", "")
    assert classify_header("TECHNICAL SKILLS AND TOOLS") == ("skills", "")
    assert classify_header("Experience building APIs at scale") is None
    assert classify_header("Summary of my career so far") is None
    assert classify_header("Skillset includes Python") is None


def test_skills_line_is_not_a_location():
    sections = segment("SKILLS\nPython, Java")
    assert sections.contact.location is None
    assert sections.contact.is_empty
    assert sections.section_order == ["skills"]

    contact = extract_contact_info("jane@example.com\nSkills\nJavaScript, Python")
    assert contact.email == "jane@example.com"
    assert contact.location is None


def test_location_alone_does_not_make_contact():
    sections = segment("Austin, TX\nSKILLS\nGo, Rust")
    assert sections.contact.location == "Austin, TX"
    assert not sections.contact.is_reachable
    assert sections.section_order == ["skills"]
    assert is_degenerate(segment("Austin, TX"))
