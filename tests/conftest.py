"""Shared test fixtures."""

import pytest

from services.section_parser import segment

SAMPLE_RESUME = """John Doe
john.doe@email.com | (555) 123-4567 | San Francisco, CA
linkedin.com/in/johndoe | github.com/johndoe | johndoe.dev

Summary
Experienced software engineer with 5+ years building web applications.

Experience
Senior Software Engineer | TechCorp | 2021 - 2024
• Built REST APIs serving 1M requests/day
• Led team of 5 engineers
Software Engineer | StartupXYZ | 2019 - 2021
• Developed React frontend components

Education
B.S. Computer Science | State University | 2019

Skills
Python, JavaScript, React, Docker
AWS; PostgreSQL | Git
"""

FULL_RESUME = """John Doe
john.doe@email.com | (555) 123-4567 | New York, NY

PROFESSIONAL SUMMARY
Experienced software engineer with 5+ years developing web applications.

WORK EXPERIENCE
Senior Developer - Tech Company
January 2020 - Present
• Developed and implemented new features using React and Node.js
• Improved application performance by 30%
• Led team of 5 developers on major project
• Managed $500K budget for infrastructure improvements

Software Engineer - Another Company
June 2018 - December 2019
• Created RESTful APIs using Python and Django
• Increased code coverage to 85% through comprehensive testing
• Collaborated with cross-functional teams

EDUCATION
Bachelor of Science in Computer Science
University of Technology, 2018

SKILLS
JavaScript, Python, React, Node.js, AWS, Docker, Git, Agile, SQL"""


@pytest.fixture
def sample_resume() -> str:
    return SAMPLE_RESUME


@pytest.fixture
def full_resume() -> str:
    return FULL_RESUME


@pytest.fixture
def sample_sections():
    return segment(SAMPLE_RESUME)
