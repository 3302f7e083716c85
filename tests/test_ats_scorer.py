import pytest

from models.resume import SectionMap
from services.ats_scorer import (
    date_format,
    find_dates,
    score,
    score_formatting,
    score_keywords,
    score_readability,
    score_structure,
)
from services.section_parser import segment


def _raw(text: str) -> SectionMap:
    return SectionMap(raw_text=text)


# --- Aggregate ---

def test_score_full_resume_within_bounds(full_resume):
    result = score(segment(full_resume))
    assert 0 < result.total_score <= 100
    assert 0 <= result.structure_score <= 25
    assert 0 <= result.keyword_score <= 30
    assert 0 <= result.readability_score <= 25
    assert 0 <= result.formatting_score <= 20


@pytest.mark.parametrize("text", [
    "",
    "John Doe. I worked at a company.",
    "EXPERIENCE\nSenior Developer\n• Built scalable apps\n• Led team of 5",
    "achieved improved developed implemented increased led managed created " * 40,
    "★ ★ ★ ★\n2019 - 2020\n03/2021\nMarch 2022",
])
def test_total_is_sum_of_categories(text):
    result = score(segment(text))
    assert result.total_score == (
        result.structure_score
        + result.keyword_score
        + result.readability_score
        + result.formatting_score
    )
    assert 0 <= result.total_score <= 100


def test_score_minimal_resume_is_low():
    result = score(segment("John Doe. I worked at a company."))
    assert result.total_score < 40


def test_score_full_resume_beats_minimal(full_resume):
    assert score(segment(full_resume)).total_score > score(segment("John Doe.")).total_score


# --- Structure ---

def test_structure_all_sections(sample_sections):
    points, details = score_structure(sample_sections)
    assert details.has_contact
    assert details.has_summary
    assert details.has_experience
    assert details.has_education
    assert details.has_skills
    assert details.proper_headings
    assert details.logical_order
    assert points == 25


def test_structure_missing_sections():
    points, details = score_structure(segment("Just some text"))
    assert not details.has_contact
    assert not details.has_experience
    # only the logical-order points
    assert points == 2


def test_structure_logical_order_uses_section_keys():
    in_order = segment("EXPERIENCE\nDev\n- built\nEDUCATION\nBS")
    reversed_order = segment("Skills\nPython\nEducation\nBS Physics\nExperience\nEngineer")
    assert in_order.section_order == ["experience", "education"]
    assert reversed_order.section_order == ["skills", "education", "experience"]

    points, details = score_structure(in_order)
    assert details.logical_order
    # experience + education + headings + order
    assert points == 6 + 4 + 2 + 2

    points, details = score_structure(reversed_order)
    assert details.logical_order
    assert points == 6 + 4 + 4 + 2 + 2


def test_structure_skills_only_resume_has_no_contact():
    points, details = score_structure(segment("SKILLS\nPython, Java"))
    assert not details.has_contact
    assert details.has_skills
    # skills + headings + order
    assert points == 4 + 2 + 2


def test_structure_location_alone_is_not_contact():
    points, details = score_structure(segment("Austin, TX\nSKILLS\nGo, Rust"))
    assert not details.has_contact
    assert points == 4 + 2 + 2


# --- Keywords ---

def test_keywords_action_verbs():
    points, details = score_keywords(
        _raw("achieved improved developed implemented increased led managed created")
    )
    assert details.action_verb_count == 8
    # 8/10 * 8 = 6.4, density far above the acceptable band
    assert points == 6


def test_keywords_quantifiable_achievements():
    _, details = score_keywords(
        _raw("increased sales by 25% and saved $50000 and managed 10+ team members")
    )
    assert details.quantifiable_achievements == 3


def test_keywords_optimal_density():
    text = "python java sql " + "filler " * 97
    points, details = score_keywords(_raw(text.strip()))
    assert details.technical_skill_count == 3
    assert details.keyword_density == pytest.approx(3.0)
    # 3/8 * 7 = 2.625, +2 for optimal density
    assert points == 5


def test_keywords_capped():
    text = " ".join([
        "achieved improved trained managed created designed developed implemented",
        "increased decreased reduced led coordinated executed launched",
        "project management agile scrum leadership strategy analysis collaboration",
        "communication problem solving innovation",
        "python java sql aws azure docker kubernetes react angular",
        "50% 20% $100 5+ increased by 10",
    ])
    points, _ = score_keywords(_raw(text))
    assert points <= 30


def test_keywords_empty_text():
    points, details = score_keywords(_raw(""))
    assert points == 0
    assert details.keyword_density == 0


# --- Readability ---

def test_readability_simple_sentences():
    points, details = score_readability(
        _raw("This is a simple sentence. Another simple sentence here. And one more sentence.")
    )
    assert details.flesch_score > 0
    assert details.avg_sentence_length == pytest.approx(13 / 3)
    assert details.readability_level
    assert points > 0


def test_readability_empty_text():
    points, details = score_readability(_raw(""))
    assert details.flesch_score == 0
    assert details.readability_level == ""
    # short-sentence +1, no complex words +5
    assert points == 6


def test_readability_within_bounds(full_resume):
    points, details = score_readability(segment(full_resume))
    assert 0 <= points <= 25
    assert 0 <= details.flesch_score <= 100


# --- Formatting ---

def test_formatting_bullets():
    _, details = score_formatting(_raw("• First bullet point\n• Second bullet point\n• Third bullet point"))
    assert details.has_bullet_points


def test_formatting_consistent_dates():
    _, details = score_formatting(_raw("January 2020 - December 2023\nFebruary 2018 - December 2019"))
    assert details.has_consistent_dates


def test_formatting_inconsistent_dates():
    _, details = score_formatting(_raw("2018 - 2020\nMarch 2021"))
    assert not details.has_consistent_dates


def test_formatting_headings():
    _, details = score_formatting(_raw("EXPERIENCE\nEducation\nSKILLS\nsome body text here"))
    assert details.has_consistent_formatting


def test_formatting_proper_length():
    _, details = score_formatting(_raw(" ".join(["word"] * 400)))
    assert details.proper_length


def test_formatting_special_characters():
    _, clean = score_formatting(_raw("Plain text, with (basic) punctuation: only."))
    _, noisy = score_formatting(_raw("★ Star ★ performer ★ with ✓ checks ✓"))
    assert clean.no_special_characters
    assert not noisy.no_special_characters


def test_formatting_non_breaking_space_not_special():
    _, details = score_formatting(_raw("Plain\u00a0text with\u00a0non-breaking\u00a0spaces."))
    assert details.no_special_characters


def test_formatting_empty_text():
    points, details = score_formatting(_raw(""))
    assert not details.has_bullet_points
    # length +1, special characters +1
    assert points == 2


def test_date_format_shapes():
    assert date_format("2020 - 2023") == "year-range"
    assert date_format("2020 – 2023") == "year-range"
    assert date_format("March 2021") == "month-year"
    assert date_format("03/2021") == "numeric"
    assert date_format("sometime") == "unknown"


def test_find_dates_in_pattern_order():
    assert find_dates("2018 - 2020\nMarch 2021") == ["2018 - 2020", "March 2021"]
