"""Turn an ATS score breakdown into prioritised, actionable recommendations.

Each category contributes recommendations from a fixed threshold table.
Scores below ``CRITICAL_THRESHOLD`` escalate some of them by one priority
level. The final list is ordered critical -> important -> suggested, keeping
generation order (structure, keywords, readability, formatting) within a
priority.
"""

import logging
from collections import defaultdict

from models.resume import SectionMap
from models.scoring import (
    FormattingDetails,
    KeywordDetails,
    Priority,
    ReadabilityDetails,
    Recommendation,
    ScoreBreakdown,
    StructureDetails,
)
from services.text_utils import round_half_up

logger = logging.getLogger(__name__)

CRITICAL_THRESHOLD = 60
PRIORITY_RANK: dict[str, int] = {"critical": 0, "important": 1, "suggested": 2}


def _escalate(is_critical: bool, high: Priority, low: Priority) -> Priority:
    return high if is_critical else low


def _structure_recommendations(details: StructureDetails, is_critical: bool) -> list[Recommendation]:
    recs: list[Recommendation] = []

    if not details.has_contact:
        recs.append(Recommendation(
            category="structure",
            priority="critical",
            title="Add Contact Information",
            description="Your resume is missing contact information. Include your name, phone number, email, and location.",
            impact="high",
            action_items=[
                "Add your full name at the top of the resume",
                "Include a professional email address",
                "Add your phone number",
                "Include your city and state (or country for international applications)",
            ],
        ))

    if not details.has_experience:
        recs.append(Recommendation(
            category="structure",
            priority=_escalate(is_critical, "critical", "important"),
            title="Add Work Experience Section",
            description="Your resume lacks a clear work experience section, which is crucial for ATS systems.",
            impact="high",
            action_items=[
                'Create a dedicated "Work Experience" or "Professional Experience" section',
                "List your positions in reverse chronological order",
                "Include company names, job titles, and dates",
                "Add 3-5 bullet points describing your responsibilities and achievements",
            ],
        ))

    if not details.has_education:
        recs.append(Recommendation(
            category="structure",
            priority="important",
            title="Add Education Section",
            description="Include your educational background to provide a complete professional profile.",
            impact="medium",
            action_items=[
                'Add an "Education" section',
                "List your degrees with institution names",
                "Include graduation dates or expected graduation dates",
                "Add relevant coursework or honors if applicable",
            ],
        ))

    if not details.has_skills:
        recs.append(Recommendation(
            category="structure",
            priority="important",
            title="Add Skills Section",
            description="A dedicated skills section helps ATS systems identify your qualifications quickly.",
            impact="medium",
            action_items=[
                'Create a "Skills" or "Technical Skills" section',
                "List relevant hard skills and software proficiencies",
                "Include industry-specific tools and technologies",
                "Organize skills by category if you have many",
            ],
        ))

    if not details.has_summary:
        recs.append(Recommendation(
            category="structure",
            priority="suggested",
            title="Add Professional Summary",
            description="A brief summary at the top can help ATS systems and recruiters quickly understand your value.",
            impact="low",
            action_items=[
                "Write a 2-3 sentence professional summary",
                "Highlight your years of experience and key expertise",
                "Include your most relevant accomplishments",
                "Tailor it to your target role",
            ],
        ))

    if not details.proper_headings:
        recs.append(Recommendation(
            category="structure",
            priority=_escalate(is_critical, "important", "suggested"),
            title="Use Standard Section Headings",
            description="ATS systems look for standard section headings. Use clear, conventional labels.",
            impact="medium",
            action_items=[
                'Use standard headings like "Work Experience", "Education", "Skills"',
                "Avoid creative or unusual section names",
                "Make headings visually distinct (bold or larger font)",
                "Keep heading format consistent throughout",
            ],
        ))

    if not details.logical_order:
        recs.append(Recommendation(
            category="structure",
            priority="suggested",
            title="Reorganize Section Order",
            description="Follow a logical section order for better ATS parsing and readability.",
            impact="low",
            action_items=[
                "Start with contact information",
                "Follow with professional summary (optional)",
                "Place work experience next",
                "Add education section",
                "End with skills and certifications",
            ],
        ))

    return recs


def _keyword_recommendations(details: KeywordDetails, is_critical: bool) -> list[Recommendation]:
    recs: list[Recommendation] = []

    if details.action_verb_count < 8:
        recs.append(Recommendation(
            category="keywords",
            priority=_escalate(is_critical, "critical", "important"),
            title="Use More Action Verbs",
            description=(
                f"Your resume contains only {details.action_verb_count} action verbs. "
                "Aim for at least 10-15 strong action verbs."
            ),
            impact="high",
            action_items=[
                "Start bullet points with strong action verbs",
                "Use verbs like: achieved, developed, led, implemented, increased",
                'Avoid weak verbs like "responsible for" or "worked on"',
                "Vary your verb choices to avoid repetition",
            ],
        ))

    if details.industry_keyword_count < 5:
        recs.append(Recommendation(
            category="keywords",
            priority=_escalate(is_critical, "critical", "important"),
            title="Include More Industry Keywords",
            description=(
                f"Only {details.industry_keyword_count} industry keywords found. "
                "Add relevant terms from your field."
            ),
            impact="high",
            action_items=[
                "Review job descriptions in your target role",
                "Identify common industry terms and methodologies",
                "Naturally incorporate these keywords into your experience",
                "Include relevant certifications and methodologies (e.g., Agile, Six Sigma)",
            ],
        ))

    if details.technical_skill_count < 5:
        recs.append(Recommendation(
            category="keywords",
            priority="important",
            title="Add Technical Skills",
            description=(
                f"Only {details.technical_skill_count} technical skills identified. "
                "List more specific tools and technologies."
            ),
            impact="medium",
            action_items=[
                "Create a dedicated technical skills section",
                "List programming languages, software, and tools you use",
                "Include version numbers or proficiency levels if relevant",
                "Add cloud platforms, databases, and frameworks",
            ],
        ))

    if details.quantifiable_achievements < 3:
        recs.append(Recommendation(
            category="keywords",
            priority=_escalate(is_critical, "important", "suggested"),
            title="Add Quantifiable Achievements",
            description=(
                f"Only {details.quantifiable_achievements} quantifiable achievements found. "
                "Numbers make your impact concrete."
            ),
            impact="medium",
            action_items=[
                "Add percentages, dollar amounts, or time savings",
                "Quantify team sizes you managed or worked with",
                'Include metrics like "increased sales by 25%"',
                'Show scale: "managed $2M budget" or "served 500+ customers"',
            ],
        ))

    if details.keyword_density < 1.5:
        recs.append(Recommendation(
            category="keywords",
            priority="suggested",
            title="Increase Keyword Density",
            description="Your resume has low keyword density. Add more relevant terms naturally.",
            impact="low",
            action_items=[
                "Review job postings for commonly required skills",
                "Incorporate relevant keywords into your descriptions",
                "Avoid keyword stuffing - keep it natural",
                "Focus on skills you actually possess",
            ],
        ))
    elif details.keyword_density > 6:
        recs.append(Recommendation(
            category="keywords",
            priority="suggested",
            title="Reduce Keyword Stuffing",
            description="Your keyword density is too high, which may appear unnatural to ATS systems.",
            impact="low",
            action_items=[
                "Remove repetitive keywords",
                "Focus on natural, descriptive language",
                "Ensure each keyword adds value",
                "Prioritize quality over quantity",
            ],
        ))

    return recs


def _readability_recommendations(details: ReadabilityDetails, is_critical: bool) -> list[Recommendation]:
    recs: list[Recommendation] = []

    if details.flesch_score < 50:
        recs.append(Recommendation(
            category="readability",
            priority=_escalate(is_critical, "important", "suggested"),
            title="Improve Readability",
            description=(
                f"Your readability score is {int(round_half_up(details.flesch_score))}/100. "
                "Simplify your language for better ATS parsing."
            ),
            impact="medium",
            action_items=[
                "Use shorter sentences (15-20 words average)",
                "Replace complex words with simpler alternatives",
                "Break long paragraphs into bullet points",
                "Avoid jargon unless industry-standard",
            ],
        ))
    elif details.flesch_score > 80:
        recs.append(Recommendation(
            category="readability",
            priority="suggested",
            title="Add More Professional Language",
            description="Your resume may be too simple. Add more professional terminology.",
            impact="low",
            action_items=[
                "Use industry-appropriate terminology",
                "Expand on your accomplishments with more detail",
                "Include technical terms relevant to your field",
                "Balance simplicity with professionalism",
            ],
        ))

    if details.avg_sentence_length > 25:
        recs.append(Recommendation(
            category="readability",
            priority="important",
            title="Shorten Sentences",
            description=(
                f"Average sentence length is {int(round_half_up(details.avg_sentence_length))} words. "
                "Aim for 15-20 words."
            ),
            impact="medium",
            action_items=[
                "Break long sentences into two shorter ones",
                "Use bullet points instead of paragraphs",
                "Remove unnecessary words and phrases",
                "Focus on one idea per sentence",
            ],
        ))
    elif details.avg_sentence_length < 12:
        recs.append(Recommendation(
            category="readability",
            priority="suggested",
            title="Expand Descriptions",
            description="Your sentences are very short. Add more detail to your accomplishments.",
            impact="low",
            action_items=[
                "Provide more context for your achievements",
                "Explain the impact of your work",
                "Include relevant details about projects",
                "Combine related short sentences",
            ],
        ))

    if details.complex_word_percentage > 25:
        recs.append(Recommendation(
            category="readability",
            priority="suggested",
            title="Simplify Vocabulary",
            description=(
                f"{int(round_half_up(details.complex_word_percentage))}% of words are complex. "
                "Aim for under 20%."
            ),
            impact="low",
            action_items=[
                "Replace complex words with simpler synonyms",
                "Avoid unnecessarily long words",
                "Use clear, direct language",
                "Keep technical terms only when necessary",
            ],
        ))

    return recs


def _formatting_recommendations(details: FormattingDetails, is_critical: bool) -> list[Recommendation]:
    recs: list[Recommendation] = []

    if not details.has_bullet_points:
        recs.append(Recommendation(
            category="formatting",
            priority=_escalate(is_critical, "critical", "important"),
            title="Use Bullet Points",
            description="Your resume lacks bullet points. ATS systems parse bullet-pointed lists more effectively.",
            impact="high",
            action_items=[
                "Convert paragraphs to bullet points",
                "Use simple bullet symbols (•, -, or *)",
                "Start each bullet with an action verb",
                "Keep bullets concise (1-2 lines each)",
            ],
        ))

    if not details.has_consistent_dates:
        recs.append(Recommendation(
            category="formatting",
            priority="important",
            title="Standardize Date Formatting",
            description="Use consistent date formatting throughout your resume.",
            impact="medium",
            action_items=[
                "Choose one date format and stick to it",
                'Recommended: "Month YYYY - Month YYYY" (e.g., "Jan 2020 - Dec 2023")',
                'Use "Present" for current positions',
                "Align dates consistently (left or right)",
            ],
        ))

    if not details.has_consistent_formatting:
        recs.append(Recommendation(
            category="formatting",
            priority="important",
            title="Maintain Consistent Formatting",
            description="Inconsistent formatting can confuse ATS systems.",
            impact="medium",
            action_items=[
                "Use the same font throughout",
                "Keep heading styles consistent",
                "Maintain uniform spacing between sections",
                "Use consistent capitalization for similar elements",
            ],
        ))

    if not details.proper_length:
        recs.append(Recommendation(
            category="formatting",
            priority="suggested",
            title="Adjust Resume Length",
            description="Your resume length may not be optimal for ATS parsing.",
            impact="low",
            action_items=[
                "Aim for 400-600 words for optimal length",
                "Remove outdated or irrelevant experience",
                "Focus on recent and relevant positions",
                "Keep it to 1-2 pages maximum",
            ],
        ))

    if not details.no_special_characters:
        recs.append(Recommendation(
            category="formatting",
            priority="suggested",
            title="Remove Special Characters",
            description="Excessive special characters can interfere with ATS parsing.",
            impact="low",
            action_items=[
                "Remove decorative symbols and graphics",
                "Avoid tables and text boxes",
                "Use standard punctuation only",
                "Stick to simple formatting",
            ],
        ))

    return recs


def recommend(breakdown: ScoreBreakdown, section_map: SectionMap) -> list[Recommendation]:
    """Generate recommendations for ``section_map``'s breakdown, highest priority first."""
    is_critical = breakdown.total_score < CRITICAL_THRESHOLD
    details = breakdown.breakdown

    recommendations = (
        _structure_recommendations(details.structure, is_critical)
        + _keyword_recommendations(details.keywords, is_critical)
        + _readability_recommendations(details.readability, is_critical)
        + _formatting_recommendations(details.formatting, is_critical)
    )
    # sorted() is stable, so generation order breaks ties
    ordered = sorted(recommendations, key=lambda rec: PRIORITY_RANK[rec.priority])
    logger.debug(
        "Generated %d recommendations (%d critical)",
        len(ordered), sum(1 for rec in ordered if rec.priority == "critical"),
    )
    return ordered


def get_critical_issues(recommendations: list[Recommendation]) -> list[Recommendation]:
    return [rec for rec in recommendations if rec.priority == "critical"]


def group_by_category(recommendations: list[Recommendation]) -> dict[str, list[Recommendation]]:
    """Group recommendations by category, keeping their relative order."""
    groups: dict[str, list[Recommendation]] = defaultdict(list)
    for rec in recommendations:
        groups[rec.category].append(rec)
    return dict(groups)
