"""
Phase 1 review criteria configuration.

Single source of truth for the evaluation dimensions an operator rates
during a phase 1 review. Clients fetch this list instead of hardcoding it.
"""
from typing import Dict, List, Mapping

MIN_RATING = 1
MAX_RATING = 5

# Ordered as shown in the review form
REVIEW_CRITERIA: List[Dict[str, str]] = [
    {"id": "technical_skills", "label": "Technical skills"},
    {"id": "problem_solving", "label": "Problem solving"},
    {"id": "communication", "label": "Communication and soft skills"},
    {"id": "culture_fit", "label": "Culture fit"},
    {"id": "teamwork", "label": "Teamwork"},
]

CRITERIA_IDS: List[str] = [c["id"] for c in REVIEW_CRITERIA]


def validate_criteria_ratings(ratings: Mapping) -> List[str]:
    """
    Check a criteriaRatings payload.

    Args:
        ratings: Mapping of criterion id to score

    Returns:
        List of problems found (empty when the payload is valid)
    """
    if not isinstance(ratings, Mapping):
        return ["criteriaRatings must be an object"]
    if not ratings:
        return ["criteriaRatings must rate at least one criterion"]

    problems = []
    for key, value in ratings.items():
        if key not in CRITERIA_IDS:
            problems.append(f"unknown criterion '{key}'")
            continue
        # bool is an int subclass; True is not a rating
        if isinstance(value, bool) or not isinstance(value, int):
            problems.append(f"rating for '{key}' must be an integer")
        elif not MIN_RATING <= value <= MAX_RATING:
            problems.append(f"rating for '{key}' must be between {MIN_RATING} and {MAX_RATING}")
    return problems
