"""
Static question bank used when the AI question endpoint is unavailable.
"""

import random
from typing import Dict, Iterable, List, Optional

GENERAL_ROLE = "General"

NO_MORE_QUESTIONS = "No more questions available for this role."

COMMON_QUESTIONS: Dict[str, List[str]] = {
    "Software Engineer": [
        "Describe a time you used a specific data structure or algorithm to solve a problem.",
        "Explain the concept of RESTful APIs.",
        "How do you approach debugging?",
        "Talk about a project where you had to work with legacy code.",
        "What is your experience with [a specific technology, e.g., React, Python]?",
        "How do you handle code reviews?",
        "Explain your testing strategy.",
    ],
    "Data Scientist": [
        "Explain the difference between supervised and unsupervised learning.",
        "How do you handle missing data in a dataset?",
        "Describe a time you used statistical analysis to support a recommendation.",
        "What are some common challenges in building machine learning models?",
        "Explain the concept of overfitting and how to prevent it.",
        "How do you evaluate model performance?",
        "Describe your experience with data preprocessing.",
    ],
    "Marketing Specialist": [
        "Describe a successful marketing campaign you worked on.",
        "How do you measure the effectiveness of a marketing campaign?",
        "What is your experience with [a specific marketing channel, e.g., social media, email marketing]?",
        "How do you stay updated on the latest marketing trends?",
        "Describe a time you had to adapt your marketing strategy based on results.",
        "How do you analyze market trends?",
        "What tools do you use for marketing analytics?",
    ],
    GENERAL_ROLE: [
        "Tell me about yourself.",
        "Why are you the best candidate for this position?",
        "What are your salary expectations?",
        "How do you handle conflict in the workplace?",
        "Do you have any questions for me?",
        "What are your career goals?",
        "How do you handle stress and pressure?",
    ],
}

ROLES = list(COMMON_QUESTIONS)


def questions_for(role: str) -> List[str]:
    """Questions for `role`, or the General ones for an unknown role."""
    return COMMON_QUESTIONS.get(role) or COMMON_QUESTIONS[GENERAL_ROLE]


def pick_fallback_question(role: str, asked: Iterable[str], rng: random.Random = None) -> str:
    """
    Pick a random question the session has not asked yet.

    Tries the role's bank first, then the General bank. Returns
    NO_MORE_QUESTIONS only when both are exhausted.
    """
    rng = rng or random.Random()
    asked = set(asked)

    for bank in (questions_for(role), COMMON_QUESTIONS[GENERAL_ROLE]):
        available = [q for q in bank if q not in asked]
        if available:
            return rng.choice(available)
    return NO_MORE_QUESTIONS


def infer_role_from_title(title: Optional[str]) -> str:
    """Map a job title onto one of the known interview roles."""
    lower_title = (title or "").lower()
    if "software engineer" in lower_title:
        return "Software Engineer"
    if "data scientist" in lower_title:
        return "Data Scientist"
    return GENERAL_ROLE
