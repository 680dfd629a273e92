import random

from internstud.interview.question_bank import (
    COMMON_QUESTIONS,
    GENERAL_ROLE,
    NO_MORE_QUESTIONS,
    infer_role_from_title,
    pick_fallback_question,
    questions_for,
)


def test_every_role_has_seven_questions():
    assert set(COMMON_QUESTIONS) == {"Software Engineer", "Data Scientist", "Marketing Specialist", "General"}
    assert all(len(q) == 7 for q in COMMON_QUESTIONS.values())


def test_unknown_role_uses_general_bank():
    assert questions_for("Astronaut") == COMMON_QUESTIONS[GENERAL_ROLE]
    assert questions_for("Data Scientist") == COMMON_QUESTIONS["Data Scientist"]


def test_fallback_skips_asked_questions():
    bank = COMMON_QUESTIONS["Software Engineer"]
    asked = bank[:6]

    question = pick_fallback_question("Software Engineer", asked, random.Random(1))

    assert question == bank[6]


def test_fallback_is_deterministic_with_seeded_rng():
    first = pick_fallback_question("Data Scientist", [], random.Random(42))
    second = pick_fallback_question("Data Scientist", [], random.Random(42))
    assert first == second
    assert first in COMMON_QUESTIONS["Data Scientist"]


def test_fallback_moves_to_general_when_role_bank_is_used_up():
    asked = list(COMMON_QUESTIONS["Marketing Specialist"])

    question = pick_fallback_question("Marketing Specialist", asked, random.Random(0))

    assert question in COMMON_QUESTIONS[GENERAL_ROLE]


def test_fallback_sentinel_when_everything_was_asked():
    asked = COMMON_QUESTIONS["Software Engineer"] + COMMON_QUESTIONS[GENERAL_ROLE]
    assert pick_fallback_question("Software Engineer", asked, random.Random(0)) == NO_MORE_QUESTIONS


def test_infer_role_from_title():
    assert infer_role_from_title("Junior Software Engineer") == "Software Engineer"
    assert infer_role_from_title("DATA SCIENTIST intern") == "Data Scientist"
    assert infer_role_from_title("Marketing Intern") == GENERAL_ROLE
    assert infer_role_from_title(None) == GENERAL_ROLE
