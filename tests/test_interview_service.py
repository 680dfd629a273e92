import json
from unittest.mock import MagicMock

import pytest

from internstud.core.config import Settings
from internstud.schemas.schemas import AnsweredQuestion, InterviewType, JobDetails
from internstud.services.ai_client import AIClient, AIResponseError, extract_json
from internstud.services.interview_service import (
    InterviewService,
    build_final_feedback_prompt,
    build_question_prompt,
    normalize_question,
)

QUESTION_JSON = json.dumps({
    "question": "Cum ai optimiza o interogare lentă?",
    "expectedKeywords": ["index", "plan"],
    "difficulty": "intermediate"
})

ANALYSIS_JSON = json.dumps({
    "strengths": ["structură clară"],
    "weaknesses": [],
    "score": 72,
    "detailedFeedback": "Răspuns bun.",
    "suggestions": ["exemple concrete"]
})


@pytest.fixture
def service(ai_client):
    return InterviewService(ai_client, language="Romanian")


# ------------------------------------------------------------
# JSON extraction
# ------------------------------------------------------------

def test_extract_json_from_fenced_reply():
    text = "Sure! Here it is:\n```json\n{\"score\": 5, \"nested\": {\"a\": 1}}\n```\nGood luck."
    assert extract_json(text) == {"score": 5, "nested": {"a": 1}}


@pytest.mark.parametrize("text", ["no json here", "} backwards {", "{not: valid}", ""])
def test_extract_json_rejects_bad_replies(text):
    with pytest.raises(AIResponseError):
        extract_json(text)


# ------------------------------------------------------------
# AI client
# ------------------------------------------------------------

def test_complete_wraps_sdk_errors():
    client = AIClient(Settings(ai_api_key="test-key"))
    client.client = MagicMock()
    client.client.chat.completions.create.side_effect = RuntimeError("quota exceeded")

    with pytest.raises(AIResponseError):
        client.complete("prompt")


def test_complete_rejects_empty_content():
    client = AIClient(Settings(ai_api_key="test-key"))
    client.client = MagicMock()
    reply = MagicMock()
    reply.choices = [MagicMock()]
    reply.choices[0].message.content = ""
    client.client.chat.completions.create.return_value = reply

    with pytest.raises(AIResponseError):
        client.complete("prompt")


# ------------------------------------------------------------
# Service
# ------------------------------------------------------------

def test_generate_question_decodes_reply(service, ai_client):
    ai_client.complete.return_value = f"```json\n{QUESTION_JSON}\n```"

    question = service.generate_question("Software Engineer", None, InterviewType.technical, [])

    assert question.question == "Cum ai optimiza o interogare lentă?"
    assert question.expected_keywords == ["index", "plan"]


def test_generate_question_missing_key_fails(service, ai_client):
    ai_client.complete.return_value = json.dumps({"question": "Why?"})

    with pytest.raises(AIResponseError):
        service.generate_question("General", None, InterviewType.hr, [])


def test_repeated_question_is_rejected(service, ai_client):
    ai_client.complete.return_value = json.dumps({
        "question": "  tell me ABOUT yourself. ", "expectedKeywords": [], "difficulty": "easy"
    })

    with pytest.raises(AIResponseError):
        service.generate_question("General", None, InterviewType.hr, ["Tell me about yourself."])


def test_analysis_score_out_of_range_fails(service, ai_client):
    data = json.loads(ANALYSIS_JSON)
    data["score"] = 150
    ai_client.complete.return_value = json.dumps(data)

    with pytest.raises(AIResponseError):
        service.analyze_answer("Q", "A", "General")


def test_analyze_answer(service, ai_client):
    ai_client.complete.return_value = ANALYSIS_JSON

    analysis = service.analyze_answer("Q", "A", "Data Scientist")

    assert analysis.score == 72
    assert analysis.detailed_feedback == "Răspuns bun."
    prompt = ai_client.complete.call_args.args[0]
    assert "Data Scientist position" in prompt
    assert "Romanian" in prompt


def test_analysis_fractional_score_is_rounded(service, ai_client):
    data = json.loads(ANALYSIS_JSON)
    data["score"] = 85.5
    ai_client.complete.return_value = json.dumps(data)

    analysis = service.analyze_answer("Q", "A", "General")

    assert analysis.score == 86


def test_final_feedback_fractional_score_is_rounded(service, ai_client):
    ai_client.complete.return_value = json.dumps({
        "overallScore": 63.2, "didWell": [], "futureRecommendations": []
    })

    feedback = service.final_feedback("General", [AnsweredQuestion(question="Q1", answer="A1")])

    assert feedback.overall_score == 63


def test_final_feedback(service, ai_client):
    ai_client.complete.return_value = json.dumps({
        "overallScore": 64, "didWell": ["calm"], "futureRecommendations": ["practice"]
    })

    feedback = service.final_feedback("General", [AnsweredQuestion(question="Q1", answer="A1")])

    assert feedback.overall_score == 64
    assert feedback.future_recommendations == ["practice"]


# ------------------------------------------------------------
# Prompts
# ------------------------------------------------------------

def test_technical_job_prompt_includes_job_context():
    job = JobDetails(id="j1", title="Backend Developer", company_name="Acme",
                     description="Build APIs", requirements="Python, SQL")

    prompt = build_question_prompt(None, job, InterviewType.technical, ["Q1", "Q2"], "Romanian")

    assert "technical interview question for a Backend Developer position at Acme" in prompt
    assert "Job Description: Build APIs" in prompt
    assert "Requirements: Python, SQL" in prompt
    assert "Q1; Q2" in prompt
    assert "beginner/intermediate/advanced" in prompt


def test_hr_role_prompt():
    prompt = build_question_prompt("Data Scientist", None, InterviewType.hr, [], "Romanian")

    assert "HR or behavioral interview question for a Data Scientist position" in prompt
    assert "Avoid technical questions" in prompt
    assert "easy/medium/hard" in prompt


def test_general_prompt_without_type():
    prompt = build_question_prompt("Data Scientist", None, None, [], "Romanian")
    assert prompt.startswith("Generate ONE general interview question.")


def test_final_feedback_prompt_sends_pairs_only():
    prompt = build_final_feedback_prompt(
        "General", [AnsweredQuestion(question="Q1", answer="A1")], "Romanian"
    )
    pairs = json.dumps([{"question": "Q1", "answer": "A1"}], indent=2)
    assert pairs in prompt


def test_normalize_question():
    assert normalize_question("  What   is\nREST? ") == "what is rest?"
