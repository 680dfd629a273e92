"""
Interview Service - question generation, answer analysis and final feedback.

Each operation is stateless:
1. Build a prompt from the role / job context
2. Call the model once
3. Decode the JSON object from the reply
4. Validate it against the response schema (fails loudly with AIResponseError)

The client owns the fallback policy (static question bank, canned feedback),
so nothing here retries or invents data.
"""

import json
import logging
from typing import List, Optional

from fastapi import Depends
from pydantic import ValidationError

from internstud.core.config import get_settings
from internstud.schemas.schemas import (
    AnswerAnalysis, AnsweredQuestion, FinalFeedback, InterviewType, JobDetails, Question
)
from internstud.services.ai_client import AIClient, AIResponseError, get_ai_client

logger = logging.getLogger(__name__)


# ============================================================
# PROMPT TEMPLATES
# ============================================================

TECHNICAL_FOCUS = (
    "Focus specifically on technical knowledge, problem-solving, algorithms, data structures, "
    "or specific technologies {source}. Provide a question that requires a technical "
    "explanation or solution."
)

HR_FOCUS = (
    "Focus specifically on teamwork, handling challenges, communication skills, motivation, "
    "career goals, or situational scenarios relevant to the workplace. Avoid technical questions."
)

QUESTION_FORMAT = """Provide the question and all output in {language}.
Format the response as a JSON object with the following structure:
{{
  "question": "the question text in {language}",
  "expectedKeywords": ["keywords", "in", "{language}"],
  "difficulty": "{difficulty_scale} in {language}"
}}"""

ANALYSIS_PROMPT = """Analyze this interview answer for a {role} position. Do not address the candidate directly. Start the feedback directly with the analysis.
Question: {question}
Answer: {answer}

Provide the feedback in {language}.
Format the response in the following JSON format:
{{
  "strengths": ["list", "of", "strengths", "in", "{language}"],
  "weaknesses": ["list", "of", "areas", "for", "improvement", "in", "{language}"],
  "score": number between 0 and 100,
  "detailedFeedback": "detailed feedback text in {language}",
  "suggestions": ["list", "of", "suggestions", "for", "improvement", "in", "{language}"]
}}"""

FINAL_FEEDBACK_PROMPT = """Generate final interview feedback for a {role} position based on these answers. Do not address the candidate directly. Start the feedback directly with the analysis.

Based on the provided questions and the candidate's answers, provide:
1. An overall score for the interview out of 100.
2. A list of things the candidate did well during the interview (strengths).
3. A combined list of recommendations for the future, incorporating both specific areas for improvement based on the answers and general advice for future interviews.

Ensure the points for strengths and future recommendations are clear and distinct.
{answers}

Provide the feedback and all output in {language}.
Format the response in the following JSON format:
{{
  "overallScore": number between 0 and 100,
  "didWell": ["list", "of", "strengths", "in", "{language}"],
  "futureRecommendations": ["combined", "list", "of", "improvements", "and", "recommendations", "in", "{language}"]
}}"""


def normalize_question(text: str) -> str:
    """Comparison key for duplicate detection (case and whitespace insensitive)."""
    return " ".join(text.lower().split())


def build_question_prompt(
    role: Optional[str],
    job: Optional[JobDetails],
    interview_type: Optional[InterviewType],
    questions_asked: List[str],
    language: str
) -> str:
    """Build the question-generation prompt for a job-based or role-based interview."""
    exclusion = (
        "Ensure this question has NOT been asked before in this interview. "
        f"The previously asked questions are: {'; '.join(questions_asked)}."
    )

    if interview_type == InterviewType.technical:
        kind, difficulty_scale = "technical", "beginner/intermediate/advanced"
    elif interview_type == InterviewType.hr:
        kind, difficulty_scale = "HR or behavioral", "easy/medium/hard"
    else:
        kind, difficulty_scale = None, "easy/medium/hard"

    if kind and job:
        position = f"a {job.title} position at {job.company_name}"
        source = "mentioned in the job description and requirements below"
        context = f"\nJob Description: {job.description}\nRequirements: {job.requirements}\n"
    elif kind and role:
        position = f"a {role} position"
        source = "relevant to this role"
        context = "\n"
    else:
        logger.warning(
            "Could not determine interview type or role/job details; using general prompt "
            "(role=%s, job=%s, type=%s)", role, job.id if job else None, interview_type
        )
        return (
            f"Generate ONE general interview question. {exclusion}\n"
            + QUESTION_FORMAT.format(language=language, difficulty_scale=difficulty_scale)
        )

    focus = TECHNICAL_FOCUS.format(source=source) if interview_type == InterviewType.technical else HR_FOCUS
    return (
        f"Generate ONE {kind} interview question for {position}. {focus} {exclusion}"
        f"{context}\n"
        + QUESTION_FORMAT.format(language=language, difficulty_scale=difficulty_scale)
    )


def build_analysis_prompt(question: str, answer: str, role: Optional[str], language: str) -> str:
    return ANALYSIS_PROMPT.format(
        role=role or "General", question=question, answer=answer, language=language
    )


def build_final_feedback_prompt(role: Optional[str], answers: List[AnsweredQuestion], language: str) -> str:
    # Only question/answer pairs are sent; per-answer analyses stay on the client
    pairs = json.dumps(
        [{"question": a.question, "answer": a.answer} for a in answers],
        indent=2,
        ensure_ascii=False
    )
    return FINAL_FEEDBACK_PROMPT.format(role=role or "General", answers=pairs, language=language)


# ============================================================
# SERVICE
# ============================================================

class InterviewService:
    """
    Turns interview requests into model calls and validated responses.
    """

    def __init__(self, ai_client: AIClient, language: str = "Romanian"):
        self.ai = ai_client
        self.language = language

    def _decode(self, prompt: str, model):
        data = self.ai.complete_json(prompt)
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.debug("AI response failed validation: %s", data)
            raise AIResponseError(f"AI response does not match {model.__name__}: {e}") from e

    def generate_question(
        self,
        role: Optional[str],
        job: Optional[JobDetails],
        interview_type: Optional[InterviewType],
        questions_asked: List[str]
    ) -> Question:
        """
        Generate one question not present in `questions_asked`.

        A repeated question is rejected here rather than passed on; the client
        then picks an unused question from its static bank.
        """
        prompt = build_question_prompt(role, job, interview_type, questions_asked, self.language)
        question = self._decode(prompt, Question)

        asked = {normalize_question(q) for q in questions_asked}
        if normalize_question(question.question) in asked:
            logger.warning("AI repeated an already asked question: %s", question.question)
            raise AIResponseError("AI returned a question that was already asked")
        return question

    def analyze_answer(self, question: str, answer: str, role: Optional[str]) -> AnswerAnalysis:
        prompt = build_analysis_prompt(question, answer, role, self.language)
        return self._decode(prompt, AnswerAnalysis)

    def final_feedback(self, role: Optional[str], answers: List[AnsweredQuestion]) -> FinalFeedback:
        prompt = build_final_feedback_prompt(role, answers, self.language)
        return self._decode(prompt, FinalFeedback)


def get_interview_service(ai_client: AIClient = Depends(get_ai_client)) -> InterviewService:
    """Dependency for FastAPI route injection."""
    return InterviewService(ai_client, language=get_settings().interview_language)
