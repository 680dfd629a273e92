"""
Async client for the interview endpoints.

Every failure (transport error, non-2xx status, body that does not match the
expected model) surfaces as InterviewApiError so the simulator has one thing
to catch.
"""

import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from internstud.schemas.schemas import (
    AnswerAnalysis,
    FinalFeedback,
    JobDetails,
    Question,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/api"
DEFAULT_TIMEOUT = 30.0

ModelT = TypeVar("ModelT", bound=BaseModel)


class InterviewApiError(Exception):
    """The interview backend could not produce a usable answer."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class InterviewApiClient:
    """Talks to /get-job-details, /generate-question, /analyze-answer and /final-feedback."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: float = DEFAULT_TIMEOUT,
                 http_client: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self.http = http_client or httpx.AsyncClient(timeout=timeout)

    async def aclose(self):
        if self._owns_client:
            await self.http.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def _request(self, method: str, path: str, model: Type[ModelT],
                       payload: Optional[Dict[str, Any]] = None) -> ModelT:
        url = f"{self.base_url}{path}"
        try:
            response = await self.http.request(method, url, json=payload)
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise InterviewApiError(f"Request to {path} failed: {e}") from e

        if response.is_error:
            logger.error("%s %s returned %s: %s", method, path, response.status_code, response.text)
            raise InterviewApiError(
                f"{path} returned {response.status_code}", status_code=response.status_code
            )

        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error("Unexpected body from %s: %s", path, e)
            raise InterviewApiError(f"Unexpected response from {path}") from e

    async def get_job_details(self, job_id: str) -> JobDetails:
        return await self._request("GET", f"/get-job-details/{job_id}", JobDetails)

    async def generate_question(self, interview_type: str, questions_asked: List[str],
                                role: Optional[str] = None, job_id: Optional[str] = None) -> Question:
        """Job id wins over role when both are given."""
        payload: Dict[str, Any] = {"jobId": job_id} if job_id else {"role": role}
        payload["interviewType"] = interview_type
        payload["questionsAsked"] = list(questions_asked)
        return await self._request("POST", "/generate-question", Question, payload)

    async def analyze_answer(self, question: str, answer: str, role: Optional[str] = None) -> AnswerAnalysis:
        payload = {"question": question, "answer": answer, "role": role}
        return await self._request("POST", "/analyze-answer", AnswerAnalysis, payload)

    async def final_feedback(self, role: Optional[str], answers: List[Dict[str, str]]) -> FinalFeedback:
        """`answers` holds question/answer pairs only."""
        payload = {
            "role": role,
            "answers": [{"question": a["question"], "answer": a["answer"]} for a in answers],
        }
        return await self._request("POST", "/final-feedback", FinalFeedback, payload)
