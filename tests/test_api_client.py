import json

import httpx
import pytest

from internstud.interview.api_client import InterviewApiClient, InterviewApiError


def make_client(handler):
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return InterviewApiClient("http://testserver/api/", http_client=http)


QUESTION = {"question": "What is a closure?", "expectedKeywords": ["scope"], "difficulty": "intermediate"}


@pytest.mark.asyncio
async def test_generate_question_with_job_sends_job_id_only():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=QUESTION)

    api = make_client(handler)
    question = await api.generate_question("technical", ["Q1"], role="Software Engineer", job_id="job-1")

    assert seen["url"] == "http://testserver/api/generate-question"
    assert seen["body"] == {"jobId": "job-1", "interviewType": "technical", "questionsAsked": ["Q1"]}
    assert question.question == "What is a closure?"
    assert question.expected_keywords == ["scope"]


@pytest.mark.asyncio
async def test_generate_question_with_role():
    seen = {}

    def handler(request):
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=QUESTION)

    await make_client(handler).generate_question("hr", [], role="Data Scientist")

    assert seen["body"] == {"role": "Data Scientist", "interviewType": "hr", "questionsAsked": []}


@pytest.mark.asyncio
async def test_error_status_raises_api_error():
    api = make_client(lambda request: httpx.Response(500, json={"detail": "Invalid JSON response from API"}))

    with pytest.raises(InterviewApiError) as exc_info:
        await api.analyze_answer("Q", "A", "General")

    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_transport_failure_raises_api_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(InterviewApiError):
        await make_client(handler).get_job_details("job-1")


@pytest.mark.asyncio
async def test_body_not_matching_model_raises_api_error():
    api = make_client(lambda request: httpx.Response(200, json={"overallScore": 150, "didWell": []}))

    with pytest.raises(InterviewApiError):
        await api.final_feedback("General", [])


@pytest.mark.asyncio
async def test_non_json_body_raises_api_error():
    api = make_client(lambda request: httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(InterviewApiError):
        await api.generate_question("hr", [], role="General")


@pytest.mark.asyncio
async def test_final_feedback_sends_only_question_and_answer():
    seen = {}

    def handler(request):
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"overallScore": 70, "didWell": ["clear"], "futureRecommendations": []})

    answers = [{"question": "Q1", "answer": "A1", "analysis": {"score": 50}}]
    feedback = await make_client(handler).final_feedback("General", answers)

    assert seen["body"] == {"role": "General", "answers": [{"question": "Q1", "answer": "A1"}]}
    assert feedback.overall_score == 70


@pytest.mark.asyncio
async def test_job_details_decoding():
    body = {"id": "job-1", "title": "Data Scientist", "companyName": "Acme", "isRemote": True}
    api = make_client(lambda request: httpx.Response(200, json=body))

    job = await api.get_job_details("job-1")

    assert job.company_name == "Acme"
    assert job.is_remote is True
