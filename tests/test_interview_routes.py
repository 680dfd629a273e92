import json
from datetime import datetime
from unittest.mock import MagicMock

from bson import ObjectId

from internstud.main import app
from internstud.schemas.schemas import Question
from internstud.services.interview_service import get_interview_service

QUESTION = {"question": "Descrie un proiect recent.", "expectedKeywords": ["proiect"], "difficulty": "easy"}


def insert_job(db, title="Junior Software Engineer", status="approved"):
    result = db["announcements"].insert_one({
        "company_id": "c1",
        "company_name": "Acme",
        "title": title,
        "description": "Build and ship web services",
        "requirements": "Python, REST",
        "location": "Cluj",
        "job_type": "internship",
        "is_remote": True,
        "status": status,
        "created_at": datetime.utcnow()
    })
    return str(result.inserted_id)


def test_get_job_details(client, db):
    job_id = insert_job(db)

    response = client.get(f"/api/get-job-details/{job_id}")

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == job_id
    assert body["companyName"] == "Acme"
    assert body["isRemote"] is True


def test_get_job_details_not_found(client):
    assert client.get(f"/api/get-job-details/{ObjectId()}").status_code == 404
    assert client.get("/api/get-job-details/not-an-id").status_code == 404


def test_get_job_details_hides_unapproved_announcements(client, db):
    for status in ("pending", "rejected"):
        job_id = insert_job(db, status=status)
        assert client.get(f"/api/get-job-details/{job_id}").status_code == 404


def test_generate_question_unapproved_job(client, db, ai_client):
    job_id = insert_job(db, status="pending")

    response = client.post("/api/generate-question", json={"jobId": job_id, "interviewType": "hr"})

    assert response.status_code == 404
    ai_client.complete.assert_not_called()


def test_generate_question_requires_role_or_job(client):
    response = client.post("/api/generate-question", json={"interviewType": "technical", "questionsAsked": []})
    assert response.status_code == 400


def test_generate_question_requires_interview_type(client):
    response = client.post("/api/generate-question", json={"role": "General"})
    assert response.status_code == 400


def test_generate_question_unknown_job(client):
    response = client.post("/api/generate-question", json={"jobId": str(ObjectId()), "interviewType": "hr"})
    assert response.status_code == 404


def test_generate_question_for_role(client, ai_client):
    ai_client.complete.return_value = json.dumps(QUESTION)

    response = client.post("/api/generate-question", json={
        "role": "Data Scientist", "interviewType": "hr", "questionsAsked": ["Tell me about yourself."]
    })

    assert response.status_code == 200
    assert response.json() == QUESTION
    prompt = ai_client.complete.call_args.args[0]
    assert "Data Scientist position" in prompt
    assert "Tell me about yourself." in prompt


def test_generate_question_for_job_uses_job_context(client, db, ai_client):
    job_id = insert_job(db)
    ai_client.complete.return_value = json.dumps(QUESTION)

    response = client.post("/api/generate-question", json={"jobId": job_id, "interviewType": "technical"})

    assert response.status_code == 200
    prompt = ai_client.complete.call_args.args[0]
    assert "Junior Software Engineer position at Acme" in prompt
    assert "Requirements: Python, REST" in prompt


def test_generate_question_infers_role_from_job_title(client, db):
    job_id = insert_job(db, title="Senior Data Scientist")
    service = MagicMock()
    service.generate_question.return_value = Question(**QUESTION)
    app.dependency_overrides[get_interview_service] = lambda: service

    response = client.post("/api/generate-question", json={"jobId": job_id, "interviewType": "technical"})

    assert response.status_code == 200
    role, job = service.generate_question.call_args.args[:2]
    assert role == "Data Scientist"
    assert job.id == job_id


def test_generate_question_malformed_ai_reply(client, ai_client):
    ai_client.complete.return_value = "I cannot help with that."

    response = client.post("/api/generate-question", json={"role": "General", "interviewType": "hr"})

    assert response.status_code == 500


def test_generate_question_repeated_question(client, ai_client):
    ai_client.complete.return_value = json.dumps(QUESTION)

    response = client.post("/api/generate-question", json={
        "role": "General", "interviewType": "hr", "questionsAsked": [QUESTION["question"]]
    })

    assert response.status_code == 500


def test_analyze_answer(client, ai_client):
    ai_client.complete.return_value = json.dumps({
        "strengths": ["a"], "weaknesses": ["b"], "score": 55,
        "detailedFeedback": "Ok.", "suggestions": ["c"]
    })

    response = client.post("/api/analyze-answer", json={"question": "Q", "answer": "A", "role": "General"})

    assert response.status_code == 200
    assert response.json()["detailedFeedback"] == "Ok."
    assert response.json()["score"] == 55


def test_analyze_answer_fractional_score(client, ai_client):
    ai_client.complete.return_value = json.dumps({
        "strengths": [], "weaknesses": [], "score": 85.5, "detailedFeedback": "x", "suggestions": []
    })

    response = client.post("/api/analyze-answer", json={"question": "Q", "answer": "A"})

    assert response.status_code == 200
    assert response.json()["score"] == 86


def test_analyze_answer_rejects_empty_answer(client):
    response = client.post("/api/analyze-answer", json={"question": "Q", "answer": ""})
    assert response.status_code == 422


def test_analyze_answer_invalid_score(client, ai_client):
    ai_client.complete.return_value = json.dumps({
        "strengths": [], "weaknesses": [], "score": -3, "detailedFeedback": "x", "suggestions": []
    })

    response = client.post("/api/analyze-answer", json={"question": "Q", "answer": "A"})

    assert response.status_code == 500


def test_final_feedback(client, ai_client):
    ai_client.complete.return_value = json.dumps({
        "overallScore": 77, "didWell": ["calm"], "futureRecommendations": ["examples"]
    })

    response = client.post("/api/final-feedback", json={
        "role": "General", "answers": [{"question": "Q1", "answer": "A1"}]
    })

    assert response.status_code == 200
    assert response.json() == {"overallScore": 77, "didWell": ["calm"], "futureRecommendations": ["examples"]}


def test_final_feedback_ai_failure(client, ai_client):
    ai_client.complete.return_value = "{broken"

    response = client.post("/api/final-feedback", json={"role": "General", "answers": []})

    assert response.status_code == 500
