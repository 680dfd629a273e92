from datetime import datetime, timedelta

from bson import ObjectId


def past(days=30):
    return datetime.utcnow() - timedelta(days=days)


def future(days=30):
    return datetime.utcnow() + timedelta(days=days)


def test_eligible_companies_requires_user_id(client):
    assert client.get("/api/eligible-companies").status_code == 401


def test_eligible_companies_unknown_user(client):
    response = client.get("/api/eligible-companies", params={"userId": str(ObjectId())})
    assert response.status_code == 404


def test_eligible_companies_filters_and_keeps_last_entry_per_company(client, make_user):
    acme = make_user("company", company_name="Acme")
    globex = make_user("company", company_name="Globex")
    other_student = make_user("student", first_name="Ion", last_name="Pop")
    student = make_user("student", first_name="Ana", last_name="Ionescu", experience=[
        {"title": "Intern", "company": "Acme", "company_id": acme, "end_date": past(90)},
        {"title": "Junior Dev", "company": "Acme", "company_id": acme, "end_date": past(10)},
        {"title": "Developer", "company": "Globex", "company_id": globex, "end_date": future()},
        {"title": "Tutor", "company": "Ion", "company_id": other_student, "end_date": past()},
        {"title": "Freelancer", "company": "Self", "end_date": past()},
        {"title": "Current", "company": "Acme", "company_id": acme, "end_date": None, "is_present": True},
    ])

    response = client.get("/api/eligible-companies", params={"userId": student})

    assert response.status_code == 200
    assert response.json() == [{"id": acme, "companyName": "Acme", "jobTitle": "Junior Dev"}]


def test_submit_review_requires_user(client):
    response = client.post("/api/submit-review", json={"companyId": "c1", "rating": 4, "comment": "Great"})
    assert response.status_code == 401


def test_submit_review_requires_fields(client):
    response = client.post("/api/submit-review", json={"userId": "u1", "companyId": "c1", "rating": 4})
    assert response.status_code == 400
    assert response.json()["detail"] == "Company ID, rating, and comment are required."


def test_submit_review_rating_bounds(client):
    for rating in (0, 6):
        response = client.post("/api/submit-review", json={
            "userId": "u1", "companyId": "c1", "rating": rating, "comment": "ok"
        })
        assert response.status_code == 400


def test_submit_review_stores_student_name(client, db, make_user):
    company = make_user("company", company_name="Acme")
    student = make_user("student", first_name="Ana", last_name="Ionescu")

    response = client.post("/api/submit-review", json={
        "userId": student, "companyId": company, "rating": 5, "comment": " Mentorat excelent "
    })

    assert response.status_code == 201
    assert response.json()["message"] == "Review submitted successfully!"
    review = db["companyReviews"].find_one({"company_id": company})
    assert review["student_name"] == "Ana Ionescu"
    assert review["comment"] == "Mentorat excelent"
    assert review["rating"] == 5


def test_submit_review_unknown_student_is_anonymous(client, db):
    response = client.post("/api/submit-review", json={
        "userId": str(ObjectId()), "companyId": "c1", "rating": 3, "comment": "Ok"
    })

    assert response.status_code == 201
    assert db["companyReviews"].find_one()["student_name"] == "Anonim"


def test_company_reviews_lists_only_that_company(client):
    for company_id in ("c1", "c1", "c2"):
        client.post("/api/submit-review", json={
            "userId": str(ObjectId()), "companyId": company_id, "rating": 4, "comment": "Fine"
        })

    response = client.get("/api/company-reviews/c1")

    assert response.status_code == 200
    assert len(response.json()) == 2
    assert {r["company_id"] for r in response.json()} == {"c1"}
