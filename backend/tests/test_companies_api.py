"""
Tests for the company editor API: branding, page sections and jobs.
"""
import uuid

import pytest
from httpx import AsyncClient

from careerpage.models.company import Company
from careerpage.models.job_posting import JobPosting


def company_url(company: Company, suffix: str = "") -> str:
    return f"/api/companies/{company.id}{suffix}"


# ============================================================
# ACCESS
# ============================================================

@pytest.mark.asyncio
async def test_requires_sign_in(async_client: AsyncClient, test_company: Company):
    response = await async_client.get(company_url(test_company))
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_other_company_is_forbidden(client: AsyncClient):
    response = await client.get(f"/api/companies/{uuid.uuid4()}")
    assert response.status_code == 403

    response = await client.put(f"/api/companies/{uuid.uuid4()}", json={"name": "Mine Now"})
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_sample_company_is_forbidden(client: AsyncClient):
    response = await client.post("/api/companies/c1/sections", json={"type": "About"})
    assert response.status_code == 403


# ============================================================
# COMPANY
# ============================================================

@pytest.mark.asyncio
async def test_read_company(client: AsyncClient, test_company: Company):
    response = await client.get(company_url(test_company))
    assert response.status_code == 200
    data = response.json()
    assert data["slug"] == "globex"
    assert data["brandConfig"]["primaryColor"] == "#111827"
    assert data["brandConfig"]["fontFamily"] == "Inter"


@pytest.mark.asyncio
async def test_save_branding(client: AsyncClient, test_company: Company):
    response = await client.put(company_url(test_company), json={
        "brandConfig": {
            "primaryColor": "#7c3aed",
            "secondaryColor": "#10b981",
            "fontFamily": "Montserrat",
            "logoUrl": "https://globex.example.com/logo.png",
        },
    })
    assert response.status_code == 200
    brand = response.json()["brandConfig"]
    assert brand["fontFamily"] == "Montserrat"
    assert brand["logoUrl"] == "https://globex.example.com/logo.png"

    page = (await client.get("/globex/careers")).json()
    assert page["theme"]["primaryColor"] == "#7c3aed"
    assert page["theme"]["fontVariable"] == "var(--font-montserrat)"


@pytest.mark.asyncio
async def test_save_rejects_bad_color_and_font(client: AsyncClient, test_company: Company):
    response = await client.put(company_url(test_company), json={
        "brandConfig": {"primaryColor": "purple", "secondaryColor": "#10b981"},
    })
    assert response.status_code == 422

    response = await client.put(company_url(test_company), json={
        "brandConfig": {"primaryColor": "#7c3aed", "secondaryColor": "#10b981", "fontFamily": "Comic Sans"},
    })
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_save_full_section_list(client: AsyncClient, test_company: Company):
    response = await client.put(company_url(test_company), json={
        "pageSections": [
            {"id": "jobs", "type": "Jobs", "title": "Roles", "order": 0, "isVisible": True},
            {"id": "hero", "type": "Hero", "title": "Hi", "order": 1, "isVisible": False},
        ],
    })
    assert response.status_code == 200
    assert [s["id"] for s in response.json()["pageSections"]] == ["jobs", "hero"]

    page = (await client.get("/globex/careers")).json()
    assert [s["type"] for s in page["sections"]] == ["Jobs"]


@pytest.mark.asyncio
async def test_save_slug_taken(client: AsyncClient, test_company: Company, db):
    db.add(Company(name="Umbrella", slug="umbrella"))
    await db.commit()

    response = await client.put(company_url(test_company), json={"slug": "umbrella"})
    assert response.status_code == 409


# ============================================================
# SECTIONS
# ============================================================

@pytest.mark.asyncio
async def test_list_sections_sorted(client: AsyncClient, test_company: Company):
    response = await client.get(company_url(test_company, "/sections"))
    assert response.status_code == 200
    assert [s["id"] for s in response.json()] == ["hero", "about", "jobs"]


@pytest.mark.asyncio
async def test_add_section(client: AsyncClient, test_company: Company):
    response = await client.post(company_url(test_company, "/sections"), json={"type": "Video"})
    assert response.status_code == 201
    sections = response.json()
    assert len(sections) == 4
    video = sections[-1]
    assert video["type"] == "Video"
    assert video["title"] == "Our Culture"
    assert video["order"] == 3


@pytest.mark.asyncio
async def test_add_second_jobs_section(client: AsyncClient, test_company: Company):
    response = await client.post(company_url(test_company, "/sections"), json={"type": "Jobs"})
    assert response.status_code == 422

    sections = (await client.get(company_url(test_company, "/sections"))).json()
    assert len(sections) == 3


@pytest.mark.asyncio
async def test_add_unknown_section_type(client: AsyncClient, test_company: Company):
    response = await client.post(company_url(test_company, "/sections"), json={"type": "Testimonials"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_edit_section(client: AsyncClient, test_company: Company):
    response = await client.patch(
        company_url(test_company, "/sections/about"),
        json={"title": "Why Globex", "isVisible": False},
    )
    assert response.status_code == 200
    about = next(s for s in response.json() if s["id"] == "about")
    assert about["title"] == "Why Globex"
    assert about["isVisible"] is False
    # Untouched fields survive a partial edit
    assert about["content"] == "Tell candidates who you are."


@pytest.mark.asyncio
async def test_edit_unknown_section(client: AsyncClient, test_company: Company):
    response = await client.patch(company_url(test_company, "/sections/nope"), json={"title": "x"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_edit_section_with_null_visibility_is_rejected(client: AsyncClient, test_company: Company):
    response = await client.patch(company_url(test_company, "/sections/about"), json={"isVisible": None})
    assert response.status_code == 422

    sections = (await client.get(company_url(test_company, "/sections"))).json()
    assert [s["id"] for s in sections] == ["hero", "about", "jobs"]
    assert all(s["isVisible"] is True for s in sections)


@pytest.mark.asyncio
async def test_move_section(client: AsyncClient, test_company: Company):
    response = await client.post(company_url(test_company, "/sections/jobs/move"), json={"direction": "up"})
    assert response.status_code == 200
    ordered = sorted(response.json(), key=lambda s: s["order"])
    assert [s["id"] for s in ordered] == ["hero", "jobs", "about"]

    # Top section cannot move further up
    response = await client.post(company_url(test_company, "/sections/hero/move"), json={"direction": "up"})
    ordered = sorted(response.json(), key=lambda s: s["order"])
    assert [s["id"] for s in ordered] == ["hero", "jobs", "about"]


@pytest.mark.asyncio
async def test_move_bad_direction(client: AsyncClient, test_company: Company):
    response = await client.post(company_url(test_company, "/sections/jobs/move"), json={"direction": "sideways"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_delete_section(client: AsyncClient, test_company: Company):
    response = await client.delete(company_url(test_company, "/sections/hero"))
    assert response.status_code == 200
    assert [(s["id"], s["order"]) for s in response.json()] == [("about", 0), ("jobs", 1)]

    response = await client.delete(company_url(test_company, "/sections/hero"))
    assert response.status_code == 404


# ============================================================
# JOBS
# ============================================================

@pytest.mark.asyncio
async def test_list_company_jobs(client: AsyncClient, test_company: Company, test_job: JobPosting):
    response = await client.get(company_url(test_company, "/jobs"))
    assert response.status_code == 200
    jobs = response.json()
    assert [job["title"] for job in jobs] == ["Platform Engineer"]
    assert jobs[0]["postedDaysAgo"] == 3
    assert jobs[0]["salaryRange"] == "USD 150K-180K"


@pytest.mark.asyncio
async def test_create_job_with_defaults(client: AsyncClient, test_company: Company):
    response = await client.post(company_url(test_company, "/jobs"), json={"title": "Data Scientist"})
    assert response.status_code == 201
    job = response.json()
    assert job["slug"] == "data-scientist"
    assert job["workPolicy"] == "Remote"
    assert job["employmentType"] == "Full-time"
    assert job["experienceLevel"] == "Mid-level"
    assert job["department"] == "Engineering"
    assert job["applicationUrl"] == "#"


@pytest.mark.asyncio
async def test_create_job_duplicate_slug(client: AsyncClient, test_company: Company, test_job: JobPosting):
    response = await client.post(company_url(test_company, "/jobs"), json={"title": "Platform Engineer"})
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_create_job_invalid_enum(client: AsyncClient, test_company: Company):
    response = await client.post(
        company_url(test_company, "/jobs"),
        json={"title": "Pilot", "workPolicy": "Moon"},
    )
    assert response.status_code == 422
