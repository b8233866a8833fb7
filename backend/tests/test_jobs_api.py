"""
Tests for single-job editor endpoints.
"""
import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from careerpage.models.company import Company
from careerpage.models.job_posting import JobPosting


@pytest.mark.asyncio
async def test_read_job(client: AsyncClient, test_job: JobPosting):
    response = await client.get(f"/api/jobs/{test_job.id}")
    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "Platform Engineer"
    assert data["companyId"] == str(test_job.company_id)
    assert data["postedDaysAgo"] == 3


@pytest.mark.asyncio
async def test_read_job_requires_sign_in(async_client: AsyncClient, test_job: JobPosting):
    response = await async_client.get(f"/api/jobs/{test_job.id}")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_unknown_job(client: AsyncClient):
    response = await client.get(f"/api/jobs/{uuid.uuid4()}")
    assert response.status_code == 404
    assert response.json()["detail"] == "Job not found"


@pytest.mark.asyncio
async def test_sample_job_is_not_editable(client: AsyncClient):
    response = await client.put("/api/jobs/j1", json={"title": "Hijacked"})
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_job_of_another_company(client: AsyncClient, db: AsyncSession):
    other = Company(name="Umbrella", slug="umbrella")
    db.add(other)
    await db.commit()
    await db.refresh(other)
    job = JobPosting(
        company_id=other.id,
        title="Virologist",
        slug="virologist",
        location="Raccoon City",
        work_policy="On-site",
        department="Research",
        employment_type="Full-time",
        experience_level="Lead",
        job_type="Permanent",
        description="",
    )
    db.add(job)
    await db.commit()

    assert (await client.get(f"/api/jobs/{job.id}")).status_code == 403
    assert (await client.delete(f"/api/jobs/{job.id}")).status_code == 403


@pytest.mark.asyncio
async def test_update_job_partially(client: AsyncClient, test_job: JobPosting):
    response = await client.put(f"/api/jobs/{test_job.id}", json={
        "title": "",
        "location": "Remote",
        "workPolicy": "Remote",
        "salaryRange": None,
        "description": '<p data-start="0">Keep it all <b>running</b></p><script>boom()</script>',
    })
    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "Platform Engineer"
    assert data["location"] == "Remote"
    assert data["workPolicy"] == "Remote"
    assert data["salaryRange"] is None
    assert "<script" not in data["description"]
    assert "data-start" not in data["description"]
    assert data["slug"] == "platform-engineer"


@pytest.mark.asyncio
async def test_update_job_rejects_bad_enum(client: AsyncClient, test_job: JobPosting):
    response = await client.put(f"/api/jobs/{test_job.id}", json={"employmentType": "Gig"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_delete_job(client: AsyncClient, test_company: Company, test_job: JobPosting):
    response = await client.delete(f"/api/jobs/{test_job.id}")
    assert response.status_code == 204

    assert (await client.get(f"/api/jobs/{test_job.id}")).status_code == 404
    jobs = (await client.get(f"/api/companies/{test_company.id}/jobs")).json()
    assert jobs == []
