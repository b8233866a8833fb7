"""
Pytest fixtures for testing.
"""
import secrets
from datetime import datetime, timedelta
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Import database module BEFORE app to allow override
import careerpage.database
from careerpage.database import Base
# Import ALL models so Base.metadata knows about all tables
from careerpage.models import AdminUser, AuthSession, Company, JobPosting
from careerpage.schemas.company import BrandConfig, default_page_sections
from careerpage.services.auth import SESSION_COOKIE, hash_password

# Now import app (after we can override database)
from careerpage.main import app as fastapi_app


# Test database URL (use in-memory SQLite for fast tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_PASSWORD = "correct-horse"


@pytest_asyncio.fixture
async def db() -> AsyncGenerator[AsyncSession, None]:
    """
    Create a fresh database for each test.
    Ensures cleanup happens even if test fails.
    """
    # StaticPool keeps a single connection alive so every session sees
    # the same in-memory database
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # Replace the app's engine and sessionmaker so get_db() uses the test DB
    original_engine = careerpage.database.engine
    original_sessionmaker = careerpage.database.AsyncSessionLocal

    careerpage.database.engine = test_engine
    careerpage.database.AsyncSessionLocal = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )

    async_session = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )
    session = async_session()

    try:
        yield session
    finally:
        await session.close()
        async with test_engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        await test_engine.dispose()

        careerpage.database.engine = original_engine
        careerpage.database.AsyncSessionLocal = original_sessionmaker


@pytest.fixture
def no_db():
    """Run the app as if DATABASE_URL were unset: reads use sample data."""
    original_sessionmaker = careerpage.database.AsyncSessionLocal
    careerpage.database.AsyncSessionLocal = None
    yield
    careerpage.database.AsyncSessionLocal = original_sessionmaker


@pytest_asyncio.fixture
async def async_client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Create an async HTTP client for testing endpoints.

    The db fixture already replaced careerpage.database.AsyncSessionLocal,
    so all endpoints will automatically use the test database.
    """
    transport = ASGITransport(app=fastapi_app)

    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def sample_client(no_db) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for an app with no database configured."""
    transport = ASGITransport(app=fastapi_app)

    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def test_company(db: AsyncSession) -> Company:
    company = Company(
        name="Globex",
        slug="globex",
        brand_config=BrandConfig(primary_color="#111827", secondary_color="#f59e0b"),
        page_sections=default_page_sections(),
    )
    db.add(company)
    await db.commit()
    await db.refresh(company)
    return company


@pytest_asyncio.fixture
async def test_admin(db: AsyncSession, test_company: Company) -> AdminUser:
    """Confirmed admin who manages test_company."""
    admin = AdminUser(
        email="admin@globex.com",
        full_name="Hank Scorpio",
        company=test_company,
        password_hash=hash_password(TEST_PASSWORD),
        email_confirmed_at=datetime.utcnow(),
        failed_login_attempts=0,
    )
    db.add(admin)
    await db.commit()
    return admin


async def start_session(db: AsyncSession, admin: AdminUser) -> str:
    token = secrets.token_urlsafe(32)
    db.add(AuthSession(
        token=token,
        user_id=admin.id,
        expires_at=datetime.utcnow() + timedelta(days=1),
    ))
    await db.commit()
    return token


@pytest_asyncio.fixture
async def client(async_client: AsyncClient, db: AsyncSession, test_admin: AdminUser) -> AsyncClient:
    """Authenticated client with the session token in the httpOnly cookie."""
    async_client.cookies.set(SESSION_COOKIE, await start_session(db, test_admin))
    return async_client


@pytest_asyncio.fixture
async def test_job(db: AsyncSession, test_company: Company) -> JobPosting:
    job = JobPosting(
        company_id=test_company.id,
        title="Platform Engineer",
        slug="platform-engineer",
        location="Cypress Creek",
        work_policy="On-site",
        department="Engineering",
        employment_type="Full-time",
        experience_level="Senior",
        job_type="Permanent",
        salary_range="USD 150K-180K",
        description="<p>Keep the <strong>doomsday</strong> devices running.</p>",
        application_url="https://globex.example.com/apply/1",
        created_at=datetime.utcnow() - timedelta(days=3, hours=2),
    )
    db.add(job)
    await db.commit()
    await db.refresh(job)
    return job
