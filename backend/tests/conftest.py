# tests/conftest.py
import time
from datetime import date, timedelta

import httpx
import pytest
from jose import jwt

from passport.main import app
from passport.repositories import MemoryRepository, MemoryStore, SqlStore
from passport.seed import seed_education_modules
from passport.services.identity_service import IdentityVerifier, get_identity_verifier

SECRET = "test-secret"


def make_token(subject, role=None, email=None, secret=SECRET, expires_in=3600, **metadata):
    """Sign an HS256 token shaped like the identity provider's."""
    if role:
        metadata["role"] = role
    payload = {"sub": subject, "exp": int(time.time()) + expires_in, "user_metadata": metadata}
    if email:
        payload["email"] = email
    return jwt.encode(payload, secret, algorithm="HS256")


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


class Actor:
    """A provisioned user and the headers that authenticate as them."""

    def __init__(self, headers, user):
        self.headers = headers
        self.user = user
        self.id = user["id"]


async def login(client, subject, **claims) -> Actor:
    headers = bearer(make_token(subject, **claims))
    response = await client.get("/api/user", headers=headers)
    assert response.status_code == 200, response.text
    return Actor(headers, response.json())


@pytest.fixture
def verifier():
    return IdentityVerifier(jwt_secret=SECRET, algorithms=["HS256"])


@pytest.fixture
async def store():
    store = MemoryStore()
    async with store.repository() as repo:
        await seed_education_modules(repo)
    return store


@pytest.fixture
async def client(store, verifier):
    app.state.store = store
    app.dependency_overrides[get_identity_verifier] = lambda: verifier
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
async def clinician(client):
    return await login(client, "clinician-sub-0001", role="clinician", email="clin@example.org",
                       firstName="Casey", lastName="Nguyen")


@pytest.fixture
async def patient(client):
    return await login(client, "patient-sub-0001", email="pat@example.org", firstName="Pat", lastName="One")


@pytest.fixture
async def other_patient(client):
    return await login(client, "patient-sub-0002", email="other@example.org")


async def create_pregnancy(client, clinician, patient, weeks_along=20):
    start = date.today() - timedelta(weeks=weeks_along)
    response = await client.post("/api/pregnancy", headers=clinician.headers, json={
        "patientId": patient.id,
        "startDate": start.isoformat(),
        "dueDate": (start + timedelta(weeks=40)).isoformat(),
    })
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
async def pregnancy(client, clinician, patient):
    return await create_pregnancy(client, clinician, patient)


@pytest.fixture
async def other_pregnancy(client, clinician, other_patient):
    return await create_pregnancy(client, clinician, other_patient, weeks_along=30)


@pytest.fixture(params=["memory", "sqlite"])
async def repo(request):
    """A bare repository on each backend."""
    if request.param == "memory":
        yield MemoryRepository()
        return
    store = SqlStore("sqlite+aiosqlite:///:memory:")
    await store.create_all()
    async with store.repository() as repository:
        yield repository
    await store.dispose()
