import os
import tempfile

os.environ["DATABASE_URL"] = "mongodb://localhost:27017"
os.environ["DATABASE_NAME"] = "experiences_test"
os.environ["JWT_SECRET"] = "test-secret-0123456789abcdef0123456789"
os.environ["APP_ENV"] = "development"
os.environ["UPLOADS_DIR"] = tempfile.mkdtemp(prefix="uploads-")
for name in ("ADMIN_USERNAME", "ADMIN_PASSWORD", "FRONTEND_ORIGIN"):
    os.environ.pop(name, None)

import mongomock  # noqa: E402
import pymongo  # noqa: E402

# database.py connects at import time; hand it an in-memory server instead
pymongo.MongoClient = mongomock.MongoClient

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

import database  # noqa: E402
import main  # noqa: E402
from schemas import Admin, Provider, Role, Tourist  # noqa: E402
from security import create_token, hash_password  # noqa: E402
from storage import LocalDiskStorage  # noqa: E402
from tests.helpers import auth  # noqa: E402


@pytest.fixture(autouse=True)
def clean_db():
    yield
    for name in database.db.list_collection_names():
        database.db[name].delete_many({})


@pytest.fixture
def db():
    return database.db


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "Uploads"


@pytest.fixture
def client(upload_dir):
    store = LocalDiskStorage(str(upload_dir))
    main.app.dependency_overrides[main.get_storage] = lambda: store
    yield TestClient(main.app)
    main.app.dependency_overrides.clear()


@pytest.fixture
def make_tourist():
    def _make(email="nimal@gmail.com", password="secret123", **overrides):
        tourist = Tourist(
            fullName=overrides.get("fullName", "Nimal Perera"),
            email=email,
            password=hash_password(password),
            country=overrides.get("country", "Sri Lanka"),
        )
        return database.create_document("tourist", tourist)

    return _make


@pytest.fixture
def make_provider():
    def _make(email="safari@gmail.com", password="secret123", price=20.0, approved=True):
        provider = Provider(
            serviceName="Yala Jeep Safari",
            fullName="Kamal Silva",
            email=email,
            contact="0771234567",
            category="Jeep Safari",
            location="Tissamaharama",
            price=price,
            description="Half-day safari in Yala",
            password=hash_password(password),
            approved=approved,
            profilePicture="/Uploads/profile.png",
            photos=["/Uploads/photo.png"],
        )
        return database.create_document("provider", provider)

    return _make


@pytest.fixture
def admin_token():
    admin_id = database.create_document("admin", Admin(username="admin", password=hash_password("adminpass")))
    return create_token(admin_id, Role.ADMIN)


@pytest.fixture
def admin_headers(admin_token):
    return auth(admin_token)
