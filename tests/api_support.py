"""TestClient wiring: the real app over a fresh in-memory SQLite database per test case."""

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_email_sender, get_profile_cache
from app.core.database import get_db
from app.core.security import hash_password
from app.main import app
from app.models import Base, User
from tests.fakes import DictProfileCache, RecordingMailer

API = "/api/v1"


class ApiHarness:
    """Owns the engine, overrides and fakes for one test; call close() in tearDown."""

    def __init__(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        self.mailer = RecordingMailer()
        self.cache = DictProfileCache()

        def override_get_db():
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_email_sender] = lambda: self.mailer
        app.dependency_overrides[get_profile_cache] = lambda: self.cache
        self.client = TestClient(app)

    def close(self) -> None:
        self.client.close()
        app.dependency_overrides.clear()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()

    def new_client(self) -> TestClient:
        """A second client with its own cookie jar."""
        return TestClient(app)

    def create_user(self, email: str, password: str, *, name: str = "user", role: str = "USER") -> str:
        db = self.SessionLocal()
        try:
            user = User(name=name, email=email, password_hash=hash_password(password), role=role)
            db.add(user)
            db.commit()
            return user.id
        finally:
            db.close()

    def login(self, email: str, password: str, client: TestClient | None = None) -> dict:
        resp = (client or self.client).post(
            f"{API}/users/login", json={"email": email, "password": password}
        )
        assert resp.status_code == 200, resp.text
        return resp.json()["data"]
