import os
import tempfile

import pytest

# banco de testes isolado (sqlite em arquivo temporario): precisa estar no env
# antes do primeiro import de app.*
_DB_DIR = tempfile.mkdtemp(prefix="financas-tests-")
os.environ["FINANCAS_DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ.setdefault("FINANCAS_ENV", "lab")

from fastapi.testclient import TestClient  # noqa: E402


def _import_all_models():
    # Import explícito dos models para registrar no SQLAlchemy metadata
    # (sem isso, create_all() cria 0 tabelas e os testes quebram)
    import app.models.user  # noqa: F401
    import app.models.account  # noqa: F401
    import app.models.category  # noqa: F401
    import app.models.transaction  # noqa: F401
    import app.models.audit  # noqa: F401


# Banco e temporario: cada teste comeca com as tabelas vazias.
@pytest.fixture(autouse=True)
def _fresh_schema():
    from app.db import Base, engine

    _import_all_models()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    from app.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def db():
    from app.db import SessionLocal

    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def make_user(client):
    seq = iter(range(1, 10_000))

    def _make(username: str | None = None, email: str | None = None, **extra) -> dict:
        n = next(seq)
        payload = {
            "username": username or f"user{n}",
            "email": email or f"user{n}@teste.com",
            **extra,
        }
        resp = client.post("/users", json=payload)
        assert resp.status_code == 200, resp.text
        return resp.json()

    return _make


@pytest.fixture
def make_account(client, make_user):
    def _make(balance: float = 0, user_id: int | None = None, name: str = "Conta corrente") -> dict:
        if user_id is None:
            user_id = make_user()["id"]
        resp = client.post("/accounts", json={"user_id": user_id, "name": name, "balance": balance})
        assert resp.status_code == 200, resp.text
        return resp.json()

    return _make


@pytest.fixture
def make_category(client):
    def _make(name: str) -> dict:
        resp = client.post("/categories", json={"name": name})
        assert resp.status_code == 200, resp.text
        return resp.json()

    return _make


@pytest.fixture
def balance_of(client):
    def _balance(account_id: int) -> float:
        resp = client.get("/accounts")
        assert resp.status_code == 200
        match = [a for a in resp.json() if a["id"] == account_id]
        assert match, f"conta {account_id} nao listada"
        return match[0]["balance"]

    return _balance
