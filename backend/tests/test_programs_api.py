"""
Integration tests for the loyalty program store (/api/v1/programs).
"""

import sys
import unittest
from pathlib import Path

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool


# Ensure backend/ and the repository root are on sys.path
REPO_ROOT = Path(__file__).resolve().parents[2]
BACKEND_DIR = REPO_ROOT / "backend"
sys.path.insert(0, str(BACKEND_DIR))
sys.path.insert(0, str(REPO_ROOT))

from app.db.db import Base
from app.dependencies.db import get_db
from app.main import app


class TestProgramsAPI(unittest.TestCase):
    """CRUD over stored programs"""

    def setUp(self):
        engine = create_engine(
            "sqlite:///:memory:",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(bind=engine)
        self.Session = sessionmaker(bind=engine)

        def override_get_db():
            db = self.Session()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def _add(self, name="Chase Ultimate Rewards", type_="card", balance=100000, **extra):
        return self.client.post(
            "/api/v1/programs",
            json={"name": name, "type": type_, "balance": balance, **extra},
        )

    def test_create_and_list(self):
        response = self._add(expiry="2027-06-30")
        self.assertEqual(response.status_code, 201, response.text)
        created = response.json()
        self.assertEqual(created["name"], "Chase Ultimate Rewards")
        self.assertEqual(created["type"], "card")
        self.assertEqual(created["expiry"], "2027-06-30")

        listed = self.client.get("/api/v1/programs").json()["programs"]
        self.assertEqual([p["id"] for p in listed], [created["id"]])

    def test_duplicate_name_rejected(self):
        self._add()
        response = self._add(balance=5)

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error"]["code"], "PROGRAM_EXISTS")

    def test_invalid_type_is_validation_error(self):
        response = self._add(type_="bank")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"]["code"], "VALIDATION_ERROR")

    def test_negative_balance_rejected(self):
        response = self._add(balance=-1)
        self.assertEqual(response.status_code, 400)

    def test_update_balance(self):
        program_id = self._add().json()["id"]

        response = self.client.put(f"/api/v1/programs/{program_id}", json={"balance": 150000})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["balance"], 150000)
        self.assertEqual(response.json()["type"], "card")

    def test_delete_then_missing(self):
        program_id = self._add().json()["id"]

        self.assertEqual(self.client.delete(f"/api/v1/programs/{program_id}").status_code, 204)

        response = self.client.delete(f"/api/v1/programs/{program_id}")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error"]["code"], "NOT_FOUND")

    def test_update_with_null_balance_or_type_rejected(self):
        program_id = self._add().json()["id"]

        for payload in ({"balance": None}, {"type": None}):
            response = self.client.put(f"/api/v1/programs/{program_id}", json=payload)
            self.assertEqual(response.status_code, 400, response.text)
            self.assertEqual(response.json()["error"]["code"], "VALIDATION_ERROR")

        program = self.client.get("/api/v1/programs").json()["programs"][0]
        self.assertEqual(program["balance"], 100000)
        self.assertEqual(program["type"], "card")

    def test_update_can_clear_expiry(self):
        program_id = self._add(expiry="2027-06-30").json()["id"]

        response = self.client.put(f"/api/v1/programs/{program_id}", json={"expiry": None})

        self.assertEqual(response.status_code, 200, response.text)
        self.assertIsNone(response.json()["expiry"])

    def test_update_missing_program(self):
        response = self.client.put("/api/v1/programs/999", json={"balance": 1})
        self.assertEqual(response.status_code, 404)


if __name__ == "__main__":
    unittest.main()
