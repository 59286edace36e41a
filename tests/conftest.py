from __future__ import annotations

import json
import secrets

import pytest
from fastapi.testclient import TestClient

from artifacts import repository
from auth import security
from core import db

TEST_SECRET = "test-secret-for-antiquify"


@pytest.fixture(autouse=True)
def auth_env(monkeypatch):
    monkeypatch.setenv("ACCESS_TOKEN_SECRET", TEST_SECRET)
    monkeypatch.delenv("LIKES_STRICT", raising=False)
    monkeypatch.delenv("APP_ENV", raising=False)


class FakeArtifactStore:
    """
    In-memory stand-in for `artifacts.repository` with the same call
    signatures and the same row shape the SQL returns.
    """

    def __init__(self) -> None:
        self.rows: dict[str, dict] = {}
        self.calls: list[str] = []

    def seed(self, **values) -> str:
        artifact_id = secrets.token_hex(12)
        row = {column: None for column in repository.INSERTABLE_COLUMNS}
        row.update(
            id=artifact_id,
            likes=values.pop("likes", 0),
            liked_by=list(values.pop("liked_by", [])),
            extra=json.dumps(values.pop("extra", {})),
        )
        row.update(values)
        self.rows[artifact_id] = row
        return artifact_id

    def _copy(self, row: dict) -> dict:
        return {**row, "liked_by": list(row["liked_by"])}

    async def list_artifacts(self) -> list[dict]:
        self.calls.append("list_artifacts")
        return [self._copy(r) for r in self.rows.values()]

    async def list_top_artifacts(self, limit: int) -> list[dict]:
        self.calls.append("list_top_artifacts")
        ordered = sorted(self.rows.values(), key=lambda r: r["likes"], reverse=True)
        return [self._copy(r) for r in ordered[:limit]]

    async def get_artifact(self, artifact_id: str) -> dict | None:
        self.calls.append("get_artifact")
        row = self.rows.get(artifact_id)
        return self._copy(row) if row is not None else None

    async def list_artifacts_by_owner(self, email: str) -> list[dict]:
        self.calls.append("list_artifacts_by_owner")
        return [self._copy(r) for r in self.rows.values() if r["added_by_email"] == email]

    async def list_artifacts_liked_by(self, email: str) -> list[dict]:
        self.calls.append("list_artifacts_liked_by")
        return [self._copy(r) for r in self.rows.values() if email in r["liked_by"]]

    async def insert_artifact(self, values: dict, *, extra: dict | None = None) -> str:
        self.calls.append("insert_artifact")
        return self.seed(**values, extra=extra or {})

    async def update_artifact(self, artifact_id: str, values: dict) -> int:
        self.calls.append("update_artifact")
        assert set(values) <= repository.MUTABLE_COLUMNS
        row = self.rows.get(artifact_id)
        if row is None:
            return 0
        row.update(values)
        return 1

    async def delete_artifact(self, artifact_id: str) -> int:
        self.calls.append("delete_artifact")
        return 1 if self.rows.pop(artifact_id, None) is not None else 0

    async def toggle_like(self, artifact_id: str, *, email: str, action: str, strict: bool = False) -> dict | None:
        self.calls.append("toggle_like")
        row = self.rows.get(artifact_id)
        if row is None:
            return None
        if action == "like":
            if email not in row["liked_by"]:
                row["liked_by"].append(email)
            row["likes"] = len(row["liked_by"]) if strict else row["likes"] + 1
        elif action == "dislike":
            row["liked_by"] = [e for e in row["liked_by"] if e != email]
            row["likes"] = len(row["liked_by"]) if strict else max(row["likes"] - 1, 0)
        else:
            raise ValueError(action)
        return self._copy(row)


@pytest.fixture()
def store(monkeypatch) -> FakeArtifactStore:
    fake = FakeArtifactStore()
    for name in (
        "list_artifacts",
        "list_top_artifacts",
        "get_artifact",
        "list_artifacts_by_owner",
        "list_artifacts_liked_by",
        "insert_artifact",
        "update_artifact",
        "delete_artifact",
        "toggle_like",
    ):
        monkeypatch.setattr(repository, name, getattr(fake, name))
    return fake


@pytest.fixture()
def client(store, monkeypatch):
    async def _noop() -> None:
        return None

    monkeypatch.setattr(db, "init_pool", _noop)
    monkeypatch.setattr(db, "close_pool", _noop)

    from main import app

    with TestClient(app) as test_client:
        yield test_client


def make_token(email: str, **extra) -> str:
    return security.build_access_token({"email": email, **extra})


@pytest.fixture()
def token_for():
    return make_token
