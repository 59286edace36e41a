"""
Artifact persistence (raw SQL).

Every function is a single statement, so each call is one store round trip
and row-level atomicity comes from Postgres itself.
"""

from __future__ import annotations

import json

from core import db

ARTIFACT_COLUMNS = (
    "id, name, image, type, historical_context, created_at, discovered_at, "
    "discovered_by, present_location, added_by_email, likes, liked_by, extra"
)

# Columns `update_artifact` is allowed to write. Owner, id and like state
# are never in here.
MUTABLE_COLUMNS = frozenset(
    {
        "name",
        "image",
        "type",
        "historical_context",
        "created_at",
        "discovered_at",
        "discovered_by",
        "present_location",
    }
)

INSERTABLE_COLUMNS = MUTABLE_COLUMNS | {"added_by_email"}

# Compatible toggles: the counter moves on every call, the set only changes
# membership. Dislike is floored at zero to satisfy the CHECK constraint.
_LIKE_SQL = f"""
    UPDATE artifacts
    SET liked_by = CASE WHEN $2 = ANY(liked_by) THEN liked_by ELSE array_append(liked_by, $2) END,
        likes = likes + 1
    WHERE id = $1
    RETURNING {ARTIFACT_COLUMNS}
"""

_DISLIKE_SQL = f"""
    UPDATE artifacts
    SET liked_by = array_remove(liked_by, $2),
        likes = GREATEST(likes - 1, 0)
    WHERE id = $1
    RETURNING {ARTIFACT_COLUMNS}
"""

# Strict toggles: the counter is recomputed from the resulting set.
_LIKE_STRICT_SQL = f"""
    UPDATE artifacts
    SET liked_by = CASE WHEN $2 = ANY(liked_by) THEN liked_by ELSE array_append(liked_by, $2) END,
        likes = cardinality(CASE WHEN $2 = ANY(liked_by) THEN liked_by ELSE array_append(liked_by, $2) END)
    WHERE id = $1
    RETURNING {ARTIFACT_COLUMNS}
"""

_DISLIKE_STRICT_SQL = f"""
    UPDATE artifacts
    SET liked_by = array_remove(liked_by, $2),
        likes = cardinality(array_remove(liked_by, $2))
    WHERE id = $1
    RETURNING {ARTIFACT_COLUMNS}
"""

_TOGGLE_SQL = {
    ("like", False): _LIKE_SQL,
    ("dislike", False): _DISLIKE_SQL,
    ("like", True): _LIKE_STRICT_SQL,
    ("dislike", True): _DISLIKE_STRICT_SQL,
}


async def list_artifacts() -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {ARTIFACT_COLUMNS}
        FROM artifacts
        ORDER BY inserted_at ASC, id ASC
        """
    )


async def list_top_artifacts(limit: int) -> list[dict]:
    """
    Top-k by likes. Ties come back in whatever order the planner picks.
    """
    return await db.fetch_all(
        f"""
        SELECT {ARTIFACT_COLUMNS}
        FROM artifacts
        ORDER BY likes DESC
        LIMIT $1
        """,
        limit,
    )


async def get_artifact(artifact_id: str) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {ARTIFACT_COLUMNS}
        FROM artifacts
        WHERE id = $1
        """,
        artifact_id,
    )


async def list_artifacts_by_owner(email: str) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {ARTIFACT_COLUMNS}
        FROM artifacts
        WHERE added_by_email = $1
        ORDER BY inserted_at ASC, id ASC
        """,
        email,
    )


async def list_artifacts_liked_by(email: str) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {ARTIFACT_COLUMNS}
        FROM artifacts
        WHERE liked_by @> ARRAY[$1]::text[]
        ORDER BY inserted_at ASC, id ASC
        """,
        email,
    )


async def insert_artifact(values: dict[str, str | None], *, extra: dict | None = None) -> str:
    """
    Insert a new artifact and return the store-assigned id.

    `likes` and `liked_by` always start from their column defaults.
    """
    unknown = set(values) - INSERTABLE_COLUMNS
    if unknown:
        raise ValueError(f"Not insertable: {sorted(unknown)}")

    columns = sorted(values)
    placeholders = [f"${i}" for i in range(1, len(columns) + 1)]
    columns.append("extra")
    placeholders.append(f"${len(placeholders) + 1}::jsonb")
    args = [values[c] for c in columns[:-1]]
    args.append(json.dumps(extra or {}, ensure_ascii=True))

    row = await db.fetch_one(
        f"""
        INSERT INTO artifacts ({", ".join(columns)})
        VALUES ({", ".join(placeholders)})
        RETURNING id
        """,
        *args,
    )
    if row is None:
        raise RuntimeError("Failed to insert artifact.")
    return str(row["id"])


async def update_artifact(artifact_id: str, values: dict[str, str | None]) -> int:
    """
    Overwrite the given mutable columns. Returns the matched row count.
    """
    unknown = set(values) - MUTABLE_COLUMNS
    if unknown:
        raise ValueError(f"Not updatable: {sorted(unknown)}")
    if not values:
        row = await db.fetch_one("SELECT 1 AS ok FROM artifacts WHERE id = $1", artifact_id)
        return 1 if row is not None else 0

    columns = sorted(values)
    assignments = ", ".join(f"{c} = ${i}" for i, c in enumerate(columns, start=2))
    status_tag = await db.execute(
        f"""
        UPDATE artifacts
        SET {assignments}
        WHERE id = $1
        """,
        artifact_id,
        *[values[c] for c in columns],
    )
    return db.affected_rows(status_tag)


async def delete_artifact(artifact_id: str) -> int:
    status_tag = await db.execute("DELETE FROM artifacts WHERE id = $1", artifact_id)
    return db.affected_rows(status_tag)


async def toggle_like(artifact_id: str, *, email: str, action: str, strict: bool = False) -> dict | None:
    """
    Apply a like/dislike in one UPDATE and return the row as it is afterwards.
    """
    sql = _TOGGLE_SQL.get((action, strict))
    if sql is None:
        raise ValueError(f"Unknown like action: {action!r}")
    return await db.fetch_one(sql, artifact_id, email)
