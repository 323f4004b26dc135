import json
import sqlite3
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from src.core.ports.db import PageStoreError
from src.domain.entities import BioInfo, Link, Page, SocialLink


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


class SQLitePageRepo:
    """
    Page store on SQLite.

    id is the primary key, so a plain INSERT is insert-if-absent.
    Updates are conditional on the version column.
    """

    def __init__(self, db_path: str, *, timeout: float = 10.0):
        self.db_path = db_path
        self.timeout = timeout

    def _get_conn(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(self.db_path, timeout=self.timeout)
        except sqlite3.Error as e:
            raise PageStoreError(f"Cannot open page store: {e}") from e
        conn.row_factory = dict_factory
        return conn

    @staticmethod
    def _row_values(page: Page) -> dict[str, Any]:
        return {
            "id": page.id,
            "owner": page.owner,
            "bio_info": page.bio_info.model_dump_json(),
            "links": json.dumps([link.model_dump() for link in page.links]),
            "social_media_links": json.dumps([s.model_dump() for s in page.social_media_links]),
            "page_colors": json.dumps(page.page_colors) if page.page_colors is not None else None,
            "created_at": page.created_at.isoformat(),
            "verified": 1 if page.verified else 0,
            "version": page.version,
            "renaming_to": page.renaming_to,
            "moved": 1 if page.moved else 0,
            "renamed_from": page.renamed_from,
        }

    @staticmethod
    def _map_row(row: dict[str, Any]) -> Page:
        try:
            return SQLitePageRepo._decode_row(row)
        except (ValueError, TypeError, KeyError, ValidationError) as e:
            # json.JSONDecodeError is a ValueError
            raise PageStoreError(f"Corrupt page record {row.get('id')!r}: {e}") from e

    @staticmethod
    def _decode_row(row: dict[str, Any]) -> Page:
        return Page(
            id=row["id"],
            owner=row["owner"],
            bio_info=BioInfo.model_validate_json(row["bio_info"]),
            links=[Link.model_validate(item) for item in json.loads(row["links"])],
            social_media_links=[
                SocialLink.model_validate(item) for item in json.loads(row["social_media_links"])
            ],
            page_colors=json.loads(row["page_colors"]) if row["page_colors"] else None,
            created_at=datetime.fromisoformat(row["created_at"]),
            verified=bool(row["verified"]),
            version=row["version"],
            renaming_to=row["renaming_to"],
            moved=bool(row["moved"]),
            renamed_from=row["renamed_from"],
        )

    def _get_one(self, query: str, params: tuple[Any, ...]) -> Page | None:
        conn = self._get_conn()
        try:
            row = conn.execute(query, params).fetchone()
        except sqlite3.Error as e:
            raise PageStoreError(f"Page query failed: {e}") from e
        finally:
            conn.close()
        return self._map_row(row) if row else None

    def get(self, page_id: str) -> Page | None:
        return self._get_one("SELECT * FROM pages WHERE id = ?", (page_id,))

    def get_owned(self, page_id: str, owner: str) -> Page | None:
        return self._get_one("SELECT * FROM pages WHERE id = ? AND owner = ?", (page_id, owner))

    def insert(self, page: Page) -> bool:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO pages (
                    id, owner, bio_info, links, social_media_links, page_colors,
                    created_at, verified, version, renaming_to, moved, renamed_from
                ) VALUES (
                    :id, :owner, :bio_info, :links, :social_media_links, :page_colors,
                    :created_at, :verified, :version, :renaming_to, :moved, :renamed_from
                )
            """,
                self._row_values(page),
            )
            conn.commit()
            return True
        except sqlite3.IntegrityError:
            # Primary key on id: someone already holds this id
            conn.rollback()
            return False
        except sqlite3.Error as e:
            conn.rollback()
            raise PageStoreError(f"Page insert failed: {e}") from e
        finally:
            conn.close()

    def compare_and_swap(self, page: Page, expected_version: int) -> Page | None:
        stored = page.model_copy(update={"version": expected_version + 1})
        values = self._row_values(stored)
        values["expected_version"] = expected_version

        conn = self._get_conn()
        try:
            cursor = conn.execute(
                """
                UPDATE pages SET
                    bio_info = :bio_info,
                    links = :links,
                    social_media_links = :social_media_links,
                    page_colors = :page_colors,
                    verified = :verified,
                    version = :version,
                    renaming_to = :renaming_to,
                    moved = :moved,
                    renamed_from = :renamed_from
                WHERE id = :id AND owner = :owner AND version = :expected_version
            """,
                values,
            )
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise PageStoreError(f"Page update failed: {e}") from e
        finally:
            conn.close()

        return stored if cursor.rowcount == 1 else None

    def delete(self, page_id: str, owner: str, expected_version: int | None = None) -> bool:
        query = "DELETE FROM pages WHERE id = ? AND owner = ?"
        params: tuple[Any, ...] = (page_id, owner)
        if expected_version is not None:
            query += " AND version = ?"
            params += (expected_version,)

        conn = self._get_conn()
        try:
            cursor = conn.execute(query, params)
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise PageStoreError(f"Page delete failed: {e}") from e
        finally:
            conn.close()
        return cursor.rowcount == 1

    def list_by_owner(self, owner: str) -> list[Page]:
        conn = self._get_conn()
        try:
            rows = conn.execute(
                "SELECT * FROM pages WHERE owner = ? ORDER BY created_at ASC", (owner,)
            ).fetchall()
        except sqlite3.Error as e:
            raise PageStoreError(f"Page scan failed: {e}") from e
        finally:
            conn.close()
        return [self._map_row(r) for r in rows]
