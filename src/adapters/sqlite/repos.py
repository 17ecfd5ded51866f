import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any

from src.core.entities import BusinessCard, CardView, Template
from src.core.errors import CardNotFound, StoreUnavailable

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


class _SQLiteStore:
    store_name = "store"

    def __init__(self, db_path: str, timeout: float = DEFAULT_TIMEOUT_SECONDS):
        self.db_path = db_path
        self.timeout = timeout

    @contextmanager
    def _conn(self) -> Iterator[sqlite3.Connection]:
        """
        Open a connection; lock timeouts and unreachable files surface as
        StoreUnavailable. Commits on success, rolls back on error.
        """
        try:
            conn = sqlite3.connect(self.db_path, timeout=self.timeout)
        except sqlite3.Error as e:
            raise StoreUnavailable(self.store_name, str(e)) from e
        conn.row_factory = dict_factory
        try:
            conn.execute("PRAGMA foreign_keys = ON;")
            yield conn
            conn.commit()
        except sqlite3.OperationalError as e:
            conn.rollback()
            logger.error("%s operation failed: %s", self.store_name, e)
            raise StoreUnavailable(self.store_name, str(e)) from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()


class SQLiteTemplateStore(_SQLiteStore):
    store_name = "template store"

    def get_template(self, template_id: str) -> Template | None:
        with self._conn() as conn:
            row = conn.execute(
                "SELECT data_json FROM templates WHERE id = ?", (template_id,)
            ).fetchone()
        if row is None:
            return None
        return Template.model_validate_json(row["data_json"])

    def save_template(self, template: Template) -> Template:
        with self._conn() as conn:
            conn.execute(
                """
                INSERT INTO templates (id, name, data_json, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    name=excluded.name,
                    data_json=excluded.data_json,
                    updated_at=excluded.updated_at
            """,
                (
                    template.id,
                    template.name,
                    template.model_dump_json(),
                    datetime.now(UTC).isoformat(),
                ),
            )
        return template


class SQLiteCardStore(_SQLiteStore):
    store_name = "card store"

    def get_card(self, card_id: str) -> BusinessCard | None:
        with self._conn() as conn:
            return self._load(conn, card_id)

    def _load(self, conn: sqlite3.Connection, card_id: str) -> BusinessCard | None:
        row = conn.execute(
            "SELECT data_json FROM business_cards WHERE id = ?", (card_id,)
        ).fetchone()
        if row is None:
            return None
        return BusinessCard.model_validate_json(row["data_json"])

    def _write(self, conn: sqlite3.Connection, card: BusinessCard) -> None:
        conn.execute(
            """
            INSERT INTO business_cards (
                id, user_id, name, template_id, data_json, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                user_id=excluded.user_id,
                name=excluded.name,
                template_id=excluded.template_id,
                data_json=excluded.data_json,
                updated_at=excluded.updated_at
        """,
            (
                card.id,
                card.user_id,
                card.name,
                card.template_id,
                card.model_dump_json(),
                card.created_at.isoformat(),
                card.updated_at.isoformat(),
            ),
        )

    def save_card(self, card: BusinessCard) -> BusinessCard:
        with self._conn() as conn:
            self._write(conn, card)
        return card

    def update_card(self, card_id: str, patch: dict[str, Any]) -> None:
        with self._conn() as conn:
            card = self._load(conn, card_id)
            if card is None:
                raise CardNotFound(card_id)
            data = {**card.model_dump(), **patch, "updated_at": datetime.now(UTC)}
            self._write(conn, BusinessCard.model_validate(data))

    def delete_card(self, card_id: str) -> None:
        # card_views rows go with it (ON DELETE CASCADE)
        with self._conn() as conn:
            conn.execute("DELETE FROM business_cards WHERE id = ?", (card_id,))

    def list_by_user(self, user_id: str) -> list[BusinessCard]:
        with self._conn() as conn:
            rows = conn.execute(
                "SELECT data_json FROM business_cards WHERE user_id = ? ORDER BY created_at",
                (user_id,),
            ).fetchall()
        return [BusinessCard.model_validate_json(r["data_json"]) for r in rows]


class SQLiteViewStore(_SQLiteStore):
    store_name = "view store"

    def append(self, view: CardView) -> None:
        with self._conn() as conn:
            conn.execute(
                """
                INSERT INTO card_views
                (id, card_id, card_name, viewer_ip, device_info, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
            """,
                (
                    view.id,
                    view.card_id,
                    view.card_name,
                    view.viewer_ip,
                    view.device_info,
                    view.created_at.isoformat(),
                ),
            )

    def list_for_card(self, card_id: str) -> list[CardView]:
        with self._conn() as conn:
            rows = conn.execute(
                "SELECT * FROM card_views WHERE card_id = ? ORDER BY created_at",
                (card_id,),
            ).fetchall()
        return [
            CardView(
                id=r["id"],
                card_id=r["card_id"],
                card_name=r["card_name"],
                viewer_ip=r["viewer_ip"],
                device_info=r["device_info"],
                created_at=datetime.fromisoformat(r["created_at"]),
            )
            for r in rows
        ]

    def delete_for_card(self, card_id: str) -> int:
        with self._conn() as conn:
            cursor = conn.execute("DELETE FROM card_views WHERE card_id = ?", (card_id,))
            return cursor.rowcount
