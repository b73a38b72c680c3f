"""
Link directory: the storage engine for short code records.

Every public method runs in its own session and transaction, so a single
LinkDirectory can be shared by all request threads. Each mutation is one SQL
statement and the database serializes concurrent writers on the same row:

- put: INSERT guarded by the unique index on short_code
- record_click: UPDATE ... SET clicks = clicks + 1 ... RETURNING
- remove: DELETE, row count decides whether the code existed

Callers only ever receive LinkRecord snapshots, never ORM instances.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..core.errors import CodeConflict, LinkNotFound, StorageFailure
from ..database import SessionLocal
from ..models import Link
from ..models.link import new_link_id
from ..schemas.link import LinkRecord

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LinkDirectory:
    """Persistent mapping from short codes to link records"""

    def __init__(self, session_factory: sessionmaker = SessionLocal):
        self._session_factory = session_factory

    @contextmanager
    def _session(self, operation: str, code: Optional[str] = None):
        db: Session = self._session_factory()
        try:
            yield db
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Storage failure during %s (code=%s)", operation, code)
            raise StorageFailure(code=code) from e
        finally:
            db.close()

    def put(self, code: str, url: str) -> LinkRecord:
        """
        Insert a new record iff `code` is not already present.

        Raises:
            CodeConflict: The code is taken
            StorageFailure: Any other storage error
        """
        now = utcnow()
        link = Link(
            id=new_link_id(),
            short_code=code,
            original_url=url,
            clicks=0,
            last_clicked_at=None,
            created_at=now,
            updated_at=now
        )

        with self._session("put", code) as db:
            db.add(link)
            # Every column is set client-side, so the snapshot needs no refresh
            record = LinkRecord.model_validate(link)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                if self._exists(db, code):
                    raise CodeConflict(code=code) from e
                raise

            return record

    def get(self, code: str) -> LinkRecord:
        with self._session("get", code) as db:
            link = db.query(Link).filter(Link.short_code == code).first()

            if not link:
                raise LinkNotFound(code=code)

            return LinkRecord.model_validate(link)

    def list_all(self, search: Optional[str] = None) -> List[LinkRecord]:
        """
        Return every record, newest first.

        Args:
            search: Optional case-insensitive substring of the code or URL
        """
        with self._session("list_all") as db:
            query = db.query(Link)

            if search:
                needle = search.lower()
                query = query.filter(
                    (func.lower(Link.short_code).contains(needle, autoescape=True)) |
                    (func.lower(Link.original_url).contains(needle, autoescape=True))
                )

            links = query.order_by(Link.created_at.desc()).all()

            return [LinkRecord.model_validate(link) for link in links]

    def record_click(self, code: str) -> LinkRecord:
        """
        Count one click and return the updated record in a single statement.

        Raises:
            LinkNotFound: No record for `code`
        """
        now = utcnow()
        stmt = (
            update(Link)
            .where(Link.short_code == code)
            .values(
                clicks=Link.clicks + 1,
                last_clicked_at=now,
                updated_at=now
            )
            .returning(Link)
        )

        with self._session("record_click", code) as db:
            link = db.scalars(stmt).first()

            if link is None:
                db.rollback()
                raise LinkNotFound(code=code)

            record = LinkRecord.model_validate(link)
            db.commit()

            return record

    def remove(self, code: str) -> None:
        """
        Delete the record for `code`, freeing the code for reuse.

        Raises:
            LinkNotFound: No record for `code`
        """
        with self._session("remove", code) as db:
            deleted = (
                db.query(Link)
                .filter(Link.short_code == code)
                .delete(synchronize_session=False)
            )

            if not deleted:
                db.rollback()
                raise LinkNotFound(code=code)

            db.commit()

    @staticmethod
    def _exists(db: Session, code: str) -> bool:
        return db.query(Link.id).filter(Link.short_code == code).first() is not None
