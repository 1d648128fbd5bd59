"""
Shared commit handling for repositories
"""
import logging

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from kds.exceptions import StoreError

logger = logging.getLogger(__name__)


class BaseRepository:
    """Holds the injected session and wraps commits in StoreError"""

    def __init__(self, db: Session):
        self.db = db

    def _commit(self, *instances) -> None:
        """
        Add instances, commit, then refresh them from the store

        Raises:
            StoreError: If the commit fails (the session is rolled back)
        """
        try:
            self.db.add_all(instances)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Store commit failed")
            raise StoreError(str(e)) from e

        for instance in instances:
            self.db.refresh(instance)
