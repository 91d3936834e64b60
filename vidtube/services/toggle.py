from __future__ import annotations

import logging
from typing import Callable

from sqlalchemy import delete, exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


def toggle_row(db: Session, model, criteria: list, factory: Callable[[], object]) -> bool:
    """
    Delete-or-insert the row matching criteria; returns True when the row now exists.

    The delete is a single statement, so two concurrent "off" requests cannot
    both succeed. Two concurrent "on" requests both insert and the unique
    constraint on the model rejects the second; that request reports True
    because the row is there.
    """
    removed = db.execute(
        delete(model).where(*criteria).execution_options(synchronize_session=False)
    ).rowcount
    if removed:
        db.commit()
        return False

    db.add(factory())
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        if db.scalar(select(exists().where(*criteria))):
            logger.info(f"{model.__tablename__}: concurrent insert won, keeping existing row")
            return True
        raise
    return True
