"""Generic CRUD over the shared store handle.

Every entity service builds on these so not-found and constraint failures
surface the same way: as StoreError, with the session rolled back.
"""
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import StoreError

logger = logging.getLogger(__name__)


def _label(model) -> str:
    return getattr(model, "__label__", model.__name__)


def commit(db: Session, action: str) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise StoreError(StoreError.CONSTRAINT, f"Could not {action}: constraint violated ({exc.orig}).") from exc
    except OverflowError as exc:
        # the driver refuses integers wider than 64 bits
        db.rollback()
        raise StoreError(StoreError.CONSTRAINT, f"Could not {action}: value out of range ({exc}).") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreError(StoreError.CONNECTION, f"Could not {action}: {exc}") from exc


def create(db: Session, model, **fields):
    obj = model(**fields)
    db.add(obj)
    commit(db, f"create {_label(model).lower()}")
    db.refresh(obj)
    logger.info("Created %s id=%s", _label(model), obj.id)
    return obj


def find(db: Session, model, obj_id: int):
    return db.get(model, obj_id)


def get_by_id(db: Session, model, obj_id: int):
    obj = find(db, model, obj_id)
    if obj is None:
        raise StoreError.not_found(_label(model), obj_id)
    return obj


def exists(db: Session, model, obj_id: int) -> bool:
    return find(db, model, obj_id) is not None


def list_all(db: Session, model) -> list:
    return db.query(model).order_by(model.id.asc()).all()


def count(db: Session, model) -> int:
    return db.query(model).count()


def update(db: Session, model, obj_id: int, **fields):
    obj = get_by_id(db, model, obj_id)
    for name, value in fields.items():
        setattr(obj, name, value)
    commit(db, f"update {_label(model).lower()} {obj_id}")
    db.refresh(obj)
    logger.info("Updated %s id=%s", _label(model), obj_id)
    return obj


def delete(db: Session, model, obj_id: int) -> None:
    obj = get_by_id(db, model, obj_id)
    db.delete(obj)
    commit(db, f"delete {_label(model).lower()} {obj_id}")
    logger.info("Deleted %s id=%s", _label(model), obj_id)
