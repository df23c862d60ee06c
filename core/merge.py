"""Partial-update merge engine.

A patch is a pydantic model whose *set* fields are the caller's proposed
changes. Only fields in the entity's allowed set are considered, and of those
only the ones whose value differs from the stored record are written. The
write is a single UPDATE statement, so an unchanged patch issues no write and
applying the same patch twice leaves the same stored state.

The fetch and the write are not performed under a lock: two concurrent patches
to the same record race and the later write wins.
"""
from typing import Any, Dict, Iterable, Tuple, Union
import logging

from pydantic import BaseModel
from sqlalchemy import inspect, update
from sqlalchemy.orm import Session

from core.errors import NotFoundError

logger = logging.getLogger(__name__)

PrimaryKey = Union[str, Tuple[Any, ...]]

def compute_changes(current: Any, patch: BaseModel, allowed_fields: Iterable[str]) -> Dict[str, Any]:
    """Return the allowed, explicitly supplied fields whose value differs"""
    allowed = set(allowed_fields)
    changes = {}
    for field in patch.model_fields_set & allowed:
        value = getattr(patch, field)
        if getattr(current, field) != value:
            changes[field] = value
    return changes

def merge_update(db: Session, model, key: PrimaryKey, patch: BaseModel, allowed_fields: Iterable[str]) -> Dict[str, Any]:
    """Apply `patch` to the record identified by `key`; returns the written fields"""
    current = db.get(model, key)
    if current is None:
        raise NotFoundError(f"{model.__tablename__} record {key} does not exist")

    changes = compute_changes(current, patch, allowed_fields)
    if not changes:
        logger.debug(f"No changes for {model.__tablename__} {key}")
        return changes

    key_values = key if isinstance(key, tuple) else (key,)
    pk_columns = inspect(model).primary_key
    stmt = (
        update(model)
        .where(*[column == value for column, value in zip(pk_columns, key_values)])
        .values(**changes)
    )
    db.execute(stmt)
    db.commit()

    logger.info(f"Updated {model.__tablename__} {key}: {sorted(changes)}")
    return changes
