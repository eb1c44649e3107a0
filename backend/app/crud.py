"""Owner-scoped persistence for annotations.

Every query filters on ``owner_id``, so a record belonging to another user is
indistinguishable from one that does not exist.
"""
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

from pydantic import ValidationError
from sqlalchemy.orm import Session

from app import models, schemas

logger = logging.getLogger(__name__)


class AnnotationValidationError(ValueError):
    """Input failed validation; ``errors`` holds field-level details."""

    def __init__(self, errors: List[Dict[str, str]]):
        super().__init__("Annotation validation failed")
        self.errors = errors


class AnnotationNotFound(LookupError):
    def __init__(self, message: str = "Annotation not found"):
        super().__init__(message)


class InvalidAnnotationId(AnnotationNotFound):
    pass


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _validate(schema, fields: Dict[str, Any]):
    try:
        return schema.model_validate(fields)
    except ValidationError as exc:
        raise AnnotationValidationError(schemas.field_errors(exc.errors())) from exc


def _parse_id(annotation_id: str) -> str:
    try:
        return str(uuid.UUID(str(annotation_id)))
    except ValueError:
        raise InvalidAnnotationId() from None


def _owned_query(db: Session, annotation_id: str, owner_id: str):
    return db.query(models.Annotation).filter(
        models.Annotation.id == _parse_id(annotation_id),
        models.Annotation.owner_id == owner_id,
    )


def create_annotation(db: Session, owner_id: str, fields: Dict[str, Any]) -> models.Annotation:
    payload = _validate(schemas.AnnotationCreate, fields)
    # Omitted or null optional fields fall back to the column defaults
    values = payload.model_dump(exclude_none=True)

    now = _utcnow()
    annotation = models.Annotation(
        id=str(uuid.uuid4()),
        owner_id=owner_id,
        created_at=now,
        updated_at=now,
        **values,
    )
    db.add(annotation)
    db.commit()
    db.refresh(annotation)
    logger.info("Created annotation %s for user %s", annotation.id, owner_id)
    return annotation


def get_annotation(db: Session, annotation_id: str, owner_id: str) -> models.Annotation:
    annotation = _owned_query(db, annotation_id, owner_id).first()
    if annotation is None:
        raise AnnotationNotFound()
    return annotation


def list_annotations(db: Session, owner_id: str) -> List[models.Annotation]:
    # Newest first
    return (
        db.query(models.Annotation)
        .filter(models.Annotation.owner_id == owner_id)
        .order_by(models.Annotation.created_at.desc())
        .all()
    )


def update_annotation(
    db: Session, annotation_id: str, owner_id: str, fields: Dict[str, Any]
) -> models.Annotation:
    payload = _validate(schemas.AnnotationUpdate, fields)
    changes = payload.model_dump(exclude_unset=True)

    annotation = get_annotation(db, annotation_id, owner_id)
    for field, value in changes.items():
        setattr(annotation, field, value)

    # updated_at must move forward even if the clock has not ticked
    now = _utcnow()
    previous = schemas.as_utc(annotation.updated_at)
    if now <= previous:
        now = previous + timedelta(microseconds=1)
    annotation.updated_at = now

    db.commit()
    db.refresh(annotation)
    logger.debug("Updated annotation %s fields=%s", annotation.id, sorted(changes))
    return annotation


def delete_annotation(db: Session, annotation_id: str, owner_id: str) -> None:
    annotation = get_annotation(db, annotation_id, owner_id)
    db.delete(annotation)
    db.commit()
    logger.info("Deleted annotation %s for user %s", annotation_id, owner_id)
