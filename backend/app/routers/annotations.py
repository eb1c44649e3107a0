import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.auth import get_current_user_id
from app.database import get_db
from app import crud, models, schemas

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/annotations",
    tags=["Annotations"]
)


def _serialize(annotation: models.Annotation) -> dict:
    return schemas.Annotation.model_validate(annotation).model_dump(by_alias=True, mode="json")


def _not_found() -> HTTPException:
    # Same response for missing, foreign and malformed ids
    return HTTPException(status_code=404, detail="Annotation not found")


def _server_error(action: str) -> HTTPException:
    return HTTPException(status_code=500, detail=f"Server error while {action} annotation")


def _invalid(errors) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=errors)


# POST: Create a new annotation
@router.post("", status_code=status.HTTP_201_CREATED)
def create_annotation(
    payload: schemas.AnnotationCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    try:
        annotation = crud.create_annotation(db, user_id, payload.model_dump(exclude_unset=True))
    except crud.AnnotationValidationError as e:
        # Store-side validation for non-HTTP callers; the request schema
        # already rejected these inputs
        raise _invalid(e.errors)
    except Exception:
        logger.exception("Create annotation error")
        raise _server_error("creating")

    return {
        "success": True,
        "message": "Annotation created successfully",
        "annotation": _serialize(annotation),
    }


# GET: All annotations of the current user, newest first
@router.get("")
def list_annotations(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    try:
        annotations = [_serialize(a) for a in crud.list_annotations(db, user_id)]
    except Exception:
        logger.exception("Get annotations error")
        raise _server_error("fetching")

    return {"success": True, "count": len(annotations), "annotations": annotations}


# GET: A single annotation by id
@router.get("/{annotation_id}")
def get_annotation(
    annotation_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    try:
        annotation = crud.get_annotation(db, annotation_id, user_id)
    except crud.AnnotationNotFound:
        raise _not_found()
    except Exception:
        logger.exception("Get annotation error")
        raise _server_error("fetching")

    return {"success": True, "annotation": _serialize(annotation)}


# PUT: Partial update, absent fields are left untouched
@router.put("/{annotation_id}")
def update_annotation(
    annotation_id: str,
    payload: Optional[schemas.AnnotationUpdate] = None,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    # No body is a no-op update that still refreshes updatedAt
    fields = payload.model_dump(exclude_unset=True) if payload is not None else {}
    try:
        annotation = crud.update_annotation(db, annotation_id, user_id, fields)
    except crud.AnnotationValidationError as e:
        # Store-side validation for non-HTTP callers; the request schema
        # already rejected these inputs
        raise _invalid(e.errors)
    except crud.AnnotationNotFound:
        raise _not_found()
    except Exception:
        logger.exception("Update annotation error")
        raise _server_error("updating")

    return {
        "success": True,
        "message": "Annotation updated successfully",
        "annotation": _serialize(annotation),
    }


# DELETE: Remove an annotation owned by the current user
@router.delete("/{annotation_id}")
def delete_annotation(
    annotation_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    try:
        crud.delete_annotation(db, annotation_id, user_id)
    except crud.AnnotationNotFound:
        raise _not_found()
    except Exception:
        logger.exception("Delete annotation error")
        raise _server_error("deleting")

    return {"success": True, "message": "Annotation deleted successfully"}
