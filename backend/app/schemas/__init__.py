from app.schemas.annotation import (
    Annotation,
    AnnotationCreate,
    AnnotationUpdate,
    as_utc,
    MUTABLE_FIELDS,
    field_errors,
)
