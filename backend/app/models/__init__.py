from app.models.annotation import Annotation
