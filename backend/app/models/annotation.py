from sqlalchemy import CheckConstraint, Column, DateTime, Float, String
from app.database import Base

DEFAULT_FILL = "rgba(0, 123, 255, 0.3)"
DEFAULT_STROKE = "#007bff"
DEFAULT_STROKE_WIDTH = 2
NAME_MAX_LENGTH = 50

class Annotation(Base):
    __tablename__ = "annotations"
    __table_args__ = (
        CheckConstraint("width >= 1", name="ck_annotations_width_min"),
        CheckConstraint("height >= 1", name="ck_annotations_height_min"),
    )

    id = Column(String(36), primary_key=True, index=True)  # uuid4, assigned by crud

    # Id of the owning user (Supabase auth user id)
    owner_id = Column(String, nullable=False, index=True)

    name = Column(String(NAME_MAX_LENGTH), nullable=False, default="")

    # Rectangle geometry in canvas units
    x = Column(Float, nullable=False)
    y = Column(Float, nullable=False)
    width = Column(Float, nullable=False)
    height = Column(Float, nullable=False)

    # Styling, passed straight through to the canvas
    fill = Column(String, nullable=False, default=DEFAULT_FILL)
    stroke = Column(String, nullable=False, default=DEFAULT_STROKE)
    stroke_width = Column(Float, nullable=False, default=DEFAULT_STROKE_WIDTH)

    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
