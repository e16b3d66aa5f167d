"""Subject reference data."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from doubtout.models.base import Base


class Subject(Base):
    """A course offered by a department in a given semester."""

    __tablename__ = "subjects"

    id: Mapped[int] = mapped_column(primary_key=True)
    department_id: Mapped[int] = mapped_column(nullable=False, index=True)
    semester: Mapped[int] = mapped_column(nullable=False)
    subject_name: Mapped[str] = mapped_column(String(255), nullable=False)
