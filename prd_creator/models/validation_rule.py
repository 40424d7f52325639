"""Custom validation rule ORM model."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from prd_creator.database import Base


class ValidationRule(Base):
    __tablename__ = "validation_rules"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)  # caller-supplied
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    pattern: Mapped[str] = mapped_column(Text)  # regular-expression source
    polarity: Mapped[str] = mapped_column(String(16), default="require")  # require | forbid
