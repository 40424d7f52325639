"""Monotonic usage counters."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from prd_creator.database import Base


class Metric(Base):
    __tablename__ = "metrics"

    name: Mapped[str] = mapped_column(String(128), primary_key=True)
    count: Mapped[int] = mapped_column(Integer, default=0)
