"""ORM model for yield curve points."""

from sqlalchemy import Column, DateTime, Float, Integer, func

from poseidon.models.base import Base


class CurvePoint(Base):
    __tablename__ = "curvepoint"

    id = Column(Integer, primary_key=True, autoincrement=True)
    curve_id = Column(Integer, nullable=False)
    as_of_date = Column(DateTime(timezone=True), nullable=True)
    term = Column(Float, nullable=True)
    # "value" is reserved in some SQL dialects.
    value = Column("curve_value", Float, nullable=True)
    creation_date = Column(DateTime(timezone=True), nullable=True, server_default=func.now())
