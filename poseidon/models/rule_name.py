"""ORM model for rule definitions."""

from sqlalchemy import Column, Integer, String

from poseidon.models.base import Base


class RuleName(Base):
    __tablename__ = "rulename"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(125), nullable=False)
    description = Column(String(125), nullable=False)
    json_definition = Column("json", String(125), nullable=False)
    template = Column(String(512), nullable=False)
    sql_str = Column(String(125), nullable=False)
    sql_part = Column(String(125), nullable=False)
