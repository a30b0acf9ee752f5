"""ORM model for agency credit ratings."""

from sqlalchemy import Column, Integer, String

from poseidon.models.base import Base


class Rating(Base):
    """Moody's, S&P and Fitch ratings for one instrument, with a display order."""

    __tablename__ = "rating"

    id = Column(Integer, primary_key=True, autoincrement=True)
    moodys_rating = Column(String(125), nullable=False)
    sand_p_rating = Column(String(125), nullable=False)
    fitch_rating = Column(String(125), nullable=False)
    order_number = Column(Integer, nullable=True)
