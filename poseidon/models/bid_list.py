"""ORM model for bid list entries."""

from sqlalchemy import Column, DateTime, Float, Integer, String, func

from poseidon.models.base import Base


class BidList(Base):
    """A bid on an account; quantities and prices are optional except bid_quantity."""

    __tablename__ = "bidlist"

    id = Column("bid_list_id", Integer, primary_key=True, autoincrement=True)
    account = Column(String(30), nullable=False)
    type = Column(String(30), nullable=False)
    bid_quantity = Column(Float, nullable=True)
    ask_quantity = Column(Float, nullable=True)
    bid = Column(Float, nullable=True)
    ask = Column(Float, nullable=True)
    benchmark = Column(String(125), nullable=True)
    bid_list_date = Column(DateTime(timezone=True), nullable=True)
    commentary = Column(String(125), nullable=True)
    security = Column(String(125), nullable=True)
    status = Column(String(10), nullable=True)
    trader = Column(String(125), nullable=True)
    book = Column(String(125), nullable=True)
    creation_name = Column(String(125), nullable=True)
    creation_date = Column(DateTime(timezone=True), nullable=True, server_default=func.now())
    revision_name = Column(String(125), nullable=True)
    revision_date = Column(DateTime(timezone=True), nullable=True)
    deal_name = Column(String(125), nullable=True)
    deal_type = Column(String(125), nullable=True)
    source_list_id = Column(String(125), nullable=True)
    side = Column(String(125), nullable=True)
