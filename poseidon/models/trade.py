"""ORM model for trades."""

from sqlalchemy import Column, DateTime, Float, Integer, String, func

from poseidon.models.base import Base


class Trade(Base):
    """A booked trade; account, type and buy_quantity are required."""

    __tablename__ = "trade"

    id = Column("trade_id", Integer, primary_key=True, autoincrement=True)
    account = Column(String(30), nullable=False)
    type = Column(String(30), nullable=False)
    buy_quantity = Column(Float, nullable=True)
    sell_quantity = Column(Float, nullable=True)
    buy_price = Column(Float, nullable=True)
    sell_price = Column(Float, nullable=True)
    benchmark = Column(String(125), nullable=True)
    trade_date = Column(DateTime(timezone=True), nullable=True)
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
