"""Form schemas for the reference-data records (bid lists, curve points, ratings, rules, trades)."""

from datetime import datetime
from typing import Any

from pydantic import Field

from poseidon.schemas.forms import FormModel


def _text(max_length: int, title: str, alias: str | None = None) -> Any:
    """Optional bounded text input."""
    return Field(default=None, max_length=max_length, alias=alias, title=title)


def _positive(title: str, alias: str | None = None) -> Any:
    """Optional number that must be greater than zero when given."""
    return Field(default=None, gt=0, alias=alias, title=title)


def _timestamp(title: str, alias: str) -> Any:
    return Field(default=None, alias=alias, title=title)


class BidListForm(FormModel):
    account: str = Field(..., max_length=30, title="Account")
    type: str = Field(..., max_length=30, title="Type")
    bid_quantity: float = Field(..., gt=0, alias="bidQuantity", title="Bid quantity")
    ask_quantity: float | None = _positive("Ask quantity", "askQuantity")
    bid: float | None = _positive("Bid")
    ask: float | None = _positive("Ask")
    benchmark: str | None = _text(125, "Benchmark")
    bid_list_date: datetime | None = _timestamp("Bid list date", "bidListDate")
    commentary: str | None = _text(125, "Commentary")
    security: str | None = _text(125, "Security")
    status: str | None = _text(10, "Status")
    trader: str | None = _text(125, "Trader")
    book: str | None = _text(125, "Book")
    creation_name: str | None = _text(125, "Creation name", "creationName")
    revision_name: str | None = _text(125, "Revision name", "revisionName")
    revision_date: datetime | None = _timestamp("Revision date", "revisionDate")
    deal_name: str | None = _text(125, "Deal name", "dealName")
    deal_type: str | None = _text(125, "Deal type", "dealType")
    source_list_id: str | None = _text(125, "Source list ID", "sourceListId")
    side: str | None = _text(125, "Side")


class CurvePointForm(FormModel):
    curve_id: int = Field(..., gt=0, alias="curveId", title="Curve identifier")
    as_of_date: datetime | None = _timestamp("As of date", "asOfDate")
    term: float | None = _positive("Curve term")
    value: float | None = _positive("Curve value")


class RatingForm(FormModel):
    moodys_rating: str = Field(..., max_length=125, alias="moodysRating", title="Moody's rating")
    sand_p_rating: str = Field(..., max_length=125, alias="sandPRating", title="S&P rating")
    fitch_rating: str = Field(..., max_length=125, alias="fitchRating", title="Fitch rating")
    order_number: int | None = _positive("Order number", "orderNumber")


class RuleNameForm(FormModel):
    name: str = Field(..., max_length=125, title="Name")
    description: str = Field(..., max_length=125, title="Description")
    json_definition: str = Field(..., max_length=125, alias="json", title="JSON")
    template: str = Field(..., max_length=512, title="Template")
    sql_str: str = Field(..., max_length=125, alias="sqlStr", title="SQL")
    sql_part: str = Field(..., max_length=125, alias="sqlPart", title="SQL part")


class TradeForm(FormModel):
    account: str = Field(..., max_length=30, title="Account")
    type: str = Field(..., max_length=30, title="Type")
    buy_quantity: float = Field(..., gt=0, alias="buyQuantity", title="Buy quantity")
    sell_quantity: float | None = _positive("Sell quantity", "sellQuantity")
    buy_price: float | None = _positive("Buy price", "buyPrice")
    sell_price: float | None = _positive("Sell price", "sellPrice")
    benchmark: str | None = _text(125, "Benchmark")
    trade_date: datetime | None = _timestamp("Trade date", "tradeDate")
    security: str | None = _text(125, "Security")
    status: str | None = _text(10, "Status")
    trader: str | None = _text(125, "Trader")
    book: str | None = _text(125, "Book")
    creation_name: str | None = _text(125, "Creation name", "creationName")
    revision_name: str | None = _text(125, "Revision name", "revisionName")
    revision_date: datetime | None = _timestamp("Revision date", "revisionDate")
    deal_name: str | None = _text(125, "Deal name", "dealName")
    deal_type: str | None = _text(125, "Deal type", "dealType")
    source_list_id: str | None = _text(125, "Source list ID", "sourceListId")
    side: str | None = _text(125, "Side")
