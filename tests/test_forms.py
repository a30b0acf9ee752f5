"""Unit tests for the form schemas: constraints, blank handling and field-keyed messages."""

import unittest
from datetime import datetime
from types import SimpleNamespace

from poseidon.schemas.reference import (
    BidListForm,
    CurvePointForm,
    RatingForm,
    RuleNameForm,
    TradeForm,
)
from poseidon.schemas.user import Role, UserCreateForm, UserUpdateForm


class TestBidListForm(unittest.TestCase):
    def test_valid_submission(self) -> None:
        form, errors = BidListForm.parse_form(
            {"account": "Acme", "type": "Swap", "bidQuantity": "10.0"}
        )
        self.assertEqual(errors, {})
        self.assertEqual(
            form.record_values(), {"account": "Acme", "type": "Swap", "bid_quantity": 10.0}
        )

    def test_negative_quantity_is_rejected(self) -> None:
        form, errors = BidListForm.parse_form(
            {"account": "Acme", "type": "Swap", "bidQuantity": "-5"}
        )
        self.assertIsNone(form)
        self.assertEqual(errors, {"bidQuantity": "Bid quantity must be a positive number."})

    def test_blank_fields_are_reported_as_required(self) -> None:
        _, errors = BidListForm.parse_form({"account": "  ", "type": "", "bidQuantity": ""})
        self.assertEqual(errors["account"], "Account is required.")
        self.assertEqual(errors["type"], "Type is required.")
        self.assertEqual(errors["bidQuantity"], "Bid quantity is required.")

    def test_non_numeric_quantity(self) -> None:
        _, errors = BidListForm.parse_form({"account": "A", "type": "T", "bidQuantity": "ten"})
        self.assertEqual(errors["bidQuantity"], "Bid quantity must be a number.")

    def test_too_long_account(self) -> None:
        _, errors = BidListForm.parse_form(
            {"account": "x" * 31, "type": "Swap", "bidQuantity": "1"}
        )
        self.assertEqual(errors["account"], "Account cannot exceed 30 characters.")


class TestOptionalNumbers(unittest.TestCase):
    def test_blank_optional_numbers_become_none(self) -> None:
        form, errors = CurvePointForm.parse_form({"curveId": "3", "term": "", "value": ""})
        self.assertEqual(errors, {})
        self.assertIsNone(form.term)
        self.assertIsNone(form.value)

    def test_curve_id_must_be_positive_integer(self) -> None:
        _, errors = CurvePointForm.parse_form({"curveId": "0"})
        self.assertIn("curveId", errors)

    def test_rating_order_number(self) -> None:
        _, errors = RatingForm.parse_form(
            {"moodysRating": "Aaa", "sandPRating": "AAA", "fitchRating": "AAA", "orderNumber": "-1"}
        )
        self.assertEqual(errors, {"orderNumber": "Order number must be a positive number."})


class TestRuleNameForm(unittest.TestCase):
    def test_json_input_maps_to_json_definition(self) -> None:
        form, errors = RuleNameForm.parse_form(
            {
                "name": "r",
                "description": "d",
                "json": "{}",
                "template": "t",
                "sqlStr": "SELECT 1",
                "sqlPart": "WHERE 1=1",
            }
        )
        self.assertEqual(errors, {})
        self.assertEqual(form.record_values()["json_definition"], "{}")

    def test_template_allows_512_characters(self) -> None:
        data = {
            "name": "r",
            "description": "d",
            "json": "{}",
            "template": "t" * 512,
            "sqlStr": "s",
            "sqlPart": "p",
        }
        self.assertEqual(RuleNameForm.parse_form(data)[1], {})
        data["template"] = "t" * 513
        self.assertIn("template", RuleNameForm.parse_form(data)[1])


class TestUserForms(unittest.TestCase):
    VALID = {
        "username": "jdoe",
        "password": "Password123!",
        "fullname": "John Doe",
        "role": "USER",
    }

    def test_valid_create(self) -> None:
        form, errors = UserCreateForm.parse_form(self.VALID)
        self.assertEqual(errors, {})
        self.assertEqual(form.role, Role.USER)

    def test_weak_password(self) -> None:
        _, errors = UserCreateForm.parse_form({**self.VALID, "password": "password123"})
        self.assertEqual(
            errors["password"],
            "Password must contain at least one uppercase letter, one digit and one symbol.",
        )

    def test_short_username(self) -> None:
        _, errors = UserCreateForm.parse_form({**self.VALID, "username": "jd"})
        self.assertEqual(errors["username"], "Username must contain at least 3 characters.")

    def test_unknown_role(self) -> None:
        _, errors = UserCreateForm.parse_form({**self.VALID, "role": "ROOT"})
        self.assertEqual(errors["role"], "Role must be ADMIN or USER.")

    def test_create_requires_password(self) -> None:
        _, errors = UserCreateForm.parse_form({**self.VALID, "password": ""})
        self.assertEqual(errors["password"], "Password is required.")

    def test_update_blank_password_means_keep(self) -> None:
        form, errors = UserUpdateForm.parse_form({**self.VALID, "password": ""})
        self.assertEqual(errors, {})
        self.assertIsNone(form.password)

    def test_update_new_password_still_checked(self) -> None:
        _, errors = UserUpdateForm.parse_form({**self.VALID, "password": "weakpass"})
        self.assertIn("password", errors)

    def test_password_keeps_surrounding_spaces(self) -> None:
        data = {**self.VALID, "username": "  jdoe  ", "password": " Password123! "}
        form, errors = UserCreateForm.parse_form(data)
        self.assertEqual(errors, {})
        self.assertEqual(form.username, "jdoe")
        self.assertEqual(form.password, " Password123! ")
        updated, errors = UserUpdateForm.parse_form(data)
        self.assertEqual(errors, {})
        self.assertEqual(updated.password, " Password123! ")

    def test_whitespace_only_password_is_missing(self) -> None:
        _, errors = UserCreateForm.parse_form({**self.VALID, "password": "   "})
        self.assertEqual(errors["password"], "Password is required.")


class TestFieldDescriptors(unittest.TestCase):
    def test_widgets(self) -> None:
        fields = {f.name: f for f in UserCreateForm.describe_fields()}
        self.assertEqual(fields["password"].widget, "password")
        self.assertEqual(fields["role"].widget, "select")
        self.assertEqual(fields["role"].options, ("ADMIN", "USER"))
        self.assertEqual(fields["username"].widget, "text")
        bid = {f.name: f for f in BidListForm.describe_fields()}
        self.assertEqual(bid["bidQuantity"].widget, "number")
        self.assertEqual(bid["bidQuantity"].attr, "bid_quantity")

    def test_values_from_record(self) -> None:
        record = SimpleNamespace(account="Acme", type="Swap", bid_quantity=None)
        values = BidListForm.values_from(record)
        self.assertEqual(values["account"], "Acme")
        self.assertEqual(values["bidQuantity"], "")
        self.assertEqual(values["sourceListId"], "")


class TestTradeForm(unittest.TestCase):
    VALID = {"account": "Acme", "type": "Spot", "buyQuantity": "5"}

    def test_optional_columns(self) -> None:
        form, errors = TradeForm.parse_form(
            {
                **self.VALID,
                "sellQuantity": "3",
                "buyPrice": "101.5",
                "status": "OPEN",
                "tradeDate": "2024-01-31T09:30:00",
                "sourceListId": "SRC-1",
            }
        )
        self.assertEqual(errors, {})
        values = form.record_values()
        self.assertEqual(values["sell_quantity"], 3.0)
        self.assertEqual(values["trade_date"], datetime(2024, 1, 31, 9, 30))
        self.assertEqual(values["source_list_id"], "SRC-1")
        self.assertIsNone(values["sell_price"])

    def test_optional_columns_are_bounded(self) -> None:
        _, errors = TradeForm.parse_form(
            {
                **self.VALID,
                "sellQuantity": "-1",
                "buyPrice": "0",
                "benchmark": "x" * 126,
                "status": "x" * 11,
            }
        )
        self.assertEqual(errors["sellQuantity"], "Sell quantity must be a positive number.")
        self.assertEqual(errors["buyPrice"], "Buy price must be a positive number.")
        self.assertEqual(errors["benchmark"], "Benchmark cannot exceed 125 characters.")
        self.assertEqual(errors["status"], "Status cannot exceed 10 characters.")

    def test_bad_date(self) -> None:
        _, errors = TradeForm.parse_form({**self.VALID, "tradeDate": "yesterday"})
        self.assertTrue(errors["tradeDate"].startswith("Trade date must be a date"))


class TestCurvePointDates(unittest.TestCase):
    def test_as_of_date(self) -> None:
        form, errors = CurvePointForm.parse_form({"curveId": "1", "asOfDate": "2024-02-01T00:00"})
        self.assertEqual(errors, {})
        self.assertEqual(form.as_of_date, datetime(2024, 2, 1))


if __name__ == "__main__":
    unittest.main()
