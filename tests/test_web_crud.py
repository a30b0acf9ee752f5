"""End-to-end tests for the reference-data and user administration pages."""

import unittest

from support import login, login_as_admin, login_as_user, make_client, reset_database, seed_accounts

from poseidon.core.database import SessionLocal
from poseidon.core.security import PasswordHasher
from poseidon.models import BidList, Trade, User


def _bid_count() -> int:
    db = SessionLocal()
    try:
        return db.query(BidList).count()
    finally:
        db.close()


def _only_bid_id() -> int:
    db = SessionLocal()
    try:
        return db.query(BidList).one().id
    finally:
        db.close()


def _user(username: str) -> User | None:
    db = SessionLocal()
    try:
        return db.query(User).filter(User.username == username).first()
    finally:
        db.close()


class CrudWebTestCase(unittest.TestCase):
    def setUp(self) -> None:
        reset_database()
        seed_accounts()


class TestBidListPages(CrudWebTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.client = login_as_user()

    def test_create_then_list(self) -> None:
        response = self.client.post(
            "/bidList/validate",
            data={"account": "Acme", "type": "Swap", "bidQuantity": "10.0"},
        )
        self.assertEqual(response.status_code, 302)
        self.assertEqual(response.headers["location"], "/bidList/list")

        db = SessionLocal()
        try:
            bid = db.query(BidList).one()
        finally:
            db.close()
        self.assertIsNotNone(bid.id)
        self.assertEqual((bid.account, bid.type, bid.bid_quantity), ("Acme", "Swap", 10.0))

        page = self.client.get("/bidList/list")
        self.assertEqual(page.status_code, 200)
        self.assertIn("Acme", page.text)
        self.assertIn("Swap", page.text)
        self.assertIn(f"/bidList/update/{bid.id}", page.text)

    def test_negative_quantity_rerenders_form(self) -> None:
        response = self.client.post(
            "/bidList/validate",
            data={"account": "Acme", "type": "Swap", "bidQuantity": "-5"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertIn("Bid quantity must be a positive number.", response.text)
        self.assertIn('value="Acme"', response.text)
        self.assertEqual(_bid_count(), 0)

    def test_add_form(self) -> None:
        response = self.client.get("/bidList/add")
        self.assertEqual(response.status_code, 200)
        self.assertIn('name="bidQuantity"', response.text)

    def test_update_flow(self) -> None:
        self.client.post(
            "/bidList/validate", data={"account": "Acme", "type": "Swap", "bidQuantity": "10"}
        )
        bid_id = _only_bid_id()
        form = self.client.get(f"/bidList/update/{bid_id}")
        self.assertEqual(form.status_code, 200)
        self.assertIn('value="Acme"', form.text)

        bad = self.client.post(
            f"/bidList/update/{bid_id}",
            data={"account": "Acme", "type": "Swap", "bidQuantity": "0"},
        )
        self.assertEqual(bad.status_code, 200)

        ok = self.client.post(
            f"/bidList/update/{bid_id}",
            data={"account": "Acme", "type": "Option", "bidQuantity": "20"},
        )
        self.assertEqual(ok.headers["location"], "/bidList/list")
        self.assertIn("Option", self.client.get("/bidList/list").text)

    def test_update_absent_id_redirects_with_not_found(self) -> None:
        response = self.client.get("/bidList/update/999")
        self.assertEqual(response.status_code, 302)
        self.assertEqual(response.headers["location"], "/bidList/list?notfound")
        self.assertIn("Bid not found.", self.client.get("/bidList/list?notfound").text)

        posted = self.client.post(
            "/bidList/update/999", data={"account": "A", "type": "T", "bidQuantity": "1"}
        )
        self.assertEqual(posted.headers["location"], "/bidList/list?notfound")
        self.assertEqual(_bid_count(), 0)

    def test_delete_twice(self) -> None:
        self.client.post(
            "/bidList/validate", data={"account": "Acme", "type": "Swap", "bidQuantity": "10"}
        )
        bid_id = _only_bid_id()
        first = self.client.get(f"/bidList/delete/{bid_id}")
        self.assertEqual(first.headers["location"], "/bidList/list")
        second = self.client.get(f"/bidList/delete/{bid_id}")
        self.assertEqual(second.status_code, 302)
        self.assertTrue(second.headers["location"].startswith("/bidList/list"))
        self.assertEqual(_bid_count(), 0)

    def test_non_numeric_id_renders_error_page(self) -> None:
        response = self.client.get("/bidList/update/abc")
        self.assertEqual(response.status_code, 400)


class TestOtherResources(CrudWebTestCase):
    """Each reference kind shares the same list/validate shape."""

    VALID = {
        "curvePoint": {"curveId": "1", "term": "10", "value": "30"},
        "rating": {
            "moodysRating": "Aaa",
            "sandPRating": "AAA",
            "fitchRating": "AAA",
            "orderNumber": "1",
        },
        "ruleName": {
            "name": "Rule",
            "description": "Desc",
            "json": "{}",
            "template": "Template",
            "sqlStr": "SELECT 1",
            "sqlPart": "WHERE 1=1",
        },
        "trade": {"account": "Acme", "type": "Spot", "buyQuantity": "5"},
    }

    def test_create_and_list(self) -> None:
        client = login_as_user()
        for resource, data in self.VALID.items():
            with self.subTest(resource=resource):
                response = client.post(f"/{resource}/validate", data=data)
                self.assertEqual(response.status_code, 302)
                self.assertEqual(response.headers["location"], f"/{resource}/list")
                self.assertEqual(client.get(f"/{resource}/list").status_code, 200)

    def test_empty_submission_is_rejected(self) -> None:
        client = login_as_user()
        for resource in self.VALID:
            with self.subTest(resource=resource):
                response = client.post(f"/{resource}/validate", data={})
                self.assertEqual(response.status_code, 200)
                self.assertIn("is required.", response.text)

    def test_trade_optional_columns_are_validated(self) -> None:
        client = login_as_user()
        response = client.post(
            "/trade/validate",
            data={**self.VALID["trade"], "sellQuantity": "-2", "benchmark": "b" * 126},
        )
        self.assertEqual(response.status_code, 200)
        self.assertIn("Sell quantity must be a positive number.", response.text)
        self.assertIn("Benchmark cannot exceed 125 characters.", response.text)
        self.assertEqual(client.get("/trade/list").text.count("/trade/update/"), 0)

    def test_trade_optional_columns_are_stored(self) -> None:
        client = login_as_user()
        response = client.post(
            "/trade/validate",
            data={**self.VALID["trade"], "sellPrice": "99.5", "side": "BUY"},
        )
        self.assertEqual(response.headers["location"], "/trade/list")
        db = SessionLocal()
        try:
            trade = db.query(Trade).one()
        finally:
            db.close()
        self.assertEqual(trade.sell_price, 99.5)
        self.assertEqual(trade.side, "BUY")
        self.assertIsNone(trade.benchmark)


class TestUserPages(CrudWebTestCase):
    NEW_USER = {
        "username": "jdoe",
        "password": "Password123!",
        "fullname": "John Doe",
        "role": "USER",
    }

    def setUp(self) -> None:
        super().setUp()
        self.client = login_as_admin()
        self.hasher = PasswordHasher()

    def test_create_encodes_password(self) -> None:
        response = self.client.post("/user/validate", data=self.NEW_USER)
        self.assertEqual(response.headers["location"], "/user/list")
        user = _user("jdoe")
        self.assertNotEqual(user.password, "Password123!")
        self.assertTrue(self.hasher.verify("Password123!", user.password))
        logged_in = login(make_client(), "jdoe", "Password123!")
        self.assertEqual(logged_in.headers["location"], "/home")

    def test_password_with_surrounding_spaces_logs_in(self) -> None:
        spaced = " Password123! "
        response = self.client.post("/user/validate", data={**self.NEW_USER, "password": spaced})
        self.assertEqual(response.headers["location"], "/user/list")
        self.assertTrue(self.hasher.verify(spaced, _user("jdoe").password))
        logged_in = login(make_client(), "jdoe", spaced)
        self.assertEqual(logged_in.headers["location"], "/home")

    def test_list_never_shows_digest(self) -> None:
        self.client.post("/user/validate", data=self.NEW_USER)
        page = self.client.get("/user/list")
        self.assertIn("jdoe", page.text)
        self.assertNotIn(_user("jdoe").password, page.text)

    def test_duplicate_username_shows_form_message(self) -> None:
        self.client.post("/user/validate", data=self.NEW_USER)
        original = _user("jdoe")
        response = self.client.post(
            "/user/validate", data={**self.NEW_USER, "fullname": "Other", "role": "ADMIN"}
        )
        self.assertEqual(response.status_code, 200)
        self.assertIn("Username already exists. Please choose another username.", response.text)
        after = _user("jdoe")
        self.assertEqual(after.id, original.id)
        self.assertEqual(after.fullname, "John Doe")
        self.assertEqual(after.password, original.password)

    def test_invalid_user_form(self) -> None:
        response = self.client.post(
            "/user/validate", data={**self.NEW_USER, "password": "weak"}
        )
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(_user("jdoe"))

    def test_edit_form_leaves_password_blank(self) -> None:
        self.client.post("/user/validate", data=self.NEW_USER)
        user = _user("jdoe")
        page = self.client.get(f"/user/update/{user.id}")
        self.assertEqual(page.status_code, 200)
        self.assertIn('value="jdoe"', page.text)
        self.assertNotIn(user.password, page.text)
        self.assertIn('type="password" id="password" name="password" value=""', page.text)

    def test_update_with_blank_password_keeps_digest(self) -> None:
        self.client.post("/user/validate", data=self.NEW_USER)
        user = _user("jdoe")
        response = self.client.post(
            f"/user/update/{user.id}",
            data={**self.NEW_USER, "password": "", "fullname": "Johnny"},
        )
        self.assertEqual(response.headers["location"], "/user/list")
        updated = _user("jdoe")
        self.assertEqual(updated.fullname, "Johnny")
        self.assertEqual(updated.password, user.password)

    def test_update_with_new_password_reencodes(self) -> None:
        self.client.post("/user/validate", data=self.NEW_USER)
        user = _user("jdoe")
        self.client.post(
            f"/user/update/{user.id}", data={**self.NEW_USER, "password": "Changed456!"}
        )
        self.assertTrue(self.hasher.verify("Changed456!", _user("jdoe").password))

    def test_update_absent_user_redirects_with_not_found(self) -> None:
        response = self.client.get("/user/update/999")
        self.assertEqual(response.status_code, 302)
        self.assertEqual(response.headers["location"], "/user/list?notfound")
        self.assertIn("User not found.", self.client.get("/user/list?notfound").text)

    def test_delete_absent_user(self) -> None:
        response = self.client.get("/user/delete/999")
        self.assertEqual(response.headers["location"], "/user/list?notfound")


if __name__ == "__main__":
    unittest.main()
