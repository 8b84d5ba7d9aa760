import os
import tempfile
import unittest
from unittest.mock import patch

from config.settings import Settings
from controllers.list_controller import ShoppingListController
from models.product import Product
from services.product_store import ProductStore


class SessionState(dict):
    """Stand-in for st.session_state outside a Streamlit script run."""

    def __getattr__(self, name):
        try:
            return self[name]
        except KeyError:
            raise AttributeError(name)

    def __setattr__(self, name, value):
        self[name] = value


class RecordingStore(ProductStore):
    def __init__(self, products=None):
        self.products = {p.id: p for p in (products or [])}
        self.calls = []

    def is_configured(self):
        return True

    def fetch_all(self):
        return list(self.products.values())

    def create(self, fields):
        self.calls.append(("create", fields))
        product = Product(id=len(self.products) + 1, **fields)
        self.products[product.id] = product
        return product

    def update(self, product_id, fields):
        self.calls.append(("update", product_id, fields))
        return product_id in self.products

    def delete(self, product_id):
        self.calls.append(("delete", product_id))
        return self.products.pop(product_id, None) is not None

    def subscribe(self, callback):
        return lambda: None


class TestShoppingListControllerForm(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.settings = Settings(
            store_url="",
            store_key="",
            preferences_path=os.path.join(self._tmp.name, "prefs.json"),
            write_workers=0,
        )
        self.store = RecordingStore([Product(id=1, name="Milk", to_buy=True)])

        patches = [
            patch("streamlit.session_state", new=SessionState()),
            patch("controllers.list_controller.get_product_store", return_value=self.store),
        ]
        for p in patches:
            p.start()
            self.addCleanup(p.stop)

        self.controller = ShoppingListController(settings=self.settings)

    def tearDown(self):
        self._tmp.cleanup()

    def test_submit_queues_the_save_for_the_next_run(self):
        self.controller.open_new_form()

        self.assertTrue(self.controller.submit_form({"name": "Rice", "quantity": "2"}))

        # Nothing written yet; the rerun draws the form with submit disabled
        self.assertTrue(self.controller.is_saving())
        self.assertEqual(self.store.calls, [])

        self.assertTrue(self.controller.run_pending_save())
        self.assertFalse(self.controller.is_saving())
        self.assertFalse(self.controller.is_form_open())
        action, fields = self.store.calls[0]
        self.assertEqual(action, "create")
        self.assertTrue(fields["to_buy"])

    def test_validation_error_is_shown_without_saving(self):
        self.controller.open_new_form()

        self.assertFalse(self.controller.submit_form({"name": "  "}))

        self.assertFalse(self.controller.is_saving())
        self.assertIn("Name", self.controller.get_form_error())
        self.assertEqual(self.store.calls, [])

    def test_store_error_keeps_form_open(self):
        self.controller.open_edit_form(999)
        self.controller.submit_form({"name": "Ghost"})

        with self.assertLogs("controllers.list_controller", level="ERROR"):
            self.assertFalse(self.controller.run_pending_save())

        self.assertTrue(self.controller.is_form_open())
        self.assertFalse(self.controller.is_saving())
        self.assertIn("999", self.controller.get_form_error())

    def test_reopening_the_form_clears_the_last_error(self):
        self.controller.open_new_form()
        self.controller.submit_form({"name": ""})
        self.controller.close_form()
        self.controller.open_new_form()
        self.assertIsNone(self.controller.get_form_error())


if __name__ == '__main__':
    unittest.main()
