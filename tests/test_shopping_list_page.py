import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from streamlit.testing.v1 import AppTest

from config.settings import get_settings
from controllers.list_controller import get_product_store

APP_PATH = Path(__file__).resolve().parent.parent / "streamlit_app.py"


class TestShoppingListPageWithoutStore(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        env = {
            "STORE_URL": "",
            "STORE_KEY": "",
            "PREFERENCES_PATH": os.path.join(self._tmp.name, "prefs.json"),
        }
        env_patch = patch.dict(os.environ, env)
        env_patch.start()
        self.addCleanup(env_patch.stop)

        get_settings.cache_clear()
        get_product_store.clear()
        self.addCleanup(get_settings.cache_clear)
        self.addCleanup(get_product_store.clear)

    def tearDown(self):
        self._tmp.cleanup()

    def test_missing_credentials_are_not_reported_on_the_page(self):
        at = AppTest.from_file(str(APP_PATH), default_timeout=30)
        at.run()

        self.assertFalse(at.exception)
        self.assertEqual(len(at.warning), 0)
        self.assertIn("No products found.", [el.value for el in at.info])


if __name__ == '__main__':
    unittest.main()
