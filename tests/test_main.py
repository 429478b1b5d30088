import unittest

from meteoride import __version__
from meteoride.main import app


class TestMain(unittest.TestCase):
    def test_app_metadata(self):
        self.assertEqual(app.title, "Meteoride")
        self.assertEqual(app.version, __version__)

    def test_routes_registered(self):
        paths = {route.path for route in app.routes}
        self.assertIn("/v1/ride-safety", paths)
        self.assertIn("/health", paths)


if __name__ == "__main__":
    unittest.main()
