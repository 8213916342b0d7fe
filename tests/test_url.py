from unittest import TestCase

from gridgeo.utils.url import multiurljoin


class TestMultiUrlJoin(TestCase):
    def test_keeps_base_path(self):
        self.assertEqual(
            multiurljoin(["https://example.com/sepa/ffims/v1", "areas", "location"]),
            "https://example.com/sepa/ffims/v1/areas/location",
        )

    def test_normalises_slashes(self):
        self.assertEqual(
            multiurljoin(["https://api.os.uk/search/names/v1/", "/find/"]),
            "https://api.os.uk/search/names/v1/find",
        )

    def test_requires_a_component(self):
        with self.assertRaises(ValueError):
            multiurljoin([])
