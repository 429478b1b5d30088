import unittest

import pygeohash

from meteoride import geohash
from meteoride.domain import VehicleType
from meteoride.response_cache.keys import FALLBACK_BUCKET, derive_key, spatial_bucket


class TestDeriveKey(unittest.TestCase):
    def test_key_layout(self):
        key = derive_key(42.6, -5.6, VehicleType.BIKE, 5)
        self.assertEqual(key, "ride:ezs42:bike:v1")

    def test_idempotent(self):
        first = derive_key(40.7128, -74.0060, VehicleType.MOTOR, 6)
        second = derive_key(40.7128, -74.0060, VehicleType.MOTOR, 6)
        self.assertEqual(first, second)

    def test_points_in_same_bucket_share_key(self):
        precision = 6
        bucket = geohash.encode(40.7128, -74.0060, precision)
        centre_lat, centre_lon, lat_err, lon_err = pygeohash.decode_exactly(bucket)
        near_lat = centre_lat + lat_err / 2
        near_lon = centre_lon - lon_err / 2

        self.assertEqual(
            derive_key(centre_lat, centre_lon, VehicleType.BIKE, precision),
            derive_key(near_lat, near_lon, VehicleType.BIKE, precision),
        )
        self.assertEqual(
            derive_key(near_lat, near_lon, VehicleType.BIKE, precision),
            f"ride:{bucket}:bike:v1",
        )

    def test_points_in_different_buckets_differ(self):
        self.assertNotEqual(
            derive_key(40.7128, -74.0060, VehicleType.BIKE, 6),
            derive_key(34.0522, -118.2437, VehicleType.BIKE, 6),
        )

    def test_vehicle_changes_key(self):
        self.assertNotEqual(
            derive_key(40.7128, -74.0060, VehicleType.BIKE, 6),
            derive_key(40.7128, -74.0060, VehicleType.MOTOR, 6),
        )

    def test_coarser_precision_merges_buckets(self):
        # ~3 km apart: different 6-char cells, same 3-char cell
        a = (51.5007, -0.1246)
        b = (51.5055, -0.0754)
        self.assertNotEqual(derive_key(*a, VehicleType.BIKE, 6), derive_key(*b, VehicleType.BIKE, 6))
        self.assertEqual(derive_key(*a, VehicleType.BIKE, 3), derive_key(*b, VehicleType.BIKE, 3))


class TestFallbackBucket(unittest.TestCase):
    """Encoding failures degrade to a shared sentinel bucket instead of failing."""

    def test_out_of_range_coordinates_use_fallback(self):
        self.assertEqual(derive_key(123.0, 45.0, VehicleType.BIKE, 6), f"ride:{FALLBACK_BUCKET}:bike:v1")
        self.assertEqual(derive_key(10.0, 200.0, VehicleType.MOTOR, 6), "ride:default:motor:v1")

    def test_non_positive_precision_uses_fallback(self):
        for precision in (0, -1):
            self.assertEqual(spatial_bucket(10.0, 10.0, precision), FALLBACK_BUCKET)

    def test_non_numeric_input_uses_fallback(self):
        self.assertEqual(spatial_bucket("north", 10.0, 6), FALLBACK_BUCKET)

    def test_fallback_keeps_vehicles_apart(self):
        self.assertNotEqual(
            derive_key(999.0, 999.0, VehicleType.BIKE, 6),
            derive_key(999.0, 999.0, VehicleType.MOTOR, 6),
        )


if __name__ == "__main__":
    unittest.main()
