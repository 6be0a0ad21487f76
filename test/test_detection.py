#!/usr/bin/env python3
import sys
import os
import unittest
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from app.detection import (
    check_generation,
    get_generation_tier,
    get_tier_config,
    parse_generation,
    resolve_generation,
)
from app.validation import GENERATION_TOO_LOW

WEBHOOKS = {
    "250k": "https://discord.test/250k",
    "1m": "https://discord.test/1m",
    "5m": "https://discord.test/5m",
    "10m": "https://discord.test/10m",
    "50m": "https://discord.test/50m",
}


class TestParseGeneration(unittest.TestCase):
    def test_strips_non_numeric(self):
        self.assertEqual(parse_generation("3,000,000"), 3000000.0)
        self.assertEqual(parse_generation("$1.5M/s"), 1.5)
        self.assertEqual(parse_generation("250000"), 250000.0)

    def test_leading_float_only(self):
        self.assertEqual(parse_generation("1.2.3"), 1.2)

    def test_nothing_numeric(self):
        self.assertIsNone(parse_generation("abc"))
        self.assertIsNone(parse_generation("."))
        self.assertIsNone(parse_generation(""))
        self.assertIsNone(parse_generation(None))


class TestGenerationTier(unittest.TestCase):
    def test_routing_table(self):
        cases = {
            250000: "250k",
            1000000: "250k",
            1000001: "1m",
            5000001: "5m",
            10000001: "10m",
            50000001: "50m",
        }
        for value, expected in cases.items():
            self.assertEqual(get_generation_tier(value), expected, value)

    def test_below_minimum(self):
        self.assertIsNone(get_generation_tier(249999))
        self.assertIsNone(get_generation_tier(None))

    def test_tier_config(self):
        config = get_tier_config("1m", WEBHOOKS)
        self.assertEqual(config["color"], 0x00FF00)
        self.assertEqual(config["webhook_url"], WEBHOOKS["1m"])
        self.assertEqual(get_tier_config("250k", WEBHOOKS)["color"], 0x3498DB)
        self.assertEqual(get_tier_config("50m", WEBHOOKS)["color"], 0xFF0000)
        with self.assertRaises(KeyError):
            get_tier_config("1b", WEBHOOKS)

    def test_resolve_generation(self):
        tier = resolve_generation("3,000,000", WEBHOOKS)
        self.assertEqual(tier["name"], "1m")
        self.assertEqual(tier["value"], 3000000.0)
        self.assertIsNone(resolve_generation("249,999", WEBHOOKS))
        self.assertIsNone(resolve_generation("N/A", WEBHOOKS))

    def test_missing_webhook_url(self):
        tier = resolve_generation("60000000", {})
        self.assertEqual(tier["name"], "50m")
        self.assertIsNone(tier["webhook_url"])

    def test_check_generation(self):
        result, tier = check_generation("$12,500,000/s", WEBHOOKS)
        self.assertTrue(result.valid)
        self.assertEqual(tier["name"], "10m")

    def test_check_generation_rejected(self):
        for generation in ("$100,000/s", "N/A", None):
            result, tier = check_generation(generation, WEBHOOKS)
            self.assertFalse(result.valid)
            self.assertEqual(result.reason, GENERATION_TOO_LOW)
            self.assertEqual(result.error, "Generation too low or invalid")
            self.assertIsNone(tier)


if __name__ == '__main__':
    unittest.main()
