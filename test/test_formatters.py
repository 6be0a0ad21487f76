#!/usr/bin/env python3
import sys
import os
import unittest
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from app.enrichment import build_join_script
from app.formatters import format_brainrot_embed, format_logs_embed, format_security_alert_embed

TS = "2026-01-01T00:00:00.000Z"


class TestFormatters(unittest.TestCase):
    def test_logs_embed(self):
        payload = {
            "userId": "42", "playerName": "Builderman", "displayName": "Builder",
            "accountAge": "10", "jobId": "job", "placeId": "99", "playersCount": "3",
            "executor": "Delta", "position": "1, 2, 3", "timestamp": "1",
        }
        embed = format_logs_embed(payload, timestamp=TS)
        self.assertEqual(embed["timestamp"], TS)
        self.assertEqual(embed["author"]["url"], "https://www.roblox.com/users/42/profile")
        self.assertEqual(len(embed["fields"]), 7)
        self.assertEqual(embed["fields"][2]["value"], "10 jours")
        self.assertEqual(embed["fields"][3]["value"], "PlaceId: `99`\nJobId: `job`")

    def test_brainrot_embed(self):
        payload = {"brainrotName": "Tung", "generation": "1.2M", "placeId": "99", "jobId": "job"}
        tier = {"name": "1m", "label": "1M+", "color": 0x00FF00}
        embed = format_brainrot_embed(payload, tier, "https://joiner.test/", timestamp=TS)
        self.assertEqual(embed["color"], 0x00FF00)
        self.assertEqual(embed["fields"][0]["value"], "```Tung```")
        self.assertIn("https://joiner.test/?placeId=99&gameInstanceId=job", embed["fields"][4]["value"])
        self.assertIn('TeleportToPlaceInstance(99, "job"', embed["fields"][5]["value"])

    def test_join_script_escapes_quotes(self):
        script = build_join_script("99", 'a"b')
        self.assertIn('"a\\"b"', script)

    def test_security_alert_embed(self):
        embed = format_security_alert_embed("203.0.113.9", 10, 600, "/api/logs", timestamp=TS)
        values = [f["value"] for f in embed["fields"]]
        self.assertIn("`203.0.113.9`", values)
        self.assertIn("600s", values)


if __name__ == '__main__':
    unittest.main()
