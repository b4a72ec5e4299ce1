import unittest

from durations import parse_duration_seconds


class DurationParsingTests(unittest.TestCase):
    def test_bare_numbers_are_minutes(self) -> None:
        self.assertEqual(1500.0, parse_duration_seconds("25"))
        self.assertEqual(30.0, parse_duration_seconds("0.5"))

    def test_unit_suffixes(self) -> None:
        self.assertEqual(90.0, parse_duration_seconds("90s"))
        self.assertEqual(300.0, parse_duration_seconds("5m"))
        self.assertEqual(300.0, parse_duration_seconds("5min"))
        self.assertEqual(3600.0, parse_duration_seconds("1h"))
        self.assertEqual(0.25, parse_duration_seconds("250ms"))

    def test_compound_durations(self) -> None:
        self.assertEqual(5400.0, parse_duration_seconds("1h30m"))
        self.assertEqual(90.0, parse_duration_seconds("1m 30s"))

    def test_invalid_input(self) -> None:
        for raw in ("", "soon", "-5", "5x", "m5", "nan", "inf"):
            with self.subTest(raw=raw):
                with self.assertRaises(ValueError):
                    parse_duration_seconds(raw)


if __name__ == "__main__":
    unittest.main()
