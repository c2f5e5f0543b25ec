import unittest

from drawfeed.errors import DateParseError
from drawfeed.parsing import (
    date_from_iso,
    date_from_slash,
    date_from_title,
    extract_numbers,
    normalize_date,
)


class ExtractNumbersTests(unittest.TestCase):
    def test_takes_last_two_digits_of_prize_strings(self) -> None:
        self.assertEqual(extract_numbers("0123456,0234567", ",", 2), [56, 67])

    def test_empty_text_yields_nothing(self) -> None:
        self.assertEqual(extract_numbers("", ",", 2), [])
        self.assertEqual(extract_numbers(None), [])

    def test_non_numeric_token_is_dropped(self) -> None:
        self.assertEqual(extract_numbers("ab,12", ",", 2), [12])

    def test_short_and_blank_tokens_are_dropped(self) -> None:
        self.assertEqual(extract_numbers("7, ,, 45 ,x9", ",", 2), [45])

    def test_full_token_mode_keeps_multi_digit_numbers(self) -> None:
        self.assertEqual(extract_numbers("05,12,33,101", ","), [5, 12, 33, 101])
        self.assertEqual(extract_numbers("05,1a,33", ","), [5, 33])

    def test_whitespace_delimiter(self) -> None:
        self.assertEqual(extract_numbers(" 3  14\n15\t92 ", None), [3, 14, 15, 92])
        self.assertEqual(extract_numbers("Giải ĐB 12345", None, 2), [45])


class NormalizeDateTests(unittest.TestCase):
    def test_slash_date(self) -> None:
        self.assertEqual(normalize_date("05/01/2024"), "2024-01-05")

    def test_title_date_is_zero_padded(self) -> None:
        self.assertEqual(normalize_date("Kết quả ngày 5-1-2024"), "2024-01-05")

    def test_iso_timestamp(self) -> None:
        self.assertEqual(normalize_date("2024-01-05T00:00:00Z"), "2024-01-05")
        self.assertEqual(normalize_date("2024-01-05 18:30:00"), "2024-01-05")
        self.assertEqual(normalize_date("2024-01-05"), "2024-01-05")

    def test_text_without_date_fails(self) -> None:
        with self.assertRaises(DateParseError):
            normalize_date("Kết quả xổ số hôm nay")
        with self.assertRaises(DateParseError):
            normalize_date("")

    def test_impossible_calendar_date_fails(self) -> None:
        with self.assertRaises(DateParseError):
            normalize_date("31/02/2024")
        with self.assertRaises(DateParseError):
            date_from_iso("2024-13-01T00:00:00Z")

    def test_slash_date_inside_keyed_label(self) -> None:
        self.assertEqual(date_from_slash("Thứ Sáu_05/01/2024"), "2024-01-05")

    def test_shape_specific_helpers_reject_other_shapes(self) -> None:
        with self.assertRaises(DateParseError):
            date_from_title("05/01/2024")
        with self.assertRaises(DateParseError):
            date_from_slash("5-1-2024")
        with self.assertRaises(DateParseError):
            date_from_iso("05/01/2024")

    def test_date_error_is_a_value_error(self) -> None:
        self.assertTrue(issubclass(DateParseError, ValueError))


if __name__ == "__main__":
    unittest.main()
