import unittest
from datetime import date

from brokerstatementconverter.normalize import (
  collapse_whitespace,
  parse_currency,
  parse_localized_date,
  strip_accents,
  try_parse_currency,
)


class ParseCurrencyTest(unittest.TestCase):
  def test_german_amounts(self):
    self.assertEqual(parse_currency("1.234,56"), 1234.56)
    self.assertEqual(parse_currency("100,00 €"), 100.0)
    self.assertEqual(parse_currency("1.100.000,5"), 1100000.5)

  def test_whitespace_variants(self):
    self.assertEqual(parse_currency("1 234,56 €"), 1234.56)
    self.assertEqual(parse_currency(" 12 ,30 "), 12.3)

  def test_negative_amount(self):
    self.assertEqual(parse_currency("-45,10"), -45.1)

  def test_neutral_default(self):
    self.assertEqual(parse_currency(""), 0)
    self.assertEqual(parse_currency("abc"), 0)
    self.assertEqual(parse_currency(None), 0)
    self.assertEqual(parse_currency(12), 0)

  def test_leading_number_is_kept(self):
    self.assertEqual(parse_currency("12,50abc"), 12.5)

  def test_strict_variant(self):
    self.assertIsNone(try_parse_currency("abc"))
    self.assertIsNone(try_parse_currency(""))
    self.assertEqual(try_parse_currency("0,00"), 0.0)


class ParseDateTest(unittest.TestCase):
  def test_german_months(self):
    self.assertEqual(parse_localized_date("01 Jan. 2024"), date(2024, 1, 1))
    self.assertEqual(parse_localized_date("04 März 2021"), date(2021, 3, 4))
    self.assertEqual(parse_localized_date("4 Mär. 2021"), date(2021, 3, 4))
    self.assertEqual(parse_localized_date("31 Dez. 2023"), date(2023, 12, 31))

  def test_italian_and_english_months(self):
    self.assertEqual(parse_localized_date("15 Gen 2024"), date(2024, 1, 15))
    self.assertEqual(parse_localized_date("2 ottobre 2022"), date(2022, 10, 2))
    self.assertEqual(parse_localized_date("9 October 2022"), date(2022, 10, 9))

  def test_case_insensitive(self):
    self.assertEqual(parse_localized_date("01 JAN 2024"), date(2024, 1, 1))

  def test_unparsable(self):
    self.assertIsNone(parse_localized_date(""))
    self.assertIsNone(parse_localized_date(None))
    self.assertIsNone(parse_localized_date("2024-01-01"))
    self.assertIsNone(parse_localized_date("01 Foo 2024"))
    self.assertIsNone(parse_localized_date("31 Feb. 2024"))


class TextHelpersTest(unittest.TestCase):
  def test_strip_accents(self):
    self.assertEqual(strip_accents(" März "), "Marz")

  def test_collapse_whitespace(self):
    self.assertEqual(collapse_whitespace("  a \n b\t c "), "a b c")


if __name__ == '__main__':
  unittest.main()
