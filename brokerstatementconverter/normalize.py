"""Lenient number and date parsing for statement text."""

import re
import unicodedata
from datetime import date
from typing import Optional

from .lang import MONTHS_MAP

# any leading float literal, the way a lenient reader would accept "12.5abc"
LEADING_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
WHITESPACE_RE = re.compile(r"\s+")
LOCALIZED_DATE_RE = re.compile(r"(\d{1,2})\.?\s+([^\s\d.]+)\.?\s+(\d{4})")


def strip_accents(text: str) -> str:
  """Remove combining marks: ``"März"`` becomes ``"Marz"``."""
  decomposed = unicodedata.normalize("NFD", text or "")
  return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).strip()


def _clean_amount(text: str) -> str:
  cleaned = text.replace("€", "")
  cleaned = WHITESPACE_RE.sub("", cleaned)
  return cleaned.replace(".", "").replace(",", ".")


def try_parse_currency(text) -> Optional[float]:
  """Parse a European formatted amount, ``None`` when no number is present."""
  if not text or not isinstance(text, str):
    return None
  match = LEADING_NUMBER_RE.match(_clean_amount(text))
  if not match:
    return None
  return float(match.group(0))


def parse_currency(text) -> float:
  """Parse ``"1.234,56 €"`` style amounts.

  Thousands separators are dropped and the decimal comma becomes a point.
  Empty, non-string or unparsable input yields ``0.0``.
  """
  value = try_parse_currency(text)
  return 0.0 if value is None else value


def parse_localized_date(text) -> Optional[date]:
  """Parse ``"<day> <month>[.] <year>"`` in German, Italian or English.

  Returns ``None`` when the text does not look like a date or names an
  impossible day.
  """
  if not text or not isinstance(text, str):
    return None
  match = LOCALIZED_DATE_RE.search(text)
  if not match:
    return None
  day, month_name, year = match.groups()
  month = MONTHS_MAP.get(strip_accents(month_name).lower())
  if month is None:
    return None
  try:
    return date(int(year), month, int(day))
  except ValueError:
    return None


def collapse_whitespace(text: str) -> str:
  return WHITESPACE_RE.sub(" ", text).strip()
