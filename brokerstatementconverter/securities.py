"""Parse the holdings list of a securities (depot) statement.

A position starts with a quantity line such as::

    12 Stk. Apple Inc. Registered Shares 150,25 15.09.2025 1.803,00

and is followed by lines carrying the ISIN, the custody country and short
continuations of the security name.
"""

import logging
import re
from typing import Dict, Iterable, List, Optional

from .config import DEFAULT_ENGINE
from .models import Holding, TextFragment
from .normalize import strip_accents

logger = logging.getLogger(__name__)

QTY_LINE_RE = re.compile(r"^\s*([\d.]+,\d{2,6}|\d+)\s*(Stk\.?|Nominale)\b", re.IGNORECASE)
EU_NUMBER = r"\d{1,3}(?:[\.,]\d{3})*,\d{2}"
# price, price date, market value
TAIL_WITH_DATE_RE = re.compile(rf"({EU_NUMBER})\s*(\d{{2}}\.\d{{2}}\.\d{{4}})\s*({EU_NUMBER})\s*$")
# price, market value
TAIL_RE = re.compile(rf"({EU_NUMBER})\s+({EU_NUMBER})\s*$")
ISIN_RE = re.compile(r"\bISIN:\s*([A-Z]{2}[A-Z0-9]{10})\b")
CUSTODY_RE = re.compile(r"^Lagerland\s*:", re.IGNORECASE)
SKIP_RE = re.compile(r"(POSITIONEN|STK\.?\s*/\s*NOMINALE|KURS PRO ST[ÜU]CK|KURSWERT IN EUR|DEPOTAUSZUG|SEITE)", re.IGNORECASE)

MAX_NAME_LINE = 80
LINE_EPS = 1


def to_number_eu(text: Optional[str]) -> Optional[float]:
  """Strict European number parsing, ``None`` unless the whole text is numeric."""
  if not text:
    return None
  cleaned = re.sub(r"\s", "", text).replace(".", "").replace(",", ".", 1)
  try:
    return float(cleaned)
  except ValueError:
    return None


def group_lines(fragments: Iterable[TextFragment], eps: float = LINE_EPS) -> List[str]:
  """Join fragments sharing a (rounded) baseline into text lines, top line first."""
  buckets: Dict[float, List[TextFragment]] = {}
  for frag in fragments:
    key = round(frag.y / eps) * eps
    buckets.setdefault(key, []).append(frag)
  lines = []
  for key in sorted(buckets, reverse=True):
    row = sorted(buckets[key], key=lambda f: f.x)
    lines.append(" ".join(f.text for f in row).strip())
  return lines


def _start_holding(text: str, match, fallback_price_date: Optional[str]) -> Holding:
  qty_text, unit = match.groups()
  name_part = text
  price = total = None
  price_date = None

  tail = TAIL_WITH_DATE_RE.search(text)
  if tail:
    price, price_date, total = to_number_eu(tail.group(1)), tail.group(2), to_number_eu(tail.group(3))
    name_part = text[:tail.start()].strip()
  else:
    tail = TAIL_RE.search(text)
    if tail:
      price, total = to_number_eu(tail.group(1)), to_number_eu(tail.group(2))
      price_date = fallback_price_date
      name_part = text[:tail.start()].strip()
    else:
      logger.warning(f"No price/value found in holdings line: {text!r}")

  name = QTY_LINE_RE.sub("", name_part, count=1).lstrip(". ").strip()
  return Holding(
    quantity=to_number_eu(qty_text),
    unit="Stk" if unit.lower().startswith("stk") else unit,
    name=name,
    price_per_unit=price,
    price_date=price_date,
    market_value=total,
  )


def parse_holdings(pages: Iterable[List[TextFragment]], fallback_price_date: Optional[str] = None) -> List[Holding]:
  """Extract holdings from the pages of a securities statement.

  ``fallback_price_date`` is used for positions whose line prints a price
  and a value but no price date.
  """
  holdings: List[Holding] = []
  for fragments in pages:
    for text in group_lines(fragments):
      if not text:
        continue
      match = QTY_LINE_RE.match(text)
      if match:
        holdings.append(_start_holding(text, match, fallback_price_date))
        continue
      if not holdings:
        continue

      last = holdings[-1]
      isin = ISIN_RE.search(text)
      if isin:
        last.isin = isin.group(1)
        continue
      if CUSTODY_RE.match(text):
        parts = text.split(":")
        last.custody_country = strip_accents(parts[1] if len(parts) > 1 else "")
        continue
      if not SKIP_RE.search(text) and len(text) <= MAX_NAME_LINE:
        last.name_extra = f"{last.name_extra} {text.strip()}" if last.name_extra else text.strip()

  for holding in holdings:
    if holding.quantity is not None and holding.price_per_unit is not None:
      holding.computed_value = round(holding.quantity * holding.price_per_unit, 2)

  logger.info(f"Parsed {len(holdings)} holdings")
  return holdings


def parse_holdings_pdf(pdf_path: str, engine: str = DEFAULT_ENGINE,
                       fallback_price_date: Optional[str] = None) -> List[Holding]:
  from .pdf_source import PdfFragmentSource

  with PdfFragmentSource(pdf_path, engine=engine) as source:
    return parse_holdings(source.pages(), fallback_price_date=fallback_price_date)
