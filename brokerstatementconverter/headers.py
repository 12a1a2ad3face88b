"""Locate the header row of the cash and money market fund tables."""

import logging
from typing import Dict, Iterable, List, Optional

from .lang import (
  CASH_HEADER_KEYWORDS,
  CASH_HEADER_LABELS,
  COMPOSITE_HEADERS,
  INTEREST_HEADER_KEYWORDS,
  INTEREST_HEADER_LABELS,
  MERGED_PAYMENT_LABELS,
)
from .models import TextFragment

logger = logging.getLogger(__name__)

HeaderRow = Dict[str, Optional[TextFragment]]

# composite partner must sit on the same baseline, right of the first word
COMPOSITE_MAX_DY = 2
COMPOSITE_MAX_DX = 100


def header_candidates(fragments: Iterable[TextFragment], keywords: List[str]) -> List[TextFragment]:
  """Upper-case fragments longer than two characters containing a keyword."""
  candidates = []
  for frag in fragments:
    text = frag.text.strip()
    if len(text) > 2 and text == text.upper() and any(kw in text for kw in keywords):
      candidates.append(frag)
  return candidates


def _match_any(candidates: List[TextFragment], labels: List[str]) -> Optional[TextFragment]:
  for frag in candidates:
    if frag.text.strip() in labels:
      return frag
  return None


def _find_merged_payments(candidates: List[TextFragment]) -> Optional[TextFragment]:
  for frag in candidates:
    text = frag.text.strip()
    if any(incoming in text and outgoing in text for incoming, outgoing in MERGED_PAYMENT_LABELS):
      return frag
  return None


def find_composite_header(candidates: List[TextFragment], fragments: List[TextFragment],
                          first: str, second: str) -> Optional[TextFragment]:
  """Find a heading printed as one run ("MONEY IN") or as two adjacent runs.

  The second word can be too short to be a header candidate ("IN"), so it is
  searched among all upper-case fragments of the page. For a split heading
  a virtual fragment spanning both runs is returned.
  """
  for frag in candidates:
    text = frag.text.strip()
    if text == f"{first} {second}" or text == first + second:
      return frag

  # nearest pairing wins, so "MONEY OUT" never borrows the "MONEY" of "MONEY IN"
  heads = [f for f in candidates if f.text.strip() == first]
  partners = [f for f in fragments if f.text.strip() == second]
  pairs = [(partner.x - head.x, head, partner) for head in heads for partner in partners
           if abs(partner.y - head.y) < COMPOSITE_MAX_DY and head.x < partner.x < head.x + COMPOSITE_MAX_DX]
  if not pairs:
    return None
  _, head, partner = min(pairs, key=lambda pair: pair[0])
  return TextFragment(
    text=f"{first} {second}",
    x=head.x,
    y=head.y,
    width=partner.x + partner.width - head.x,
    height=max(head.height, partner.height),
  )


def find_cash_headers(fragments: List[TextFragment]) -> Optional[HeaderRow]:
  """Resolve the cash table headings, ``None`` when the page has no header row.

  Either a merged payments heading (``zahlungen``) or both the incoming and
  outgoing headings must be present.
  """
  candidates = header_candidates(fragments, CASH_HEADER_KEYWORDS)
  headers: HeaderRow = {
    "datum": _match_any(candidates, CASH_HEADER_LABELS["datum"]),
    "typ": _match_any(candidates, CASH_HEADER_LABELS["typ"]),
    "beschreibung": _match_any(candidates, CASH_HEADER_LABELS["beschreibung"]),
    "zahlungen": _find_merged_payments(candidates),
    "zahlungseingang": None,
    "zahlungsausgang": None,
    "saldo": _match_any(candidates, CASH_HEADER_LABELS["saldo"]),
  }

  if headers["zahlungen"] is None:
    for slot in ("zahlungseingang", "zahlungsausgang"):
      headers[slot] = _match_any(candidates, CASH_HEADER_LABELS[slot])
      if headers[slot] is None:
        headers[slot] = find_composite_header(candidates, fragments, *COMPOSITE_HEADERS[slot])

  logger.debug(f"Cash header candidates: {[c.text.strip() for c in candidates]}")

  if any(headers[slot] is None for slot in ("datum", "typ", "beschreibung", "saldo")):
    return None
  if headers["zahlungen"] is None and (headers["zahlungseingang"] is None or headers["zahlungsausgang"] is None):
    return None
  return headers


def find_interest_headers(fragments: List[TextFragment]) -> Optional[HeaderRow]:
  """Resolve all six money market fund headings or return ``None``."""
  candidates = header_candidates(fragments, INTEREST_HEADER_KEYWORDS)
  headers = {slot: _match_any(candidates, labels) for slot, labels in INTEREST_HEADER_LABELS.items()}
  if any(frag is None for frag in headers.values()):
    return None
  return headers
