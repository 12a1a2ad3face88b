"""Turn located header positions into column ranges."""

import math

from .headers import HeaderRow
from .models import ColumnBoundary, ColumnRange, TransactionKind

# columns start a little left of their heading
HEADER_PADDING = 5


def cash_column_boundaries(headers: HeaderRow) -> ColumnBoundary:
  """Column ranges for the cash table.

  With a merged payments heading the incoming/outgoing split point is the
  heading's horizontal midpoint.
  """
  merged = headers.get("zahlungen")
  if merged is not None:
    midpoint = merged.x + merged.width / 2
    incoming_end = outgoing_start = midpoint
    payments_start = merged.x - HEADER_PADDING
  else:
    incoming_end = outgoing_start = headers["zahlungsausgang"].x - HEADER_PADDING
    payments_start = headers["zahlungseingang"].x - HEADER_PADDING

  typ_start = headers["typ"].x - HEADER_PADDING
  beschreibung_start = headers["beschreibung"].x - HEADER_PADDING
  saldo_start = headers["saldo"].x - HEADER_PADDING

  columns = {
    "datum": ColumnRange(0, typ_start),
    "typ": ColumnRange(typ_start, beschreibung_start),
    "beschreibung": ColumnRange(beschreibung_start, payments_start),
    "zahlungseingang": ColumnRange(payments_start, incoming_end),
    "zahlungsausgang": ColumnRange(outgoing_start, saldo_start),
    "saldo": ColumnRange(saldo_start, math.inf),
  }
  return ColumnBoundary(TransactionKind.CASH, columns, headers["datum"].y)


def interest_column_boundaries(headers: HeaderRow) -> ColumnBoundary:
  order = ["datum", "zahlungsart", "geldmarktfonds", "stueck", "kurs", "betrag"]
  starts = [0] + [headers[slot].x - HEADER_PADDING for slot in order[1:]]
  ends = starts[1:] + [math.inf]
  columns = {slot: ColumnRange(start, end) for slot, start, end in zip(order, starts, ends)}
  return ColumnBoundary(TransactionKind.INTEREST, columns, headers["datum"].y)
