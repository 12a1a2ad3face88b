"""Group table fragments into rows and rows into transaction records."""

import logging
from typing import List, Type

import numpy as np
import pandas as pd

from .models import RECORD_TYPES, ColumnBoundary, TextFragment
from .normalize import collapse_whitespace

logger = logging.getLogger(__name__)

# rows start this far below the header baseline
HEADER_GAP = 5
DEFAULT_LINE_HEIGHT = 10
ROW_GAP_FACTOR = 1.5


def cluster_rows(fragments: List[TextFragment], header_y: float) -> List[List[TextFragment]]:
  """Split the content below ``header_y`` into visual rows.

  Fragments are read top to bottom, left to right. A new row starts when the
  vertical step to the previous fragment exceeds 1.5 times the mean
  fragment height.
  """
  if not fragments:
    return []
  df = pd.DataFrame({
    "pos": range(len(fragments)),
    "text": [f.text for f in fragments],
    "y": [f.y for f in fragments],
    "x": [f.x for f in fragments],
    "height": [f.height for f in fragments],
  })
  df = df[(df["y"] < header_y - HEADER_GAP) & (df["text"].str.strip() != "")]
  if df.empty:
    return []

  df = df.sort_values(["y", "x"], ascending=[False, True])
  avg_height = df["height"].mean()
  if pd.isna(avg_height) or avg_height == 0:
    avg_height = DEFAULT_LINE_HEIGHT

  # step down from the previous fragment; the first fragment opens row 0
  steps = -np.diff(df["y"].to_numpy())
  df["row"] = np.concatenate(([0], np.cumsum(steps > avg_height * ROW_GAP_FACTOR)))

  return [[fragments[p] for p in group["pos"]] for _, group in df.groupby("row", sort=True)]


def _first_column(frag: TextFragment, boundary: ColumnBoundary, names) -> str:
  for name in names:
    if frag.x < boundary[name].end:
      return name
  return ""


def row_to_record(row: List[TextFragment], boundary: ColumnBoundary, record_type: Type):
  """Assign the fragments of one row to the record's fields.

  Leading text columns are filled by boundary test. Everything right of
  them is a trailing numeric value: those are sorted by x, the rightmost
  one always becomes the last column (balance or amount) and the rest are
  matched against the remaining numeric columns. Right aligned numbers
  often start left of their nominal column, so the rightmost value cannot
  be placed by its x alone. Values beyond every numeric column are dropped.
  """
  parts = {name: [] for name in record_type.TEXT_FIELDS + record_type.NUMERIC_FIELDS}
  trailing = []
  for frag in row:
    name = _first_column(frag, boundary, record_type.TEXT_FIELDS)
    if name:
      parts[name].append(frag.text)
    else:
      trailing.append(frag)

  trailing.sort(key=lambda f: f.x)
  *rest, last_column = record_type.NUMERIC_FIELDS
  if trailing:
    parts[last_column].append(trailing.pop().text)
  for frag in trailing:
    name = _first_column(frag, boundary, rest)
    if name:
      parts[name].append(frag.text)

  return record_type(**{name: collapse_whitespace(" ".join(texts)) for name, texts in parts.items()})


def extract_transactions(fragments: List[TextFragment], boundary: ColumnBoundary) -> list:
  """Records of ``boundary.kind`` found below the header row, in page order."""
  record_type = RECORD_TYPES[boundary.kind]
  records = []
  rows = cluster_rows(fragments, boundary.header_y)
  logger.debug(f"{len(rows)} {boundary.kind.value} rows below header y={boundary.header_y:.1f}")
  for row in rows:
    record = row_to_record(row, boundary, record_type)
    if any(getattr(record, name) for name in record_type.TEXT_FIELDS + record_type.NUMERIC_FIELDS):
      records.append(record)
  return records
