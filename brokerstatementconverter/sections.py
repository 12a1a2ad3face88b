"""Find where a statement section starts and ends on a page."""

from dataclasses import dataclass
from typing import List, Optional

from .lang import SECTION_MARKERS
from .models import TextFragment, TransactionKind


@dataclass(frozen=True)
class SectionScan:
  """Outcome of scanning one page for one section kind."""

  should_process: bool
  fragments: List[TextFragment]
  start_marker: Optional[TextFragment] = None
  end_marker: Optional[TextFragment] = None

  @property
  def inside_after(self) -> bool:
    """Section flag for the next page; an end marker always closes it."""
    if self.end_marker is not None:
      return False
    return self.should_process


def find_start_marker(fragments: List[TextFragment], kind: TransactionKind) -> Optional[TextFragment]:
  labels = SECTION_MARKERS[kind.value]["start"]
  return next((f for f in fragments if f.text.strip() in labels), None)


def find_end_marker(fragments: List[TextFragment], kind: TransactionKind) -> Optional[TextFragment]:
  labels = SECTION_MARKERS[kind.value]["end"]
  return next((f for f in fragments if any(label in f.text.strip() for label in labels)), None)


def scan_section(fragments: List[TextFragment], kind: TransactionKind, inside: bool) -> SectionScan:
  """Crop a page to the part that belongs to ``kind``.

  Content is kept at or below the start marker and strictly above the end
  marker. The first marker in input order wins when a label repeats.
  """
  start = find_start_marker(fragments, kind)
  end = find_end_marker(fragments, kind)
  should_process = inside or start is not None
  if not should_process:
    return SectionScan(False, [], start, end)

  cropped = list(fragments)
  if start is not None:
    cropped = [f for f in cropped if f.y <= start.y]
  if end is not None:
    cropped = [f for f in cropped if f.y > end.y]
  return SectionScan(True, cropped, start, end)
