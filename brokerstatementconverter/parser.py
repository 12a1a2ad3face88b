"""Page loop that turns statement pages into cash and interest records.

Pages are consumed strictly in order: section flags and column boundaries
found on one page carry over to the next, so a table that continues on a
page without a header row is still parsed with the last known columns.
"""

import logging
from typing import Callable, Iterable, List, Optional, Sequence

from .columns import cash_column_boundaries, interest_column_boundaries
from .config import ParseOptions, resolve_options
from .headers import find_cash_headers, find_interest_headers
from .models import ParserState, StatementResult, TextFragment, TransactionKind
from .rows import extract_transactions
from .sections import scan_section

logger = logging.getLogger(__name__)

# kind -> (header locator, boundary calculator)
TABLE_HANDLERS = {
  TransactionKind.CASH: (find_cash_headers, cash_column_boundaries),
  TransactionKind.INTEREST: (find_interest_headers, interest_column_boundaries),
}


class ParseObserver:
  """Receives status text and page progress. The base class ignores both."""

  def on_status(self, message: str) -> None:
    pass

  def on_progress(self, current: int, total: Optional[int]) -> None:
    pass


class CallbackObserver(ParseObserver):
  def __init__(self, update_status: Optional[Callable] = None, update_progress: Optional[Callable] = None):
    self.update_status = update_status
    self.update_progress = update_progress

  def on_status(self, message: str) -> None:
    if self.update_status:
      self.update_status(message)

  def on_progress(self, current: int, total: Optional[int]) -> None:
    if self.update_progress:
      self.update_progress(current, total)


class StatementParser:
  """Parses pages of positioned text into a :class:`StatementResult`.

  The parser only holds options; all per-document state lives in a
  :class:`ParserState`, so one instance can parse any number of documents.
  """

  def __init__(self, options: Optional[ParseOptions] = None, **kwargs):
    self.options = resolve_options(options, **kwargs)
    self.observer = self.options.observer or CallbackObserver(
      self.options.update_status, self.options.update_progress)

  def new_state(self) -> ParserState:
    return ParserState()

  def strip_footer(self, fragments: List[TextFragment]) -> List[TextFragment]:
    band = self.options.footer_band
    return [f for f in fragments if f.y > band]

  def parse_page(self, state: ParserState, fragments: List[TextFragment], page_num: Optional[int] = None) -> None:
    """Process one page and advance ``state``."""
    page_label = page_num if page_num is not None else state.pages + 1
    items = self.strip_footer(fragments)

    for kind, (find_headers, compute_boundaries) in TABLE_HANDLERS.items():
      inside = state.sections.is_inside(kind)
      scan = scan_section(items, kind, inside)

      if scan.should_process:
        headers = find_headers(scan.fragments)
        if headers is not None:
          state.boundaries[kind] = compute_boundaries(headers)
          logger.debug(f"Page {page_label}: new {kind.value} boundaries {state.boundaries[kind]}")
        elif inside and kind in state.boundaries:
          logger.debug(f"Page {page_label}: no {kind.value} header, keeping previous boundaries")

        boundary = state.boundaries.get(kind)
        if boundary is not None:
          records = extract_transactions(scan.fragments, boundary)
          state.records(kind).extend(records)
          logger.info(f"Page {page_label}: extracted {len(records)} {kind.value} transactions")

      state.sections.set_inside(kind, scan.inside_after)

    state.pages += 1

  def parse_pages(self, pages: Iterable[List[TextFragment]], total_pages: Optional[int] = None) -> StatementResult:
    """Parse pages in order. ``pages`` may be a lazy iterator."""
    state = self.new_state()
    self.observer.on_status("Parsing PDF...")

    for page_num, fragments in enumerate(pages, start=1):
      if total_pages:
        self.observer.on_status(f"Processing page {page_num} of {total_pages}")
      else:
        self.observer.on_status(f"Processing page {page_num}")
      self.parse_page(state, fragments, page_num)
      self.observer.on_progress(page_num, total_pages)

    logger.info(f"Total cash transactions: {len(state.cash)}")
    logger.info(f"Total interest transactions: {len(state.interest)}")
    return StatementResult(cash=tuple(state.cash), interest=tuple(state.interest), pages=state.pages)

  def parse_pdf(self, pdf_path: str) -> StatementResult:
    """Read ``pdf_path`` page by page and parse it."""
    from .pdf_source import PdfFragmentSource

    with PdfFragmentSource(pdf_path, engine=self.options.engine) as source:
      result = self.parse_pages(source.pages(), source.page_count)
    if not result.cash and not result.interest:
      logger.warning(f"No transactions found in {pdf_path}")
    return result


def parse_statement(pages: Iterable[List[TextFragment]], total_pages: Optional[int] = None,
                    **kwargs) -> StatementResult:
  """Shortcut for ``StatementParser(**kwargs).parse_pages(pages)``.

  The page count defaults to ``len(pages)`` when ``pages`` is a sequence.
  """
  if total_pages is None and isinstance(pages, Sequence):
    total_pages = len(pages)
  return StatementParser(**kwargs).parse_pages(pages, total_pages)
