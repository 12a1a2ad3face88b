"""Read positioned text runs out of PDF pages.

Both backends report coordinates from the top of the page; fragments are
converted so that ``y`` grows upward from the bottom edge.
"""

import logging
from typing import Iterator, List

import fitz  # PyMuPDF
import pdfplumber

from .config import DEFAULT_ENGINE, ENGINES
from .models import TextFragment

logger = logging.getLogger(__name__)


class StatementLoadError(Exception):
  """The document could not be opened or read."""


def plumber_page_fragments(page) -> List[TextFragment]:
  """Word runs of a pdfplumber page. Runs joined by single spaces stay together."""
  fragments = []
  for word in page.extract_words(keep_blank_chars=True, use_text_flow=False):
    fragments.append(TextFragment(
      text=word["text"],
      x=float(word["x0"]),
      y=float(page.height - word["bottom"]),
      width=float(word["x1"] - word["x0"]),
      height=float(word["bottom"] - word["top"]),
    ))
  return fragments


def pymupdf_page_fragments(page) -> List[TextFragment]:
  """Text spans of a PyMuPDF page."""
  page_height = page.rect.height
  fragments = []
  for block in page.get_text("dict")["blocks"]:
    for line in block.get("lines", []):
      for span in line["spans"]:
        if not span["text"].strip():
          continue
        x0, y0, x1, y1 = span["bbox"]
        fragments.append(TextFragment(
          text=span["text"],
          x=float(x0),
          y=float(page_height - y1),
          width=float(x1 - x0),
          height=float(y1 - y0),
        ))
  return fragments


class PdfFragmentSource:
  """Context manager yielding one fragment list per page.

  >>> with PdfFragmentSource("statement.pdf") as source:
  ...   for fragments in source.pages():
  ...     ...
  """

  def __init__(self, pdf_path: str, engine: str = DEFAULT_ENGINE):
    if engine not in ENGINES:
      raise ValueError(f"Unknown engine {engine!r}, expected one of {', '.join(ENGINES)}")
    self.pdf_path = pdf_path
    self.engine = engine
    self._doc = None

  def open(self) -> "PdfFragmentSource":
    try:
      if self.engine == "pymupdf":
        self._doc = fitz.open(self.pdf_path)
      else:
        self._doc = pdfplumber.open(self.pdf_path)
      page_count = self.page_count
    except Exception as e:
      self.close()
      raise StatementLoadError(f"Cannot open {self.pdf_path}: {e}") from e
    logger.info(f"Opened {self.pdf_path} with {self.engine} ({page_count} pages)")
    return self

  def close(self) -> None:
    if self._doc is not None:
      self._doc.close()
      self._doc = None

  def __enter__(self):
    return self.open()

  def __exit__(self, exc_type, exc, tb):
    self.close()

  @property
  def page_count(self) -> int:
    if self._doc is None:
      return 0
    if self.engine == "pymupdf":
      return self._doc.page_count
    return len(self._doc.pages)

  def pages(self) -> Iterator[List[TextFragment]]:
    """Yield fragments page by page; the next page is read only on demand."""
    if self._doc is None:
      self.open()
    if self.engine == "pymupdf":
      pages, extract = self._doc, pymupdf_page_fragments
    else:
      pages, extract = self._doc.pages, plumber_page_fragments
    for page_num, page in enumerate(pages, start=1):
      try:
        fragments = extract(page)
      except Exception as e:
        raise StatementLoadError(f"Cannot read page {page_num} of {self.pdf_path}: {e}") from e
      finally:
        if self.engine == "pdfplumber":
          # drop the page's parsed layout before moving on
          page.close()
      logger.debug(f"Page {page_num}: {len(fragments)} text fragments")
      yield fragments


def read_pages(pdf_path: str, engine: str = DEFAULT_ENGINE) -> List[List[TextFragment]]:
  """All pages of ``pdf_path`` as fragment lists."""
  with PdfFragmentSource(pdf_path, engine=engine) as source:
    return list(source.pages())
