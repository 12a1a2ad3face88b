"""Parse options and their defaults."""

from dataclasses import dataclass, replace
from typing import Any, Callable, Optional

# Text at or below this y (points from the page bottom) is footer boilerplate.
# Tuned on one statement family; calibrate per template.
DEFAULT_FOOTER_BAND = 120.0

ENGINES = ("pdfplumber", "pymupdf")
DEFAULT_ENGINE = "pdfplumber"


@dataclass
class ParseOptions:
  """Options for one parse run. Everything is optional.

  ``update_status`` and ``update_progress`` are plain callables; ``observer``
  takes precedence over them when given. ``fallback_price_date`` is used for
  holdings lines of a securities statement that print no price date.
  """

  footer_band: float = DEFAULT_FOOTER_BAND
  engine: str = DEFAULT_ENGINE
  update_status: Optional[Callable[[str], None]] = None
  update_progress: Optional[Callable[[int, Optional[int]], None]] = None
  observer: Optional[Any] = None
  fallback_price_date: Optional[str] = None

  def __post_init__(self):
    if self.footer_band is None:
      self.footer_band = DEFAULT_FOOTER_BAND
    if self.footer_band < 0:
      raise ValueError(f"footer_band must not be negative, got {self.footer_band}")
    if self.engine not in ENGINES:
      raise ValueError(f"Unknown engine {self.engine!r}, expected one of {', '.join(ENGINES)}")


def resolve_options(options: Optional[ParseOptions] = None, **overrides) -> ParseOptions:
  """``options`` with keyword ``overrides`` applied on top."""
  if options is None:
    return ParseOptions(**overrides)
  if overrides:
    return replace(options, **overrides)
  return options
