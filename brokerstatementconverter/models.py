"""Data containers shared by the parser, the checks and the trading analysis."""

import datetime
import math
from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import ClassVar, Dict, List, Optional, Tuple

import pandas as pd

from .normalize import parse_localized_date


class TransactionKind(str, Enum):
  CASH = "cash"
  INTEREST = "interest"


@dataclass(frozen=True)
class TextFragment:
  """A run of text placed on a page.

  Coordinates follow the PDF convention: ``y`` grows upward and ``y=0`` is
  near the bottom edge of the page.
  """

  text: str
  x: float
  y: float
  width: float = 0.0
  height: float = 0.0


@dataclass(frozen=True)
class ColumnRange:
  """Half-open horizontal interval ``[start, end)``."""

  start: float
  end: float = math.inf

  def contains(self, x: float) -> bool:
    return self.start <= x < self.end


@dataclass(frozen=True)
class ColumnBoundary:
  """Column ranges of one table kind plus the y of its header row."""

  kind: TransactionKind
  columns: Dict[str, ColumnRange]
  header_y: float

  def __getitem__(self, name: str) -> ColumnRange:
    return self.columns[name]


@dataclass(frozen=True)
class CashTransaction:
  kind: ClassVar[TransactionKind] = TransactionKind.CASH
  TEXT_FIELDS: ClassVar[Tuple[str, ...]] = ("datum", "typ", "beschreibung")
  NUMERIC_FIELDS: ClassVar[Tuple[str, ...]] = ("zahlungseingang", "zahlungsausgang", "saldo")

  datum: str = ""
  typ: str = ""
  beschreibung: str = ""
  zahlungseingang: str = ""
  zahlungsausgang: str = ""
  saldo: str = ""
  sanity_check_ok: Optional[bool] = None

  def to_dict(self) -> Dict[str, object]:
    return asdict(self)


@dataclass(frozen=True)
class InterestTransaction:
  kind: ClassVar[TransactionKind] = TransactionKind.INTEREST
  TEXT_FIELDS: ClassVar[Tuple[str, ...]] = ("datum", "zahlungsart", "geldmarktfonds")
  NUMERIC_FIELDS: ClassVar[Tuple[str, ...]] = ("stueck", "kurs", "betrag")

  datum: str = ""
  zahlungsart: str = ""
  geldmarktfonds: str = ""
  stueck: str = ""
  kurs: str = ""
  betrag: str = ""

  def to_dict(self) -> Dict[str, object]:
    return asdict(self)


RECORD_TYPES = {
  TransactionKind.CASH: CashTransaction,
  TransactionKind.INTEREST: InterestTransaction,
}


def record_columns(kind: TransactionKind) -> List[str]:
  return [f.name for f in fields(RECORD_TYPES[kind])]


@dataclass
class SectionState:
  """Per kind flag: keep scanning pages that carry no start marker."""

  cash: bool = False
  interest: bool = False

  def is_inside(self, kind: TransactionKind) -> bool:
    return getattr(self, kind.value)

  def set_inside(self, kind: TransactionKind, inside: bool) -> None:
    setattr(self, kind.value, inside)


@dataclass
class ParserState:
  """Everything one parse run carries from page to page."""

  sections: SectionState = field(default_factory=SectionState)
  boundaries: Dict[TransactionKind, ColumnBoundary] = field(default_factory=dict)
  cash: List[CashTransaction] = field(default_factory=list)
  interest: List[InterestTransaction] = field(default_factory=list)
  pages: int = 0

  def records(self, kind: TransactionKind) -> list:
    return self.cash if kind is TransactionKind.CASH else self.interest


@dataclass(frozen=True)
class StatementResult:
  cash: Tuple[CashTransaction, ...] = ()
  interest: Tuple[InterestTransaction, ...] = ()
  pages: int = 0

  def to_frames(self) -> Dict[TransactionKind, pd.DataFrame]:
    """One DataFrame per table kind, columns in record field order."""
    return {
      TransactionKind.CASH: _frame(self.cash, TransactionKind.CASH),
      TransactionKind.INTEREST: _frame(self.interest, TransactionKind.INTEREST),
    }


def _frame(records, kind: TransactionKind) -> pd.DataFrame:
  return pd.DataFrame([r.to_dict() for r in records], columns=record_columns(kind))


@dataclass(frozen=True)
class SanityReport:
  transactions: Tuple[CashTransaction, ...]
  failed_checks: int = 0


# --- Trading ---

class PositionStatus(str, Enum):
  OPEN = "Offen (Holding)"
  SOLD_UNKNOWN_PURCHASE = "Verkauf (Unbekannter Einkauf)"
  PARTIALLY_SOLD = "Teilweise verkauft"
  CLOSED = "Komplett verkauft"
  BALANCED = "Ausgeglichen"


@dataclass(frozen=True)
class TradingTransaction:
  date: str
  isin: str
  stock_name: str
  action: str
  is_buy: bool
  amount: float
  trade_id: str
  balance: str = ""

  @property
  def parsed_date(self) -> Optional[datetime.date]:
    return parse_localized_date(self.date)


@dataclass
class Position:
  isin: str
  stock_name: str
  total_bought: float
  total_sold: float
  net_cash_flow: float
  realized_gain_loss: float
  cost_basis: float
  status: PositionStatus
  is_open: bool
  num_buys: int = 0
  num_sells: int = 0
  total_transactions: int = 0
  first_trade: Optional[str] = None
  last_trade: Optional[str] = None
  # filled in from a securities statement
  current_value: Optional[float] = None
  current_price: Optional[float] = None
  current_quantity: Optional[float] = None
  price_date: Optional[str] = None
  unrealized_pnl: float = 0.0
  unrealized_pnl_percentage: float = 0.0
  total_pnl: Optional[float] = None
  has_current_data: bool = False

  def to_dict(self) -> Dict[str, object]:
    row = asdict(self)
    row["status"] = self.status.value
    return row


@dataclass
class TradingSummary:
  pnl_summary: List[Position] = field(default_factory=list)
  total_invested: float = 0.0
  total_realized: float = 0.0
  total_net_cash_flow: float = 0.0
  total_trades: int = 0
  total_volume: float = 0.0
  open_positions: int = 0
  closed_positions: int = 0
  total_current_value: Optional[float] = None
  total_unrealized_pnl: Optional[float] = None
  total_pnl: Optional[float] = None
  has_securities_data: bool = False
  securities_date: str = ""

  def to_frame(self) -> pd.DataFrame:
    return pd.DataFrame([p.to_dict() for p in self.pnl_summary], columns=[f.name for f in fields(Position)])


@dataclass
class Holding:
  """One position of a securities (depot) statement."""

  quantity: Optional[float]
  unit: str
  name: str
  name_extra: str = ""
  isin: str = ""
  price_per_unit: Optional[float] = None
  price_date: Optional[str] = None
  market_value: Optional[float] = None
  custody_country: str = ""
  computed_value: Optional[float] = None
