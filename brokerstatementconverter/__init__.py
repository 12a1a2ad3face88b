"""
Broker Statement Converter Package

Extracts cash, money market fund and trading tables from the positioned
text of broker account statements.
"""

from .config import ParseOptions
from .converter import BatchResult, BrokerStatementConverter, ConversionResult
from .models import (
  CashTransaction,
  InterestTransaction,
  Position,
  PositionStatus,
  StatementResult,
  TextFragment,
  TradingSummary,
  TransactionKind,
)
from .normalize import parse_currency, parse_localized_date
from .parser import CallbackObserver, ParseObserver, StatementParser, parse_statement
from .pdf_source import PdfFragmentSource, StatementLoadError
from .sanity import compute_cash_sanity_checks
from .securities import parse_holdings
from .trading import calculate_pnl, enrich_with_holdings, parse_trading_transactions

__version__ = "1.0.0"
__author__ = "Broker Statement Converter Team"

__all__ = [
  "BatchResult",
  "BrokerStatementConverter",
  "CallbackObserver",
  "CashTransaction",
  "ConversionResult",
  "InterestTransaction",
  "ParseObserver",
  "ParseOptions",
  "PdfFragmentSource",
  "Position",
  "PositionStatus",
  "StatementLoadError",
  "StatementParser",
  "StatementResult",
  "TextFragment",
  "TradingSummary",
  "TransactionKind",
  "calculate_pnl",
  "compute_cash_sanity_checks",
  "enrich_with_holdings",
  "parse_currency",
  "parse_holdings",
  "parse_localized_date",
  "parse_statement",
  "parse_trading_transactions",
]
