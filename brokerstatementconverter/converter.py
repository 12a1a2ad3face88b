"""Convert broker statement PDFs into cash, interest and trading tables."""

import logging
import os
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

import pandas as pd

from .config import ParseOptions, resolve_options
from .models import Holding, SanityReport, StatementResult, TradingSummary, TradingTransaction, TransactionKind
from .parser import StatementParser
from .sanity import compute_cash_sanity_checks
from .securities import parse_holdings_pdf
from .trading import calculate_pnl, enrich_with_holdings, parse_trading_transactions

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
  source_file: str
  statement: StatementResult
  sanity: SanityReport
  trades: List[TradingTransaction]
  trading: TradingSummary

  def frames(self) -> Dict[str, pd.DataFrame]:
    """Tables keyed ``cash``, ``interest`` and ``trading``.

    The cash table carries the balance check result per row.
    """
    frames = self.statement.to_frames()
    cash = pd.DataFrame([t.to_dict() for t in self.sanity.transactions], columns=frames[TransactionKind.CASH].columns)
    return {
      "cash": cash,
      "interest": frames[TransactionKind.INTEREST],
      "trading": self.trading.to_frame(),
    }


@dataclass
class BatchResult:
  results: List[ConversionResult] = field(default_factory=list)
  failed: Dict[str, str] = field(default_factory=dict)

  def combined(self, name: str) -> pd.DataFrame:
    """Concatenate one table over all converted files, tagged with ``source_file``."""
    tables = []
    for result in self.results:
      table = result.frames()[name]
      if not table.empty:
        table = table.copy()
        table["source_file"] = os.path.basename(result.source_file)
        tables.append(table)
    if tables:
      return pd.concat(tables, ignore_index=True)
    return pd.DataFrame()


class BrokerStatementConverter:
  def __init__(self, options: Optional[ParseOptions] = None, **kwargs):
    self.options = resolve_options(options, **kwargs)
    self.parser = StatementParser(self.options)

  def load_holdings(self, pdf_path: str) -> List[Holding]:
    """Holdings of a securities statement, used for unrealized P&L."""
    return parse_holdings_pdf(pdf_path, engine=self.options.engine,
                              fallback_price_date=self.options.fallback_price_date)

  def convert_statement(self, statement: StatementResult, source_file: str = "",
                        holdings: Optional[Sequence[Holding]] = None) -> ConversionResult:
    """Run the balance check and trading analysis on a parsed statement."""
    sanity = compute_cash_sanity_checks(statement.cash)
    trades = parse_trading_transactions(statement.cash)
    trading = calculate_pnl(trades)
    if holdings:
      trading = enrich_with_holdings(trading, holdings)
    return ConversionResult(source_file, statement, sanity, trades, trading)

  def convert(self, pdf_path: str, holdings: Optional[Sequence[Holding]] = None) -> ConversionResult:
    """Parse and analyse a single statement. Load errors propagate."""
    logger.info(f"Converting {pdf_path}")
    statement = self.parser.parse_pdf(pdf_path)
    result = self.convert_statement(statement, pdf_path, holdings)
    logger.info(f"{os.path.basename(pdf_path)}: {len(statement.cash)} cash rows "
                f"({result.sanity.failed_checks} failed checks), {len(statement.interest)} interest rows, "
                f"{result.trading.total_trades} trades")
    return result

  def convert_multiple(self, pdf_paths: List[str], progress_callback: Optional[Callable] = None,
                       holdings: Optional[Sequence[Holding]] = None) -> BatchResult:
    """Convert several statements, logging and skipping the ones that fail."""
    batch = BatchResult()
    total_files = len(pdf_paths)

    for i, path in enumerate(pdf_paths):
      if progress_callback:
        progress_callback(i * 100 // max(total_files, 1), f"Processing {os.path.basename(path)}...")
      try:
        batch.results.append(self.convert(path, holdings))
      except Exception as e:
        logger.error(f"Error processing {path}: {str(e)}")
        batch.failed[path] = str(e)
        continue

    if progress_callback:
      progress_callback(100, "Processing complete!")
    return batch
