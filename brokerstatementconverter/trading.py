"""Reconstruct trades from cash rows and aggregate them per security."""

import datetime
import logging
import re
from collections import OrderedDict
from dataclasses import replace
from typing import Dict, Iterable, List, Sequence

from .lang import BUY_ACTION, TRADE_TYPE
from .models import CashTransaction, Holding, Position, PositionStatus, TradingSummary, TradingTransaction
from .normalize import parse_currency

logger = logging.getLogger(__name__)

# "Ausführung Handel Direktkauf Kauf <ISIN> <name> <trade id>"
TRADE_RE = re.compile(r"Ausführung Handel Direkt(kauf|verkauf)\s+(Kauf|Verkauf)\s+([A-Z0-9]{12})\s+(.+?)\s+(\d+)$")


def _date_key(tx: TradingTransaction):
  parsed = tx.parsed_date
  return (parsed is None, parsed or datetime.date.min)


def parse_trading_transactions(transactions: Iterable[CashTransaction]) -> List[TradingTransaction]:
  """Trades found in cash rows of type ``Handel``, oldest first.

  Buys take their amount from the outgoing column, sells from the incoming
  column. Rows with an unrecognised description or a non-positive amount
  are skipped. Undated trades sort last.
  """
  trades = []
  for tx in transactions:
    if tx.typ != TRADE_TYPE:
      continue
    match = TRADE_RE.search(tx.beschreibung or "")
    if not match:
      logger.debug(f"Skipping trade row with unknown description: {tx.beschreibung!r}")
      continue
    _, action, isin, stock_name, trade_id = match.groups()
    is_buy = action == BUY_ACTION
    amount = parse_currency(tx.zahlungsausgang if is_buy else tx.zahlungseingang)
    if amount <= 0:
      continue
    trades.append(TradingTransaction(
      date=tx.datum,
      isin=isin,
      stock_name=stock_name.strip(),
      action=action,
      is_buy=is_buy,
      amount=amount,
      trade_id=trade_id,
      balance=tx.saldo,
    ))
  return sorted(trades, key=_date_key)


def _classify(total_bought: float, total_sold: float):
  """Return (status, cost_basis, realized_gain_loss)."""
  if total_bought > 0 and total_sold == 0:
    return PositionStatus.OPEN, total_bought, 0.0
  if total_bought == 0 and total_sold > 0:
    # bought before the statement period, cost unknown
    return PositionStatus.SOLD_UNKNOWN_PURCHASE, 0.0, total_sold
  if total_bought > total_sold:
    return PositionStatus.PARTIALLY_SOLD, total_bought - total_sold, 0.0
  if total_sold > total_bought:
    return PositionStatus.CLOSED, 0.0, total_sold - total_bought
  return PositionStatus.BALANCED, 0.0, 0.0


def calculate_pnl(trades: Sequence[TradingTransaction]) -> TradingSummary:
  """Aggregate trades per ISIN into positions.

  Positions are ordered by absolute net cash flow, largest first.
  """
  by_isin: Dict[str, List[TradingTransaction]] = OrderedDict()
  for tx in trades:
    by_isin.setdefault(tx.isin, []).append(tx)

  positions = []
  for isin, txs in by_isin.items():
    buys = [t for t in txs if t.is_buy]
    sells = [t for t in txs if not t.is_buy]
    total_bought = sum(t.amount for t in buys)
    total_sold = sum(t.amount for t in sells)
    status, cost_basis, realized = _classify(total_bought, total_sold)
    positions.append(Position(
      isin=isin,
      stock_name=txs[0].stock_name,
      total_bought=total_bought,
      total_sold=total_sold,
      net_cash_flow=total_sold - total_bought,
      realized_gain_loss=realized,
      cost_basis=cost_basis,
      status=status,
      is_open=total_sold < total_bought,
      num_buys=len(buys),
      num_sells=len(sells),
      total_transactions=len(txs),
      first_trade=txs[0].date,
      last_trade=txs[-1].date,
    ))

  positions.sort(key=lambda p: abs(p.net_cash_flow), reverse=True)
  open_positions = sum(1 for p in positions if p.is_open)

  summary = TradingSummary(
    pnl_summary=positions,
    total_invested=sum(p.cost_basis for p in positions),
    total_realized=sum(p.realized_gain_loss for p in positions),
    total_net_cash_flow=sum(p.net_cash_flow for p in positions),
    total_trades=len(trades),
    total_volume=sum(t.amount for t in trades),
    open_positions=open_positions,
    closed_positions=len(positions) - open_positions,
  )
  logger.info(f"{summary.total_trades} trades in {len(positions)} positions ({open_positions} open)")
  return summary


def enrich_with_holdings(summary: TradingSummary, holdings: Sequence[Holding]) -> TradingSummary:
  """Add unrealized P&L for open positions found in a securities statement.

  Returns a new summary; ``summary`` is left untouched. Without holdings the
  summary is returned as is.
  """
  if not holdings:
    return summary
  by_isin = {h.isin: h for h in holdings if h.isin}

  enriched = []
  for pos in summary.pnl_summary:
    holding = by_isin.get(pos.isin)
    if holding is not None and pos.is_open:
      current_value = holding.market_value or 0.0
      unrealized = current_value - pos.cost_basis
      percentage = unrealized / pos.cost_basis * 100 if pos.cost_basis > 0 else 0.0
      enriched.append(replace(
        pos,
        current_value=current_value,
        current_price=holding.price_per_unit,
        current_quantity=holding.quantity,
        price_date=holding.price_date,
        unrealized_pnl=unrealized,
        unrealized_pnl_percentage=percentage,
        total_pnl=pos.realized_gain_loss + unrealized,
        has_current_data=True,
      ))
    else:
      enriched.append(replace(pos, has_current_data=False, unrealized_pnl=0.0, total_pnl=pos.realized_gain_loss))

  matched = sum(1 for p in enriched if p.has_current_data)
  logger.info(f"Matched {matched} of {len(enriched)} positions with current holdings")

  total_unrealized = sum(p.unrealized_pnl for p in enriched)
  return replace(
    summary,
    pnl_summary=enriched,
    total_current_value=sum(p.current_value or p.cost_basis for p in enriched),
    total_unrealized_pnl=total_unrealized,
    total_pnl=summary.total_realized + total_unrealized,
    has_securities_data=True,
    securities_date=holdings[0].price_date or "",
  )
