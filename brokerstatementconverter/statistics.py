"""Summary figures for parsed cash and trading data."""

from typing import Dict, Sequence

import pandas as pd

from .models import CashTransaction, TradingTransaction
from .normalize import parse_currency, parse_localized_date

WEEKDAY_LABELS = ["Mo", "Di", "Mi", "Do", "Fr", "Sa", "So"]
UNKNOWN_TYPE = "Andere"
UNKNOWN_DESCRIPTION = "Unbekannt"


def cash_frame(transactions: Sequence[CashTransaction], dated_only: bool = True) -> pd.DataFrame:
  """Numeric view of cash rows: parsed date, amounts, net and balance."""
  df = pd.DataFrame({
    "date": pd.to_datetime([parse_localized_date(t.datum) for t in transactions]),
    "typ": [t.typ or UNKNOWN_TYPE for t in transactions],
    "beschreibung": [t.beschreibung or UNKNOWN_DESCRIPTION for t in transactions],
    "incoming": [parse_currency(t.zahlungseingang) for t in transactions],
    "outgoing": [parse_currency(t.zahlungsausgang) for t in transactions],
    "balance": [parse_currency(t.saldo) for t in transactions],
  }, columns=["date", "typ", "beschreibung", "incoming", "outgoing", "balance"])
  df["net"] = df["incoming"] - df["outgoing"]
  if dated_only:
    df = df.dropna(subset=["date"])
  return df


def count_by_type(records: Sequence, field: str = "typ") -> pd.DataFrame:
  """Number of records per type label, most frequent first."""
  labels = pd.Series([getattr(r, field, "") or UNKNOWN_TYPE for r in records], dtype=object)
  counts = labels.value_counts(sort=True)
  return pd.DataFrame({"type": counts.index, "count": counts.values})


def cash_flow_summary(transactions: Sequence[CashTransaction]) -> Dict[str, float]:
  """Totals over every row, dated or not."""
  df = cash_frame(transactions, dated_only=False)
  incoming = float(df["incoming"].sum())
  outgoing = float(df["outgoing"].sum())
  outgoing_count = int((df["outgoing"] > 0).sum())
  return {
    "incoming": incoming,
    "outgoing": outgoing,
    "net_change": incoming - outgoing,
    "outgoing_count": outgoing_count,
    "average_outgoing": outgoing / outgoing_count if outgoing_count else 0.0,
  }


def daily_series(transactions: Sequence[CashTransaction]) -> pd.DataFrame:
  """Per day sums of incoming, outgoing and net; ``balance`` is the day's last balance."""
  df = cash_frame(transactions)
  if df.empty:
    return pd.DataFrame(columns=["incoming", "outgoing", "net", "balance"])
  return df.groupby("date", sort=True).agg(
    incoming=("incoming", "sum"),
    outgoing=("outgoing", "sum"),
    net=("net", "sum"),
    balance=("balance", "last"),
  )


def type_breakdown(transactions: Sequence[CashTransaction]) -> pd.DataFrame:
  df = cash_frame(transactions)
  totals = df.groupby("typ", sort=False)[["incoming", "outgoing"]].sum()
  totals = totals.sort_values("outgoing", ascending=False, kind="mergesort")
  return totals.reset_index().rename(columns={"typ": "label"})


def top_outgoing(transactions: Sequence[CashTransaction], limit: int = 7) -> pd.DataFrame:
  """Descriptions with the largest outgoing totals."""
  df = cash_frame(transactions)
  df = df[df["outgoing"] > 0]
  totals = df.groupby("beschreibung", sort=False)["outgoing"].sum()
  totals = totals.sort_values(ascending=False, kind="mergesort").head(limit)
  return pd.DataFrame({"label": totals.index, "value": totals.values})


def weekday_spending(transactions: Sequence[CashTransaction]) -> pd.Series:
  """Outgoing totals per weekday, Monday first."""
  df = cash_frame(transactions)
  df = df[df["outgoing"] > 0]
  totals = df.groupby(df["date"].dt.dayofweek)["outgoing"].sum()
  totals = totals.reindex(range(7), fill_value=0.0)
  totals.index = WEEKDAY_LABELS
  return totals


def trading_volume_by_month(trades: Sequence[TradingTransaction]) -> pd.DataFrame:
  """Buy and sell volume per calendar month of dated trades."""
  df = pd.DataFrame({
    "date": pd.to_datetime([t.parsed_date for t in trades]),
    "buy": [t.amount if t.is_buy else 0.0 for t in trades],
    "sell": [0.0 if t.is_buy else t.amount for t in trades],
  }, columns=["date", "buy", "sell"])
  df = df.dropna(subset=["date"])
  if df.empty:
    return pd.DataFrame(columns=["month", "buy", "sell"])
  df["month"] = df["date"].dt.strftime("%Y-%m")
  return df.groupby("month", sort=True)[["buy", "sell"]].sum().reset_index()
