import unittest

from brokerstatementconverter.models import CashTransaction, Holding, PositionStatus
from brokerstatementconverter.trading import calculate_pnl, enrich_with_holdings, parse_trading_transactions


def trade_row(datum, action, isin, name, trade_id, incoming="", outgoing=""):
  direction = "kauf" if action == "Kauf" else "verkauf"
  return CashTransaction(
    datum=datum,
    typ="Handel",
    beschreibung=f"Ausführung Handel Direkt{direction} {action} {isin} {name} {trade_id}",
    zahlungseingang=incoming,
    zahlungsausgang=outgoing,
    saldo="1.000,00",
  )


class ParseTradesTest(unittest.TestCase):
  def test_buy(self):
    rows = [CashTransaction(datum="03 Jan. 2024", typ="Handel",
                            beschreibung="Ausführung Handel Direktkauf Kauf DE0001234567 EXAMPLE AG 987654",
                            zahlungsausgang="500,00", saldo="500,00")]
    trades = parse_trading_transactions(rows)
    self.assertEqual(len(trades), 1)
    trade = trades[0]
    self.assertEqual(trade.isin, "DE0001234567")
    self.assertTrue(trade.is_buy)
    self.assertEqual(trade.amount, 500.00)
    self.assertEqual(trade.stock_name, "EXAMPLE AG")
    self.assertEqual(trade.trade_id, "987654")
    self.assertEqual(trade.balance, "500,00")

  def test_sell_uses_incoming(self):
    trades = parse_trading_transactions([trade_row("05 Jan. 2024", "Verkauf", "US0378331005", "Apple Inc.", "42",
                                                   incoming="1.250,50")])
    self.assertFalse(trades[0].is_buy)
    self.assertEqual(trades[0].amount, 1250.5)
    self.assertEqual(trades[0].action, "Verkauf")

  def test_non_trades_are_skipped(self):
    rows = [
      CashTransaction(datum="01 Jan. 2024", typ="Kartentransaktion", beschreibung="Bäcker", zahlungsausgang="5,00"),
      CashTransaction(datum="01 Jan. 2024", typ="Handel", beschreibung="Sparplan ausgeführt", zahlungsausgang="50,00"),
      trade_row("02 Jan. 2024", "Kauf", "DE0001234567", "EXAMPLE AG", "1", outgoing=""),
      trade_row("02 Jan. 2024", "Kauf", "DE0001234567", "EXAMPLE AG", "2", outgoing="0,00"),
    ]
    self.assertEqual(parse_trading_transactions(rows), [])

  def test_sorted_by_date(self):
    rows = [
      trade_row("10 Feb. 2024", "Kauf", "DE0001234567", "EXAMPLE AG", "3", outgoing="10,00"),
      trade_row("kein Datum", "Kauf", "DE0001234567", "EXAMPLE AG", "4", outgoing="10,00"),
      trade_row("05 Jan. 2024", "Kauf", "DE0001234567", "EXAMPLE AG", "1", outgoing="10,00"),
    ]
    self.assertEqual([t.trade_id for t in parse_trading_transactions(rows)], ["1", "3", "4"])


class CalculatePnlTest(unittest.TestCase):
  def _trades(self, *rows):
    return parse_trading_transactions(list(rows))

  def test_closed_position(self):
    trades = self._trades(
      trade_row("01 Jan. 2024", "Kauf", "DE0001234567", "EXAMPLE AG", "1", outgoing="500,00"),
      trade_row("01 Feb. 2024", "Verkauf", "DE0001234567", "EXAMPLE AG", "2", incoming="600,00"),
    )
    summary = calculate_pnl(trades)
    position = summary.pnl_summary[0]
    self.assertEqual(position.status, PositionStatus.CLOSED)
    self.assertAlmostEqual(position.realized_gain_loss, 100.00)
    self.assertEqual(position.cost_basis, 0)
    self.assertFalse(position.is_open)
    self.assertEqual((position.num_buys, position.num_sells, position.total_transactions), (1, 1, 2))
    self.assertEqual(position.first_trade, "01 Jan. 2024")
    self.assertEqual(position.last_trade, "01 Feb. 2024")
    self.assertEqual(summary.total_trades, 2)
    self.assertAlmostEqual(summary.total_volume, 1100.0)
    self.assertEqual((summary.open_positions, summary.closed_positions), (0, 1))

  def test_status_table(self):
    trades = self._trades(
      trade_row("01 Jan. 2024", "Kauf", "AAAAAAAAAAA1", "Open", "1", outgoing="100,00"),
      trade_row("01 Jan. 2024", "Verkauf", "AAAAAAAAAAA2", "Unknown", "2", incoming="200,00"),
      trade_row("01 Jan. 2024", "Kauf", "AAAAAAAAAAA3", "Partial", "3", outgoing="300,00"),
      trade_row("02 Jan. 2024", "Verkauf", "AAAAAAAAAAA3", "Partial", "4", incoming="120,00"),
      trade_row("01 Jan. 2024", "Kauf", "AAAAAAAAAAA4", "Even", "5", outgoing="50,00"),
      trade_row("02 Jan. 2024", "Verkauf", "AAAAAAAAAAA4", "Even", "6", incoming="50,00"),
    )
    summary = calculate_pnl(trades)
    by_isin = {p.isin: p for p in summary.pnl_summary}

    open_pos = by_isin["AAAAAAAAAAA1"]
    self.assertEqual(open_pos.status, PositionStatus.OPEN)
    self.assertEqual((open_pos.cost_basis, open_pos.realized_gain_loss), (100.0, 0.0))
    self.assertTrue(open_pos.is_open)

    unknown = by_isin["AAAAAAAAAAA2"]
    self.assertEqual(unknown.status, PositionStatus.SOLD_UNKNOWN_PURCHASE)
    self.assertEqual((unknown.cost_basis, unknown.realized_gain_loss), (0.0, 200.0))

    partial = by_isin["AAAAAAAAAAA3"]
    self.assertEqual(partial.status, PositionStatus.PARTIALLY_SOLD)
    self.assertAlmostEqual(partial.cost_basis, 180.0)
    self.assertEqual(partial.realized_gain_loss, 0.0)
    self.assertTrue(partial.is_open)

    even = by_isin["AAAAAAAAAAA4"]
    self.assertEqual(even.status, PositionStatus.BALANCED)
    self.assertFalse(even.is_open)

    self.assertEqual([p.isin for p in summary.pnl_summary][:2], ["AAAAAAAAAAA2", "AAAAAAAAAAA3"])
    self.assertAlmostEqual(summary.total_invested, 280.0)
    self.assertAlmostEqual(summary.total_realized, 200.0)
    self.assertEqual(summary.open_positions, 2)
    self.assertEqual(summary.closed_positions, 2)

  def test_empty(self):
    summary = calculate_pnl([])
    self.assertEqual(summary.pnl_summary, [])
    self.assertEqual(summary.total_volume, 0)


class EnrichTest(unittest.TestCase):
  def setUp(self):
    trades = parse_trading_transactions([
      trade_row("01 Jan. 2024", "Kauf", "DE0001234567", "EXAMPLE AG", "1", outgoing="500,00"),
      trade_row("01 Jan. 2024", "Kauf", "US0378331005", "Apple", "2", outgoing="300,00"),
      trade_row("02 Jan. 2024", "Verkauf", "US0378331005", "Apple", "3", incoming="400,00"),
    ])
    self.summary = calculate_pnl(trades)

  def test_open_position_gets_unrealized(self):
    holdings = [
      Holding(quantity=10, unit="Stk", name="EXAMPLE AG", isin="DE0001234567", price_per_unit=55.0,
              price_date="15.09.2025", market_value=550.0),
      Holding(quantity=1, unit="Stk", name="Apple", isin="US0378331005", market_value=999.0),
    ]
    enriched = enrich_with_holdings(self.summary, holdings)
    by_isin = {p.isin: p for p in enriched.pnl_summary}

    example = by_isin["DE0001234567"]
    self.assertTrue(example.has_current_data)
    self.assertEqual(example.current_value, 550.0)
    self.assertAlmostEqual(example.unrealized_pnl, 50.0)
    self.assertAlmostEqual(example.unrealized_pnl_percentage, 10.0)
    self.assertAlmostEqual(example.total_pnl, 50.0)
    self.assertEqual(example.price_date, "15.09.2025")

    # closed positions are not matched
    apple = by_isin["US0378331005"]
    self.assertFalse(apple.has_current_data)
    self.assertEqual(apple.unrealized_pnl, 0)
    self.assertAlmostEqual(apple.total_pnl, 100.0)

    self.assertTrue(enriched.has_securities_data)
    self.assertEqual(enriched.securities_date, "15.09.2025")
    self.assertAlmostEqual(enriched.total_current_value, 550.0)
    self.assertAlmostEqual(enriched.total_unrealized_pnl, 50.0)
    self.assertAlmostEqual(enriched.total_pnl, 150.0)
    # the input summary is left alone
    self.assertFalse(self.summary.has_securities_data)
    self.assertFalse(self.summary.pnl_summary[0].has_current_data)

  def test_no_holdings(self):
    self.assertIs(enrich_with_holdings(self.summary, []), self.summary)


if __name__ == '__main__':
  unittest.main()
