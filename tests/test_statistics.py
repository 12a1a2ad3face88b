import unittest

from brokerstatementconverter.models import CashTransaction, InterestTransaction, TradingTransaction
from brokerstatementconverter.statistics import (
  cash_flow_summary,
  count_by_type,
  daily_series,
  top_outgoing,
  trading_volume_by_month,
  type_breakdown,
  weekday_spending,
)

CASH = [
  CashTransaction("01 Jan. 2024", "Gutschrift", "Gehalt", "2.000,00", "", "2.000,00"),
  CashTransaction("01 Jan. 2024", "Kartentransaktion", "Bäcker", "", "5,00", "1.995,00"),
  CashTransaction("02 Jan. 2024", "Kartentransaktion", "Supermarkt", "", "45,00", "1.950,00"),
  CashTransaction("02 Jan. 2024", "Kartentransaktion", "Bäcker", "", "3,00", "1.947,00"),
  CashTransaction("03 Jan. 2024", "Überweisung", "Miete", "", "900,00", "1.047,00"),
  CashTransaction("ohne Datum", "", "", "10,00", "", "1.057,00"),
]


class CashStatisticsTest(unittest.TestCase):
  def test_cash_flow_summary(self):
    summary = cash_flow_summary(CASH)
    self.assertAlmostEqual(summary["incoming"], 2010.0)
    self.assertAlmostEqual(summary["outgoing"], 953.0)
    self.assertAlmostEqual(summary["net_change"], 1057.0)
    self.assertEqual(summary["outgoing_count"], 4)
    self.assertAlmostEqual(summary["average_outgoing"], 238.25)

  def test_empty_summary(self):
    self.assertEqual(cash_flow_summary([])["average_outgoing"], 0.0)

  def test_count_by_type(self):
    counts = count_by_type(CASH)
    self.assertEqual(counts.iloc[0]["type"], "Kartentransaktion")
    self.assertEqual(counts.iloc[0]["count"], 3)
    self.assertIn("Andere", list(counts["type"]))

  def test_count_by_interest_type(self):
    interest = [InterestTransaction(zahlungsart="Zinsen"), InterestTransaction(zahlungsart="Zinsen")]
    counts = count_by_type(interest, field="zahlungsart")
    self.assertEqual(counts.iloc[0].tolist(), ["Zinsen", 2])

  def test_daily_series(self):
    series = daily_series(CASH)
    self.assertEqual(len(series), 3)
    first = series.iloc[0]
    self.assertAlmostEqual(first["incoming"], 2000.0)
    self.assertAlmostEqual(first["outgoing"], 5.0)
    self.assertAlmostEqual(first["net"], 1995.0)
    self.assertAlmostEqual(first["balance"], 1995.0)
    self.assertAlmostEqual(series.iloc[1]["balance"], 1947.0)

  def test_type_breakdown(self):
    breakdown = type_breakdown(CASH)
    self.assertEqual(breakdown.iloc[0]["label"], "Überweisung")
    self.assertAlmostEqual(breakdown.iloc[1]["outgoing"], 53.0)

  def test_top_outgoing(self):
    top = top_outgoing(CASH, limit=2)
    self.assertEqual(list(top["label"]), ["Miete", "Supermarkt"])
    bakery = top_outgoing(CASH)
    self.assertAlmostEqual(bakery.set_index("label").loc["Bäcker", "value"], 8.0)

  def test_weekday_spending(self):
    # 1 Jan 2024 is a Monday
    spending = weekday_spending(CASH)
    self.assertEqual(list(spending.index), ["Mo", "Di", "Mi", "Do", "Fr", "Sa", "So"])
    self.assertAlmostEqual(spending["Mo"], 5.0)
    self.assertAlmostEqual(spending["Di"], 48.0)
    self.assertAlmostEqual(spending["Mi"], 900.0)
    self.assertEqual(spending["So"], 0.0)


class TradingStatisticsTest(unittest.TestCase):
  def test_volume_by_month(self):
    trades = [
      TradingTransaction("05 Jan. 2024", "DE0001234567", "A", "Kauf", True, 100.0, "1"),
      TradingTransaction("20 Jan. 2024", "DE0001234567", "A", "Verkauf", False, 150.0, "2"),
      TradingTransaction("03 Feb. 2024", "DE0001234567", "A", "Kauf", True, 50.0, "3"),
    ]
    volume = trading_volume_by_month(trades)
    self.assertEqual(list(volume["month"]), ["2024-01", "2024-02"])
    self.assertEqual(volume.iloc[0][["buy", "sell"]].tolist(), [100.0, 150.0])

  def test_no_trades(self):
    self.assertTrue(trading_volume_by_month([]).empty)


if __name__ == '__main__':
  unittest.main()
