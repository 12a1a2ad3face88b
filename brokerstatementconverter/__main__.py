import argparse
import logging
import os
import sys

from .config import DEFAULT_ENGINE, DEFAULT_FOOTER_BAND, ENGINES, ParseOptions
from .converter import BrokerStatementConverter
from .pdf_source import StatementLoadError
from .statistics import cash_flow_summary

logger = logging.getLogger("brokerstatementconverter")


def write_tables(result, output_dir):
  """Write the cash, interest and trading tables of one statement as CSV."""
  stem = os.path.splitext(os.path.basename(result.source_file))[0]
  written = []
  for name, table in result.frames().items():
    path = os.path.join(output_dir, f"{stem}_{name}.csv")
    table.to_csv(path, sep=";", index=False)
    written.append(path)
  return written


def main(argv=None):
  parser = argparse.ArgumentParser(description='Extract cash, interest and trading tables from broker statements')
  parser.add_argument('pdfs', nargs='+', help='Statement PDF files')
  parser.add_argument('--output-dir', default='.', help='Directory for the CSV files')
  parser.add_argument('--holdings', help='Securities statement PDF used for unrealized P&L')
  parser.add_argument('--footer-band', type=float, default=DEFAULT_FOOTER_BAND,
                      help='Ignore text at or below this height from the page bottom (points)')
  parser.add_argument('--engine', choices=ENGINES, default=DEFAULT_ENGINE, help='PDF text backend')
  parser.add_argument('--fallback-price-date', help='Price date for holdings lines that print none')
  parser.add_argument('--verbose', action='store_true', help='Debug logging')
  args = parser.parse_args(argv)

  logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                      format="%(levelname)s | %(message)s")

  options = ParseOptions(footer_band=args.footer_band, engine=args.engine,
                         fallback_price_date=args.fallback_price_date)
  converter = BrokerStatementConverter(options)

  holdings = None
  if args.holdings:
    try:
      holdings = converter.load_holdings(args.holdings)
    except StatementLoadError as e:
      logger.error(str(e))
      return 1

  os.makedirs(args.output_dir, exist_ok=True)
  batch = converter.convert_multiple(args.pdfs, holdings=holdings)
  for result in batch.results:
    for path in write_tables(result, args.output_dir):
      logger.info(f"Saved {path}")
    flow = cash_flow_summary(result.statement.cash)
    logger.info(f"Cash: in {flow['incoming']:.2f}, out {flow['outgoing']:.2f}, net {flow['net_change']:.2f}, "
                f"{result.sanity.failed_checks} rows fail the balance check")
    trading = result.trading
    logger.info(f"Trading: invested {trading.total_invested:.2f}, realized {trading.total_realized:.2f}, "
                f"{trading.open_positions} open / {trading.closed_positions} closed positions")
    if trading.has_securities_data:
      logger.info(f"Unrealized {trading.total_unrealized_pnl:.2f}, total P&L {trading.total_pnl:.2f}")

  return 1 if batch.failed else 0


if __name__ == '__main__':
  sys.exit(main())
