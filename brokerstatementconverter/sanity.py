"""Running balance check for cash transactions."""

import logging
from dataclasses import replace
from typing import Sequence

from .models import CashTransaction, SanityReport
from .normalize import parse_currency, try_parse_currency

logger = logging.getLogger(__name__)

BALANCE_TOLERANCE = 0.02


def compute_cash_sanity_checks(transactions: Sequence[CashTransaction]) -> SanityReport:
  """Check that each balance equals the previous one plus incoming minus outgoing.

  The first row has no predecessor and always passes. Rows whose own or
  previous balance cannot be read as a number are not checked. Each input
  record is returned as a copy carrying ``sanity_check_ok``.
  """
  checked = []
  failed_checks = 0
  for index, tx in enumerate(transactions):
    ok = True
    if index > 0:
      previous = try_parse_currency(transactions[index - 1].saldo)
      current = try_parse_currency(tx.saldo)
      if previous is not None and current is not None:
        expected = previous + parse_currency(tx.zahlungseingang) - parse_currency(tx.zahlungsausgang)
        if abs(expected - current) > BALANCE_TOLERANCE:
          ok = False
          failed_checks += 1
          logger.debug(f"Balance mismatch at row {index}: expected {expected:.2f}, found {current:.2f}")
    checked.append(replace(tx, sanity_check_ok=ok))

  if failed_checks:
    logger.warning(f"{failed_checks} of {len(checked)} cash rows fail the balance check")
  return SanityReport(transactions=tuple(checked), failed_checks=failed_checks)
