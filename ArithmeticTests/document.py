#!/usr/bin/env python
from __future__ import annotations

import logging
import random
from typing import TextIO

import ArithmeticTests.contentast as ca
from ArithmeticTests.constants import NUM_DIGITS, CountLimits
from ArithmeticTests.misc import ArithmeticTestError, Operation, parse_operation
from ArithmeticTests.page import ensure_writable, render_page
from ArithmeticTests.table import OperandTable, build_table, shuffle_table

log = logging.getLogger(__name__)


def validate_num_tests(value) -> int:
  """Accept an int or a decimal string in the allowed range."""
  message = (
    f"num_tests ({value}) is not a positive integer between "
    f"{CountLimits.MIN_TESTS} and {CountLimits.MAX_TESTS}."
  )
  if isinstance(value, bool):
    raise ArithmeticTestError(message)
  if isinstance(value, str):
    # ASCII digits only; int() would also take "²"-style or non-Latin digits
    value = value.strip()
    if not (value.isascii() and value.isdecimal()):
      raise ArithmeticTestError(message)
    value = int(value)
  if not isinstance(value, int) or not (CountLimits.MIN_TESTS <= value <= CountLimits.MAX_TESTS):
    raise ArithmeticTestError(message)
  return value


class ArithmeticTestDocument:
  """
  A full test document: score tracker, solutions page, then practice pages.

  The table is built once. The solutions page shows it in build order and
  every practice page reshuffles it first, so all pages share one table.
  """

  operation: Operation
  num_tests: int
  table: OperandTable
  rng: random.Random

  def __init__(self, operation: Operation | str, num_tests: int, *, rng: random.Random | None = None,
               num_digits: int = NUM_DIGITS):
    self.operation = parse_operation(operation)
    self.num_tests = validate_num_tests(num_tests)
    self.rng = rng if rng is not None else random.Random()
    self.table = build_table(self.operation, num_digits)

    if self.num_tests > CountLimits.TRACKER_PAGE_CAPACITY:
      log.info(
        f"{self.num_tests} tests will not fit on one score tracker page "
        f"({CountLimits.TRACKER_PAGE_CAPACITY} per page); it will span several"
      )

  def describe(self) -> str:
    return f"{self.num_tests} {self.operation.label.lower()} test(s)"

  def write(self, sink: TextIO) -> None:
    ensure_writable(sink)
    for element in (ca.Preamble(), ca.ScoreTracker(self.num_tests), ca.NewPage()):
      sink.write(element.render("latex"))

    render_page(sink, self.table, self.operation, include_solutions=True)
    sink.write(ca.PageNumbering().render("latex"))

    for test_number in range(1, self.num_tests + 1):
      shuffle_table(self.table, self.operation, self.rng)
      render_page(sink, self.table, self.operation, include_solutions=False)
      log.debug(f"Wrote practice page {test_number}/{self.num_tests}")

    sink.write("\\end{document}")
    log.info(f"Wrote {self.describe()}")
