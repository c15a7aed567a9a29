#!env python
from __future__ import annotations

import logging
from typing import TextIO

import ArithmeticTests.contentast as ca
from ArithmeticTests.misc import ArithmeticTestError, Operation
from ArithmeticTests.table import OperandTable

log = logging.getLogger(__name__)


def ensure_writable(sink: TextIO) -> None:
  if getattr(sink, "closed", False) or not sink.writable():
    name = getattr(sink, "name", "<output>")
    raise ArithmeticTestError(f"Unable to write to output file {name}.")


def render_page(sink: TextIO, table: OperandTable, operation: Operation, include_solutions: bool) -> None:
  """
  Append one page of problems to `sink`.

  The sink is left open and unflushed; the caller owns it.
  """
  ensure_writable(sink)
  sink.write(ca.ProblemGrid(table, operation, include_solutions=include_solutions).render("latex"))
