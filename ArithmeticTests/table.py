#!env python
"""
The digit-pair table every page of a test document is drawn from.

A table holds one OperandPair per (row, column) digit combination and is
stored flattened in row-major order so that it can be shuffled in place.
"""
from __future__ import annotations

import logging
import random
from typing import Iterator, NamedTuple

from ArithmeticTests.constants import NUM_DIGITS, SENTINEL
from ArithmeticTests.misc import Operation

log = logging.getLogger(__name__)


class OperandPair(NamedTuple):
  first: int
  second: int

  @property
  def is_sentinel(self) -> bool:
    return self == SENTINEL


class OperandTable:
  """
  A square grid of operand pairs indexed by two digits.

  Cells are kept in a single flat list; `table[row, col]` reads the grid view
  and `table.cells` exposes the flattened sequence the shuffle works on.
  """

  def __init__(self, num_digits: int = NUM_DIGITS):
    self.num_digits = num_digits
    self.cells: list[OperandPair] = [OperandPair(*SENTINEL)] * (num_digits * num_digits)

  def __getitem__(self, key: tuple[int, int]) -> OperandPair:
    row, col = key
    return self.cells[row * self.num_digits + col]

  def __setitem__(self, key: tuple[int, int], pair: OperandPair) -> None:
    row, col = key
    self.cells[row * self.num_digits + col] = pair

  def __len__(self) -> int:
    return len(self.cells)

  def __iter__(self) -> Iterator[OperandPair]:
    return iter(self.cells)

  def row(self, index: int) -> list[OperandPair]:
    start = index * self.num_digits
    return self.cells[start:start + self.num_digits]


def first_usable_cell(operation: Operation, num_digits: int = NUM_DIGITS) -> int:
  """Flat index of the first cell that may appear on a page."""
  # Row 0 of a division table is all sentinels
  if operation is Operation.DIVISION:
    return num_digits
  return 0


def build_table(operation: Operation, num_digits: int = NUM_DIGITS) -> OperandTable:
  """
  Build the operand table for an operation.

  - Addition and multiplication use every (i, j) digit pair.
  - Subtraction orders each pair largest-first so differences are never
    negative. Some problems therefore appear twice.
  - Division uses (i * j, i) so every quotient is exactly j. Row 0 would
    divide by zero and is filled with (-1, -1) sentinels instead.
  """
  table = OperandTable(num_digits)
  if not isinstance(operation, Operation):
    log.error(f"Cannot build a table for unknown operation {operation!r}; leaving every cell empty")
    return table

  for i in range(num_digits):
    for j in range(num_digits):
      match operation:
        case Operation.ADDITION | Operation.MULTIPLICATION:
          table[i, j] = OperandPair(i, j)
        case Operation.SUBTRACTION:
          table[i, j] = OperandPair(max(i, j), min(i, j))
        case Operation.DIVISION:
          table[i, j] = OperandPair(*SENTINEL) if i == 0 else OperandPair(i * j, i)

  log.debug(f"Built {num_digits}x{num_digits} {operation.label.lower()} table")
  return table


def shuffle_table(table: OperandTable, operation: Operation, rng: random.Random) -> None:
  """Shuffle the usable part of the flattened table in place."""
  start = first_usable_cell(operation, table.num_digits)
  usable = table.cells[start:]
  rng.shuffle(usable)
  table.cells[start:] = usable
