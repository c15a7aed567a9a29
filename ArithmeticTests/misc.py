#!env python
from __future__ import annotations

import enum
import logging

log = logging.getLogger(__name__)


class ArithmeticTestError(Exception):
  """User-facing error for CLI operations."""


class Operation(enum.Enum):
  """
  The arithmetic operator used by every problem in a run.

  The value is the single-character flag accepted on the command line.
  """
  ADDITION = "a"
  MULTIPLICATION = "m"
  SUBTRACTION = "s"
  DIVISION = "d"

  @property
  def symbol(self) -> str:
    # Operator as it is typeset in front of the second operand
    return {
      Operation.ADDITION: "$+$",
      Operation.SUBTRACTION: "$-$",
      Operation.MULTIPLICATION: "$\\times$",
      Operation.DIVISION: "$\\div$",
    }[self]

  @property
  def label(self) -> str:
    return self.name.capitalize()

  def solve(self, first: int, second: int) -> int:
    match self:
      case Operation.ADDITION:
        return first + second
      case Operation.SUBTRACTION:
        return first - second
      case Operation.MULTIPLICATION:
        return first * second
      case Operation.DIVISION:
        return first // second

  @classmethod
  def flags(cls) -> list[str]:
    return [operation.value for operation in cls]


def operation_error_message(value) -> str:
  flags = [f"'{flag}'" for flag in Operation.flags()]
  return f"test_type ({value}) is not one of {', '.join(flags[:-1])}, or {flags[-1]}."


def parse_operation(value: str | Operation) -> Operation:
  """Map a command-line flag such as 'a' onto its Operation."""
  if isinstance(value, Operation):
    return value
  try:
    return Operation(value)
  except ValueError as exc:
    raise ArithmeticTestError(operation_error_message(value)) from exc
