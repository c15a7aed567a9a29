#!env python
"""
Fixed values shared by the table builder, page renderer and driver.
"""

# Digits 0-9 on both axes of the operand table
NUM_DIGITS = 10

# Sentinel pair for cells that must never be rendered (division by zero)
SENTINEL = (-1, -1)


class CountLimits:
  MIN_TESTS = 1
  MAX_TESTS = 999
  DEFAULT_TESTS = 60
  # A two-column score tracker page fits this many records
  TRACKER_PAGE_CAPACITY = 60


class Defaults:
  OUTPUT_NAME = "tests"
  OUTPUT_SUFFIX = ".tex"
  OPERATION = "a"


class Latex:
  CELL_SEPARATOR = " & & "
  ROW_END = "\\\\"
  BLANK_ROW_END = "\\\\ \\\\"
  COMPILE_TIMEOUT = 30
