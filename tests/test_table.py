import random
from collections import Counter

import pytest

from ArithmeticTests.constants import NUM_DIGITS, SENTINEL
from ArithmeticTests.misc import Operation
from ArithmeticTests.table import (
    OperandPair,
    OperandTable,
    build_table,
    first_usable_cell,
    shuffle_table,
)


@pytest.mark.parametrize("operation", [Operation.ADDITION, Operation.MULTIPLICATION])
def test_addition_and_multiplication_use_every_digit_pair(operation):
    table = build_table(operation)
    for i in range(NUM_DIGITS):
        for j in range(NUM_DIGITS):
            assert table[i, j] == (i, j)


def test_subtraction_never_goes_negative():
    table = build_table(Operation.SUBTRACTION)
    for i in range(NUM_DIGITS):
        for j in range(NUM_DIGITS):
            pair = table[i, j]
            assert pair.first >= pair.second
            assert pair == (max(i, j), min(i, j))


def test_subtraction_duplicates_problems():
    table = build_table(Operation.SUBTRACTION)
    counts = Counter(table.cells)
    assert len(counts) == 55
    assert counts[OperandPair(7, 3)] == 2
    assert counts[OperandPair(4, 4)] == 1


def test_division_quotients_are_exact_and_row_zero_is_sentinel():
    table = build_table(Operation.DIVISION)
    for j in range(NUM_DIGITS):
        assert table[0, j] == SENTINEL
        assert table[0, j].is_sentinel
    for i in range(1, NUM_DIGITS):
        for j in range(NUM_DIGITS):
            pair = table[i, j]
            assert pair.first == i * j
            assert pair.second == i
            assert pair.first // pair.second == j


def test_unknown_operation_leaves_table_empty(monkeypatch):
    errors = []
    monkeypatch.setattr("ArithmeticTests.table.log.error", lambda msg, *a, **k: errors.append(msg))

    table = build_table("x")

    assert len(table) == NUM_DIGITS * NUM_DIGITS
    assert all(pair.is_sentinel for pair in table)
    assert errors and "unknown operation" in errors[0]


def test_table_row_view_matches_flat_cells():
    table = build_table(Operation.ADDITION)
    assert table.row(3) == [OperandPair(3, j) for j in range(NUM_DIGITS)]
    assert table.cells[35] == table[3, 5]


def test_smaller_tables_are_supported():
    table = OperandTable(3)
    table[2, 1] = OperandPair(4, 2)
    assert len(table) == 9
    assert table.cells[7] == (4, 2)


def test_first_usable_cell():
    assert first_usable_cell(Operation.DIVISION) == NUM_DIGITS
    for operation in (Operation.ADDITION, Operation.SUBTRACTION, Operation.MULTIPLICATION):
        assert first_usable_cell(operation) == 0


@pytest.mark.parametrize("operation", list(Operation))
def test_shuffle_is_a_permutation(operation):
    table = build_table(operation)
    before = Counter(table.cells)

    shuffle_table(table, operation, random.Random(1234))

    assert Counter(table.cells) == before
    assert len(table) == NUM_DIGITS * NUM_DIGITS


def test_shuffle_changes_order():
    table = build_table(Operation.ADDITION)
    original = list(table.cells)
    shuffle_table(table, Operation.ADDITION, random.Random(7))
    assert table.cells != original


def test_division_shuffle_keeps_sentinels_out_of_rendered_rows():
    table = build_table(Operation.DIVISION)
    rng = random.Random(99)
    for _ in range(25):
        shuffle_table(table, Operation.DIVISION, rng)
        assert all(pair.is_sentinel for pair in table.cells[:NUM_DIGITS])
        assert not any(pair.is_sentinel for pair in table.cells[NUM_DIGITS:])


def test_shuffle_is_reproducible_with_seeded_rng():
    first = build_table(Operation.MULTIPLICATION)
    second = build_table(Operation.MULTIPLICATION)
    shuffle_table(first, Operation.MULTIPLICATION, random.Random(42))
    shuffle_table(second, Operation.MULTIPLICATION, random.Random(42))
    assert first.cells == second.cells
