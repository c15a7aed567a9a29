import io
import random

import pytest

import ArithmeticTests.contentast as ca
from ArithmeticTests.document import ArithmeticTestDocument, validate_num_tests
from ArithmeticTests.misc import ArithmeticTestError, Operation


def _write(operation="a", num_tests=1, seed=0):
    sink = io.StringIO()
    ArithmeticTestDocument(operation, num_tests, rng=random.Random(seed)).write(sink)
    return sink.getvalue()


def test_document_layout_for_single_test():
    latex = _write("a", 1)

    assert latex.startswith("\\documentclass[12pt, letterpaper]{article}\n")
    assert latex.endswith("\\end{document}")
    assert latex.count("\\begin{document}") == 1
    # solutions page + one practice page
    assert latex.count("\\begin{tabular}") == 2
    assert latex.count("Time: \\underline") == 1
    assert "1. Time: \\underline{\\hspace{6em}}\\quad Correct: \\underline{\\hspace{3em}}\\par\n" in latex


def test_solutions_page_comes_before_page_numbering():
    latex = _write("m", 3)
    first_tabular = latex.index("\\begin{tabular}")
    numbering = latex.index("\\setcounter{page}{1}")
    second_tabular = latex.index("\\begin{tabular}", first_tabular + 1)
    assert latex.index("\\end{multicols}") < first_tabular < numbering < second_tabular
    assert "\\lfoot{\\framebox{\\makebox[\\totalheight]{\\thepage}}}" in latex


def test_practice_page_count_matches_num_tests():
    latex = _write("d", 12)
    assert latex.count("\\begin{tabular}") == 13
    assert latex.count("\\newpage") == 14


def test_same_seed_gives_same_document():
    assert _write("s", 4, seed=5) == _write("s", 4, seed=5)
    assert _write("s", 4, seed=5) != _write("s", 4, seed=6)


def test_score_tracker_pads_numbers():
    tracker = ca.ScoreTracker(120)
    assert tracker.entry(7).startswith("\\phantom{00}7. Time:")
    assert tracker.entry(42).startswith("\\phantom{0}42. Time:")
    assert tracker.entry(120).startswith("120. Time:")

    rendered = tracker.render("latex")
    assert rendered.count("Time:") == 120
    assert rendered.count("\\\\\n") == 119
    assert rendered.count("\\par\n") == 1


def test_score_tracker_without_padding():
    assert "\\phantom" not in ca.ScoreTracker(9).render("latex")


@pytest.mark.parametrize("value", [0, 1000, -3, "abc", "", "1.5", True, "²", "٥", "1²"])
def test_validate_num_tests_rejects(value):
    with pytest.raises(ArithmeticTestError) as excinfo:
        validate_num_tests(value)
    assert "between 1 and 999" in str(excinfo.value)


@pytest.mark.parametrize("value, expected", [(1, 1), (999, 999), ("60", 60), (" 7", 7)])
def test_validate_num_tests_accepts(value, expected):
    assert validate_num_tests(value) == expected


def test_document_rejects_unknown_operation():
    with pytest.raises(ArithmeticTestError):
        ArithmeticTestDocument("x", 1)


def test_document_accepts_operation_enum():
    document = ArithmeticTestDocument(Operation.DIVISION, 2)
    assert document.table[0, 0].is_sentinel
    assert document.describe() == "2 division test(s)"


def test_unsupported_render_format_is_empty(monkeypatch):
    warnings = []
    monkeypatch.setattr("ArithmeticTests.contentast.log.warning", lambda msg, *a, **k: warnings.append(msg))
    assert ca.NewPage().render("html") == ""
    assert warnings
