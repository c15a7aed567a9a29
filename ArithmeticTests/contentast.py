from __future__ import annotations

import logging
import textwrap

from ArithmeticTests.constants import Latex
from ArithmeticTests.misc import Operation
from ArithmeticTests.table import OperandTable, first_usable_cell

log = logging.getLogger(__name__)


class ContentAST:
  """
  Content tree for arithmetic test documents.

  Every piece of a document (preamble, score tracker, problem grids, page
  breaks) is an Element that renders itself to markup. Build pages from these
  elements rather than writing LaTeX strings by hand in the driver.

  Key Components:
  - ContentAST.NewPage: Page break
  - ContentAST.Preamble: Document class, packages and page style
  - ContentAST.ScoreTracker: Two-column list of time/correct blanks per test
  - ContentAST.ProblemGrid: One page of stacked problems, with or without solutions
  - ContentAST.PageNumbering: Restarts the page counter for the practice pages

  Example:
    grid = ContentAST.ProblemGrid(table, Operation.ADDITION, include_solutions=True)
    sink.write(grid.render("latex"))
  """

  class Element:
    """
    Base class for all elements.

    `render(output_format)` dispatches to `render_<output_format>`; elements
    only need to implement the formats they support.
    """
    def render(self, output_format, **kwargs):
      method_name = f"render_{output_format}"
      if hasattr(self, method_name):
        return getattr(self, method_name)(**kwargs)
      log.warning(f"{type(self).__name__} cannot be rendered as '{output_format}'")
      return ""

  class NewPage(Element):
    def render_latex(self, **kwargs):
      return "\\newpage\n"

  class Preamble(Element):
    LATEX_HEADER = textwrap.dedent(r"""
    \documentclass[12pt, letterpaper]{article}
    \usepackage[margin=1in]{geometry}
    \usepackage{multicol}
    \usepackage{setspace}
    \usepackage{fancyhdr}
    \pagestyle{fancy}
    \renewcommand{\headrulewidth}{0pt}
    \fancyhf{}
    \begin{document}
    """).lstrip()

    def render_latex(self, **kwargs):
      return self.LATEX_HEADER

  class ScoreTracker(Element):
    """
    A two-column list with one line per test:

      7. Time: ______  Correct: ____

    Numbers are padded with invisible zeros so the periods line up.
    """
    def __init__(self, num_tests: int):
      self.num_tests = num_tests

    def entry(self, number: int) -> str:
      padding = len(str(self.num_tests)) - len(str(number))
      prefix = f"\\phantom{{{'0' * padding}}}" if padding > 0 else ""
      return (
        f"{prefix}{number}. Time: \\underline{{\\hspace{{6em}}}}"
        f"\\quad Correct: \\underline{{\\hspace{{3em}}}}"
      )

    def render_latex(self, **kwargs):
      lines = [
        "\\begin{multicols}{2}\n",
        "\\setlength{\\columnseprule}{0.5pt}\n",
        "{\\setstretch{1.5}\n",
        "\\noindent\n",
      ]
      for number in range(1, self.num_tests + 1):
        ending = "\\par\n" if number == self.num_tests else "\\\\\n"
        lines.append(self.entry(number) + ending)
      lines.append("}\n")
      lines.append("\\end{multicols}\n")
      return "".join(lines)

  class PageNumbering(Element):
    def render_latex(self, **kwargs):
      return (
        "\\setcounter{page}{1}\n"
        "\\lfoot{\\framebox{\\makebox[\\totalheight]{\\thepage}}}\n"
      )

  class ProblemGrid(Element):
    """
    One page of problems laid out as a 19-column tabular.

    Each table row becomes two page rows: the first operands, then the
    operator followed by the second operands. A rule is drawn under every
    problem column, followed by either the answers or an empty row for the
    student to write in. Problem columns are separated by an empty column.
    """
    def __init__(self, table: OperandTable, operation: Operation, include_solutions: bool = False):
      self.table = table
      self.operation = operation
      self.include_solutions = include_solutions

    def _symbol(self) -> str:
      if isinstance(self.operation, Operation):
        return f"{self.operation.symbol} "
      log.error(f"Operation ({self.operation!r}) is not one of {Operation.flags()}")
      return ""

    def _solution(self, first: int, second: int) -> str:
      if isinstance(self.operation, Operation):
        return str(self.operation.solve(first, second))
      log.error(f"Operation ({self.operation!r}) is not one of {Operation.flags()}")
      return ""

    def _page_rows(self):
      num_digits = self.table.num_digits
      start_row = 2 * (first_usable_cell(self.operation, num_digits) // num_digits)
      return range(start_row, 2 * num_digits)

    def render_latex(self, **kwargs):
      num_digits = self.table.num_digits
      # Problem columns alternate with empty spacer columns
      column_spec = "r" * (2 * num_digits - 1)
      lines = [f"\\begin{{tabular}}{{{column_spec}}}\n"]

      for page_row in self._page_rows():
        pairs = self.table.row(page_row // 2)
        if page_row % 2 == 0:
          cells = [str(pair.first) for pair in pairs]
          lines.append(Latex.CELL_SEPARATOR.join(cells) + Latex.ROW_END + "\n")
          continue

        symbol = self._symbol()
        cells = [f"{symbol}{pair.second}" for pair in pairs]
        lines.append(Latex.CELL_SEPARATOR.join(cells) + Latex.ROW_END + "\n")

        rules = "".join(f"\\cline{{{2 * col + 1}-{2 * col + 1}}} " for col in range(num_digits))
        if self.include_solutions:
          answers = [self._solution(pair.first, pair.second) for pair in pairs]
          lines.append(rules + Latex.CELL_SEPARATOR.join(answers) + Latex.BLANK_ROW_END + "\n")
        else:
          lines.append(rules + Latex.BLANK_ROW_END + "\n")

      lines.append("\\end{tabular}\n")
      lines.append(ContentAST.NewPage().render("latex"))
      return "".join(lines)


# Module-level aliases so callers can write `ca.ProblemGrid(...)`
NewPage = ContentAST.NewPage
Preamble = ContentAST.Preamble
ScoreTracker = ContentAST.ScoreTracker
PageNumbering = ContentAST.PageNumbering
ProblemGrid = ContentAST.ProblemGrid
