#!/usr/bin/env python
import argparse
import logging
import os
import random
import shutil
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv

from ArithmeticTests.constants import CountLimits, Defaults, Latex
from ArithmeticTests.document import ArithmeticTestDocument, validate_num_tests
from ArithmeticTests.misc import ArithmeticTestError, Operation, parse_operation

log = logging.getLogger(__name__)

USAGE_EPILOG = (
  f"A scoring page fits {CountLimits.TRACKER_PAGE_CAPACITY} records.\n"
  "\n"
  "test types:\n"
  "  a  Addition\n"
  "  m  Multiplication\n"
  "  s  Subtraction\n"
  "  d  Division\n"
)


class ArgumentParser(argparse.ArgumentParser):
  """ArgumentParser that reports bad arguments with exit status 1."""

  def error(self, message):
    sys.stderr.write(f"Error: {message}\n\n")
    self.print_help(sys.stderr)
    self.exit(1)


def _num_tests_arg(value: str) -> int:
  try:
    return validate_num_tests(value)
  except ArithmeticTestError as exc:
    raise argparse.ArgumentTypeError(str(exc)) from exc


def _operation_arg(value: str) -> Operation:
  try:
    return parse_operation(value)
  except ArithmeticTestError as exc:
    raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> ArgumentParser:
  parser = ArgumentParser(
    prog="arithtest",
    description="Create LaTeX source for single-digit arithmetic tests.",
    epilog=USAGE_EPILOG,
    formatter_class=argparse.RawDescriptionHelpFormatter,
  )
  parser.add_argument(
    "-n",
    dest="num_tests",
    metavar="num_tests",
    type=_num_tests_arg,
    default=CountLimits.DEFAULT_TESTS,
    help=f"The number of tests to create, between {CountLimits.MIN_TESTS} and {CountLimits.MAX_TESTS} "
         f"(default: {CountLimits.DEFAULT_TESTS})",
  )
  parser.add_argument(
    "-o",
    dest="output",
    metavar="output_file",
    default=Defaults.OUTPUT_NAME,
    help=f"The file in which to store the output; '{Defaults.OUTPUT_SUFFIX}' is added automatically "
         f"(default: {Defaults.OUTPUT_NAME})",
  )
  parser.add_argument(
    "-t",
    dest="operation",
    metavar="test_type",
    type=_operation_arg,
    default=Operation(Defaults.OPERATION),
    help=f"The type of test to create, one of {', '.join(Operation.flags())} (default: {Defaults.OPERATION})",
  )
  parser.add_argument("--seed", type=int, default=None,
                      help="Random seed for shuffling (default: $ARITHTEST_SEED, else random)")
  parser.add_argument("--pdf", action="store_true", help="Compile the output with latexmk after writing it")
  parser.add_argument("--debug", action="store_true", help="Set logging level to debug")
  parser.add_argument(
    "--env",
    default=os.path.join(Path.home(), '.env'),
    help="Path to .env file with ARITHTEST_* settings"
  )
  return parser


def _enable_debug_logging() -> None:
  logging.getLogger().setLevel(logging.DEBUG)
  for handler in logging.getLogger().handlers:
    handler.setLevel(logging.DEBUG)
  for logger_name in ["ArithmeticTests", "__main__"]:
    logger = logging.getLogger(logger_name)
    logger.setLevel(logging.DEBUG)
    for handler in logger.handlers:
      handler.setLevel(logging.DEBUG)


def _resolve_seed(seed: int | None) -> int | None:
  if seed is not None:
    return seed
  env_seed = os.environ.get("ARITHTEST_SEED")
  if env_seed is None or env_seed.strip() == "":
    return None
  try:
    return int(env_seed)
  except ValueError as exc:
    raise ArithmeticTestError(f"ARITHTEST_SEED ({env_seed}) is not an integer.") from exc


def output_path(name: str) -> Path:
  return Path(f"{name}{Defaults.OUTPUT_SUFFIX}")


def check_dependencies() -> tuple[bool, list[str]]:
  missing = []
  if shutil.which("latexmk") is None:
    missing.append("latexmk not found. Install a LaTeX distribution that provides latexmk.")
  return (len(missing) == 0), missing


def generate_latex(tex_path: Path) -> bool:
  """
  Compile a written .tex file to PDF next to it.

  Args:
    tex_path: The LaTeX source to compile
  """
  out_dir = str(tex_path.resolve().parent)
  try:
    result = subprocess.run(
      ["latexmk", "-pdf", f"-output-directory={out_dir}", str(tex_path)],
      capture_output=True,
      timeout=Latex.COMPILE_TIMEOUT,
      check=False
    )
  except subprocess.TimeoutExpired:
    log.error("Latex compile timed out")
    return False

  cleanup_result = subprocess.run(
    ["latexmk", "-c", f"-output-directory={out_dir}", str(tex_path)],
    capture_output=True,
    timeout=Latex.COMPILE_TIMEOUT,
    check=False
  )
  if result.returncode != 0:
    stderr_text = result.stderr.decode("utf-8", errors="ignore")
    log.error(f"Latex compilation failed: {stderr_text}")
    return False
  if cleanup_result.returncode != 0:
    stderr_text = cleanup_result.stderr.decode("utf-8", errors="ignore")
    log.warning(f"Latex cleanup failed: {stderr_text}")
  return True


def generate_tests(
    output: str = Defaults.OUTPUT_NAME,
    operation: Operation | str = Defaults.OPERATION,
    num_tests: int = CountLimits.DEFAULT_TESTS,
    *,
    seed: int | None = None,
    compile_pdf: bool = False,
) -> Path:
  """
  Write a test document to `<output>.tex` and optionally compile it.

  Returns the path of the written .tex file.
  """
  document = ArithmeticTestDocument(operation, num_tests, rng=random.Random(seed))

  if compile_pdf:
    ok, missing = check_dependencies()
    if not ok:
      raise ArithmeticTestError("\n".join(missing))

  tex_path = output_path(output)
  log.debug(f"Writing {document.describe()} to {tex_path} (seed={seed})")
  try:
    with open(tex_path, "w", encoding="utf-8") as sink:
      document.write(sink)
  except OSError as exc:
    raise ArithmeticTestError(f"Unable to open output file {tex_path}: {exc.strerror or exc}") from exc

  if compile_pdf and not generate_latex(tex_path):
    raise ArithmeticTestError(f"Failed to compile {tex_path}.")
  return tex_path


def main(argv=None) -> int:
  parser = build_parser()
  args = parser.parse_args(argv)

  load_dotenv(args.env)

  if args.debug:
    _enable_debug_logging()

  try:
    tex_path = generate_tests(
      args.output,
      args.operation,
      args.num_tests,
      seed=_resolve_seed(args.seed),
      compile_pdf=args.pdf,
    )
  except ArithmeticTestError as exc:
    log.error(str(exc))
    parser.print_help(sys.stderr)
    return 1

  print(f"Wrote {tex_path}")
  return 0


if __name__ == "__main__":
  sys.exit(main())
