#!/usr/bin/env python
"""
Typer front-end for arithtest.
"""

from __future__ import annotations

from contextlib import contextmanager
from importlib import metadata
from pathlib import Path

import click
import typer
from dotenv import load_dotenv

from ArithmeticTests.constants import CountLimits, Defaults
from ArithmeticTests.generate import (
    _enable_debug_logging,
    _resolve_seed,
    check_dependencies,
    generate_tests,
)
from ArithmeticTests.misc import ArithmeticTestError

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Arithmetic practice test generator.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_cli_version() -> str:
    try:
        return metadata.version("arithmetic-tests")
    except metadata.PackageNotFoundError:
        return "unknown"


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(f"arithtest {_get_cli_version()}")
    raise typer.Exit()


@app.callback()
def _app_callback(
    version: bool = typer.Option(
        False,
        "--version",
        is_eager=True,
        callback=_version_callback,
        help="Show version and exit.",
    ),
) -> None:
    del version


@contextmanager
def _arithtest_error_boundary():
    try:
        yield
    except ArithmeticTestError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


def _configure_runtime(*, env: str, debug: bool) -> None:
    load_dotenv(env)
    if debug:
        _enable_debug_logging()


def _ensure_dependencies() -> None:
    ok, missing = check_dependencies()
    if not ok:
        raise ArithmeticTestError("\n".join(missing))


@app.command("generate")
def generate_command(
    num_tests: str = typer.Option(
        str(CountLimits.DEFAULT_TESTS),
        "-n",
        "--num-tests",
        help=f"The number of tests to create ({CountLimits.MIN_TESTS}-{CountLimits.MAX_TESTS}).",
    ),
    output: str = typer.Option(
        Defaults.OUTPUT_NAME, "-o", "--output", help=f"Output base name; '{Defaults.OUTPUT_SUFFIX}' is appended."
    ),
    test_type: str = typer.Option(
        Defaults.OPERATION, "-t", "--type", help="Operation: a (add), m (multiply), s (subtract), d (divide)."
    ),
    seed: int | None = typer.Option(None, "--seed", help="Random seed for shuffling."),
    pdf: bool = typer.Option(False, "--pdf", help="Compile the output with latexmk."),
    env: str = typer.Option(str(Path.home() / ".env"), "--env", help="Path to .env file."),
    debug: bool = typer.Option(False, "--debug", help="Set logging level to debug."),
) -> None:
    with _arithtest_error_boundary():
        _configure_runtime(env=env, debug=debug)
        tex_path = generate_tests(
            output,
            test_type,
            num_tests,
            seed=_resolve_seed(seed),
            compile_pdf=pdf,
        )
        typer.echo(f"Wrote {tex_path}")


@app.command("deps")
def deps_command(
    env: str = typer.Option(str(Path.home() / ".env"), "--env", help="Path to .env file."),
    debug: bool = typer.Option(False, "--debug", help="Set logging level to debug."),
) -> None:
    with _arithtest_error_boundary():
        _configure_runtime(env=env, debug=debug)
        _ensure_dependencies()
        typer.echo("Dependency check passed.")


def main(argv: list[str] | None = None) -> None:
    # Usage errors exit 1 like the argparse front-end, not click's 2
    try:
        exit_code = app(args=argv, standalone_mode=False)
    except click.exceptions.ClickException as exc:
        exc.show()
        raise SystemExit(1) from exc
    except click.exceptions.Abort as exc:
        typer.secho("Aborted!", fg=typer.colors.RED, err=True)
        raise SystemExit(1) from exc
    raise SystemExit(exit_code or 0)


if __name__ == "__main__":
    main()
