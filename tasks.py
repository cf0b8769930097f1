# Copyright (c) 2025-2026 NASK. All rights reserved.

"""
This is the *n6urls*'s *[Invoke](https://www.pyinvoke.org/) tasks* file.
It defines a couple of development-related *tasks*.

To make use of it, you need to install *n6urls* in the development
mode, e.g., by executing:

    cd n6urls  # <- your local *n6urls* source code directory
    python3 -m venv my-venv
    source my-venv/bin/activate
    pip install -e '.[dev]'

Then you can list the available tasks by executing the command:

    inv --list

See also: https://docs.pyinvoke.org/en/stable/
"""

from __future__ import annotations

import contextlib
import shlex
import sys
from collections.abc import (
    Callable,
    Generator,
)
from pathlib import PosixPath

from invoke import (
    Context,
    Exit,
    task,
)


#
# Auxiliary constants
#


TOP_DIR = PosixPath(__file__).resolve().parent

TESTED_PACKAGE_DIRNAME = 'n6urls'

PYTEST_DOCTEST_OPT = '--doctest-modules'


#
# Actual task definitions
#


@task
def delete_pycs(
    c: Context,
) -> None:
    """
    Delete all cached Python bytecode (`*.pyc`) files

    (more precisely: all `*.pyc` files being ordinary files as well as
    all `__pycache__` directories, in your local *n6urls*'s source code
    top-level directory and, recursively, in all its subdirectories;
    if a directory cannot be traversed or a file/directory cannot be
    deleted, only a warning is printed by the underlying 'find' command,
    but the entire task is still considered successful).
    """
    with _top_dir_as_cwd(c) as top_dir:
        _intent(
            f"delete any cached Python bytecode "
            f"stuff beneath {str(top_dir)!a}",
        )

        c.run(
            "( find . -type f -name '*.pyc' -delete"
            "; find . -type d -name '__pycache__' -delete"
            "; true )",
        )

        _success(
            c,
            (
                "deleted local `**/*.pyc` files and `**/__pycache__` "
                "directories (if any deletable ones existed)"
            ),
        )


@task(
    pre=[delete_pycs],
    aliases=['test', 'tests'],
    help={
        'doctests': (
            f"Shall also doctests be run, i.e., shall the "
            f"`{PYTEST_DOCTEST_OPT}` option be passed to "
            f"'pytest'? (default: yes)"
        ),
        'pytest_args': (
            "Any extra command-line arguments to 'pytest' "
            "(typically, they need to be quoted as a whole, "
            "to form a single STRING)."
        ),
    },
)
def pytest(
    c: Context,
    doctests: bool = True,
    pytest_args: str = '',
) -> None:
    """
    Run the *n6urls* tests and doctests, using *pytest*

    (with the currently used Python interpreter; optionally, with
    additional *pytest* command-line arguments, if you specify
    `--pytest-args`...).

    Note: before the start of this task, the 'delete-pycs' task is invoked
    automatically.
    """
    quo = _make_commandline_arg_quoter()

    with _top_dir_as_cwd(c):
        _intent("test the *n6urls* package (using *pytest*)")

        all_pytest_args = []
        if doctests:
            all_pytest_args.append(PYTEST_DOCTEST_OPT)
        if pytest_args:
            all_pytest_args.extend(shlex.split(pytest_args))
        all_pytest_args.append(TESTED_PACKAGE_DIRNAME)

        all_pytest_args_part = ' '.join(map(quo, all_pytest_args))
        c.run(
            (
                f"{quo(sys.executable)}"
                f" -m pytest"
                f" {all_pytest_args_part}"
            ),
            pty=True,
        )

        _success(c, f"successfully ran tests (using *pytest*) for {TESTED_PACKAGE_DIRNAME!a}")


#
# Internal helpers
#


@contextlib.contextmanager
def _top_dir_as_cwd(c: Context) -> Generator[PosixPath, None, None]:
    if not (TOP_DIR / TESTED_PACKAGE_DIRNAME).is_dir():
        _error(f"{str(TOP_DIR)!a} does not look like the *n6urls* source code directory")
    with c.cd(str(TOP_DIR)):
        yield TOP_DIR


def _intent(intended_operation_description: str) -> None:
    print(f"About to {intended_operation_description}...")
    sys.stdout.flush()


def _success(c: Context, successful_operation_description: str) -> None:
    print(f"OK, {successful_operation_description}.")
    if c.config.run.dry:
        print("(Well, actually not, because it is a *dry* run...)")
    sys.stdout.flush()


def _error(error_msg: str, *, code: int = 1) -> None:
    raise Exit(f"ERROR! {error_msg}", code=code)


def _make_commandline_arg_quoter() -> Callable[[str], str]:
    def quo(obj: str) -> str:
        # Sanitize a text (to be placed, as a single command-line
        # argument, within a command which will be run using `c.run()`).
        return shlex.quote(str(obj))

    return quo
