"""Nox sessions for multi-version Python compatibility testing.

Usage:
    nox                     # run all sessions
    nox -s tests            # unit tests (mocked upstream, no network)
    nox -s lint             # lint only
    nox -l                  # list available sessions

Requires Python 3.11-3.14 installed locally (e.g. via pyenv or uv).
"""

import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13", "3.14"]
TESTS = [
    "tests.test_models",
    "tests.test_items",
    "tests.test_store",
    "tests.test_threads",
    "tests.test_client",
    "tests.test_engine",
    "tests.test_view",
    "tests.test_config",
    "tests.test_cli",
]


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run the test suite across Python versions."""
    session.install("-e", ".[dev]")
    session.run("python", "-m", "unittest", *TESTS, "-v")


@nox.session(python=PYTHON_VERSIONS)
def lint(session: nox.Session) -> None:
    """Run ruff linter across Python versions."""
    session.install("ruff>=0.15")
    session.run("ruff", "check", "src/", "tests/")
