"""Project-wide `pytest` config.

This sets up our documentation test config and logging.

See the [documentation for
Sybil](https://sybil.readthedocs.io/en/latest/index.html) for details
here.

This config tells Sybil to read the _Python source files_ and look for
Markdown code blocks and attempt to parse them as docstrings. This
means it does not dynamically look at the docstrings of the installed
version of `pullseq`, but just the source.

"""
import doctest

from pullseq.tracing import setup_tracing
from sybil import Sybil
from sybil.parsers import myst


def pytest_addoption(parser):
    """Add a `--pullseq-log-level` CLI option to pytest.

    This will control the `setup_tracing` log level.

    """
    parser.addoption(
        "--pullseq-log-level",
        action="store",
        choices=["ERROR", "WARN", "INFO", "DEBUG", "TRACE"],
    )


def pytest_configure(config):
    """This will run on pytest init."""
    log_level = config.getoption("--pullseq-log-level")
    if log_level:
        setup_tracing(log_level=log_level)


doctest_option_flags = doctest.ELLIPSIS | doctest.NORMALIZE_WHITESPACE

pytest_collect_file = Sybil(
    parsers=[
        myst.PythonCodeBlockParser(doctest_optionflags=doctest_option_flags),
        myst.SkipParser(),
    ],
    patterns=["*.py"],
    excludes=["conftest.py"],
).pytest()
