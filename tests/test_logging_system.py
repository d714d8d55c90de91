import logging

from symbolic_math import MulNode, LogLevel, configure_logging, number, var, mul, pow, simplify
from symbolic_math import logging_system


def _reset_logger():
    logging.getLogger('symbolic_math').handlers.clear()
    logging_system._global_logger = None


def test_verbose_logging_reports_extra_simplify_passes(capsys):
    x, y = var("x"), var("y")
    try:
        configure_logging(LogLevel.VERBOSE)
        simplify(MulNode([pow(mul(x, y), number(2)), pow(mul(x, y), number(-1)), x]))
        out = capsys.readouterr().out
        assert "simplify pass" in out
    finally:
        _reset_logger()


def test_default_level_is_quiet(capsys):
    try:
        configure_logging()
        simplify(MulNode([pow(mul(var("x"), var("y")), number(2)), var("x")]))
        assert capsys.readouterr().out == ""
    finally:
        _reset_logger()


def test_set_log_level_after_silent(capsys):
    try:
        configure_logging(LogLevel.SILENT)
        logging_system.set_log_level(LogLevel.MINIMAL)
        logging_system.log_warning("visible")
        assert "visible" in capsys.readouterr().out
    finally:
        _reset_logger()
