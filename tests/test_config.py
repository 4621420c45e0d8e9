import logging

import pytest

from Config import LoggingConfig, TranslatorConfig, configure_logging, parse_level


@pytest.fixture
def clean_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
    if hasattr(root, "_java2nadeshiko_configured"):
        delattr(root, "_java2nadeshiko_configured")


def test_defaults():
    cfg = TranslatorConfig()
    assert cfg.indent_str == "　"
    assert cfg.max_expression_depth == 100
    assert cfg.encoding == "utf-8"
    assert cfg.logging.level == "WARNING"


def test_from_env_reads_variables():
    cfg = TranslatorConfig.from_env({
        "J2N_INDENT": "  ",
        "J2N_MAX_DEPTH": "20",
        "J2N_ENCODING": "cp932",
        "J2N_LOG_LEVEL": "debug",
    })
    assert cfg.indent_str == "  "
    assert cfg.max_expression_depth == 20
    assert cfg.encoding == "cp932"
    assert cfg.logging.level == "DEBUG"


def test_from_env_ignores_empty_values():
    assert TranslatorConfig.from_env({"J2N_INDENT": "", "J2N_MAX_DEPTH": ""}) == TranslatorConfig()


def test_from_env_rejects_non_integer_depth():
    with pytest.raises(ValueError):
        TranslatorConfig.from_env({"J2N_MAX_DEPTH": "deep"})


def test_with_overrides_skips_none_and_validates():
    base = TranslatorConfig()
    assert base.with_overrides(indent_str=None, encoding=None) == base
    assert base.with_overrides(log_level="info").logging.level == "INFO"
    assert base.with_overrides(max_expression_depth=5).max_expression_depth == 5
    with pytest.raises(ValueError):
        base.with_overrides(max_expression_depth=0)
    with pytest.raises(ValueError):
        base.with_overrides(indent_str="")


def test_parse_level():
    assert parse_level("warn") == logging.WARNING
    assert parse_level("ERROR") == logging.ERROR
    with pytest.raises(ValueError):
        parse_level("loud")


def test_configure_logging_is_idempotent(clean_root_logger):
    before = len(clean_root_logger.handlers)
    configure_logging(LoggingConfig(level="INFO"))
    configure_logging(LoggingConfig(level="DEBUG"))
    assert len(clean_root_logger.handlers) == before + 1
    assert clean_root_logger.level == logging.DEBUG


def test_configure_logging_force_replaces_handler(clean_root_logger):
    before = len(clean_root_logger.handlers)
    configure_logging(LoggingConfig())
    configure_logging(LoggingConfig(level="ERROR"), force=True)
    assert len(clean_root_logger.handlers) == before + 1
    assert clean_root_logger.level == logging.ERROR
