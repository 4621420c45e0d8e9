import logging
import os
import sys
from dataclasses import dataclass, field, replace
from typing import Dict, Mapping, Optional

from Translator.ExpressionTranslator import DEFAULT_MAX_DEPTH
from Translator.Translator import INDENT_STR

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

_CONFIGURED_FLAG_ATTR = "_java2nadeshiko_configured"


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "WARNING"
    console: bool = True
    fmt: str = "%(levelname)s | %(name)s | %(message)s"


@dataclass(frozen=True)
class TranslatorConfig:
    """Settings shared by the CLI and the streamlit page."""

    indent_str: str = INDENT_STR
    max_expression_depth: int = DEFAULT_MAX_DEPTH
    encoding: str = "utf-8"
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TranslatorConfig":
        """
        J2N_INDENT, J2N_MAX_DEPTH, J2N_ENCODING, J2N_LOG_LEVEL.
        Unset or empty variables keep the defaults.
        """
        env = os.environ if environ is None else environ
        cfg = cls()
        overrides = {}
        if env.get("J2N_INDENT"):
            overrides["indent_str"] = env["J2N_INDENT"]
        if env.get("J2N_MAX_DEPTH"):
            try:
                overrides["max_expression_depth"] = int(env["J2N_MAX_DEPTH"])
            except ValueError:
                raise ValueError(f"J2N_MAX_DEPTH должно быть целым числом: {env['J2N_MAX_DEPTH']!r}")
        if env.get("J2N_ENCODING"):
            overrides["encoding"] = env["J2N_ENCODING"]
        if env.get("J2N_LOG_LEVEL"):
            overrides["logging"] = replace(cfg.logging, level=env["J2N_LOG_LEVEL"].upper())
        return cfg.with_overrides(**overrides)

    def with_overrides(self, **kwargs) -> "TranslatorConfig":
        # None означает "не задано" (флаги CLI по умолчанию)
        changes = {k: v for k, v in kwargs.items() if v is not None}
        if "log_level" in changes:
            changes["logging"] = replace(changes.get("logging", self.logging), level=changes.pop("log_level").upper())
        if changes.get("max_expression_depth", 1) < 1:
            raise ValueError("max_expression_depth должно быть положительным")
        if changes.get("indent_str", "x") == "":
            raise ValueError("indent_str не может быть пустым")
        return replace(self, **changes)


def parse_level(level: str) -> int:
    try:
        return _LEVEL_MAP[str(level).upper()]
    except KeyError:
        raise ValueError(f"Неизвестный уровень логирования: {level!r}")


def configure_logging(cfg: LoggingConfig, force: bool = False) -> logging.Logger:
    """Installs one stream handler on the root logger; repeated calls only adjust the level."""
    root = logging.getLogger()
    root.setLevel(parse_level(cfg.level))
    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    for handler in list(root.handlers):
        if getattr(handler, _CONFIGURED_FLAG_ATTR, False):
            root.removeHandler(handler)
    if cfg.console:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(cfg.fmt))
        setattr(handler, _CONFIGURED_FLAG_ATTR, True)
        root.addHandler(handler)
    setattr(root, _CONFIGURED_FLAG_ATTR, True)
    return root
