import argparse
import logging
import sys
from typing import List, Optional

from Config import TranslatorConfig, configure_logging
from JavaToNadeshiko import translate_file
from SimpleJavaParser.SimpleJavaParser import JavaSyntaxError

logger = logging.getLogger(__name__)

INDENT_CHOICES = {"zenkaku": "　", "space2": "  ", "space4": "    ", "tab": "\t"}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="java2nadeshiko",
        description="Построчный перевод Java-исходника на なでしこ.",
    )
    p.add_argument("file", help="путь к .java файлу")
    p.add_argument("-o", "--output", help="куда записать результат (по умолчанию stdout)")
    p.add_argument("--indent", choices=sorted(INDENT_CHOICES), help="единица отступа (по умолчанию zenkaku)")
    p.add_argument("--max-depth", type=int, dest="max_expression_depth",
                   help="предел вложенности выражений")
    p.add_argument("--encoding", help="кодировка входного файла")
    p.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="уровень логирования")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = TranslatorConfig.from_env().with_overrides(
        indent_str=INDENT_CHOICES.get(args.indent) if args.indent else None,
        max_expression_depth=args.max_expression_depth,
        encoding=args.encoding,
        log_level=args.log_level,
    )
    configure_logging(config.logging)

    try:
        text, _ = translate_file(args.file, config)
    except JavaSyntaxError as e:
        print(f"{args.file}: синтаксическая ошибка: {e}", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError, ValueError) as e:
        print(f"{args.file}: {e}", file=sys.stderr)
        return 1

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        logger.info("Результат записан в %s", args.output)
    else:
        sys.stdout.write(text + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
