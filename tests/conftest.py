"""
Shared fixtures: source text -> tokens / AST / Items / output lines.
"""
import os
import sys
import textwrap

import pytest

_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _ROOT not in sys.path:
    sys.path.insert(0, _ROOT)

from FileStream.FileStream import InputStream  # noqa: E402
from JavaGrammarLexer.JavaGrammarLexer import JavaGrammarLexer  # noqa: E402
from SimpleJavaParser.SimpleJavaParser import SimpleJavaParser  # noqa: E402
from TokenStream.TokenStream import TokenStream  # noqa: E402
from Translator.Translator import Translator  # noqa: E402


def _front_end(source: str):
    stream = InputStream(textwrap.dedent(source).lstrip("\n"))
    tokens = TokenStream(JavaGrammarLexer(stream))
    ast = SimpleJavaParser(tokens).parse()
    return stream, tokens, ast


@pytest.fixture
def parse():
    def _parse(source: str):
        return _front_end(source)[2]
    return _parse


@pytest.fixture
def items():
    def _items(source: str):
        _, tokens, ast = _front_end(source)
        return Translator().convert(ast, tokens.comments)
    return _items


@pytest.fixture
def translate():
    """Source -> list of output lines."""
    def _translate(source: str, **kwargs):
        stream, tokens, ast = _front_end(source)
        return Translator(**kwargs).translate(ast, stream.lines(), tokens.comments).split("\n")
    return _translate


@pytest.fixture
def expr(parse):
    """Parses a single Java expression by wrapping it in a field initializer."""
    def _expr(source: str):
        ast = parse(f"class T {{ Object v = {source}; }}")
        return ast.children[0].child("FieldDecl").child("Declarator").children[0]
    return _expr
