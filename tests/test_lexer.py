from FileStream.FileStream import InputStream
from JavaGrammarLexer.JavaGrammarLexer import JavaGrammarLexer
from Token import Token
from TokenStream.TokenStream import TokenStream


def lex(code):
    return JavaGrammarLexer(InputStream(code)).getAllTokens()


def types(code):
    return [t.type for t in lex(code)]


def test_keywords_identifiers_and_symbols():
    assert types("int x = a >>>= 2;") == ["INT", "IDENTIFIER", "ASSIGN", "IDENTIFIER", "URSHIFT_ASSIGN", "NUMBER", "SEMI"]
    assert types("@Override") == ["AT", "IDENTIFIER"]


def test_line_and_column_tracking():
    toks = lex("class A {\n  int x;\n}")
    x = [t for t in toks if t.text == "x"][0]
    assert (x.line, x.column) == (2, 6)
    assert toks[-1].line == 3


def test_numbers():
    for literal in ("0x1F", "0b1010", "1_000_000", "10L", "3.14", "1e10", "2.5f", ".5"):
        toks = lex(literal)
        assert [t.type for t in toks] == ["NUMBER"], literal
        assert toks[0].text == literal


def test_text_block_spans_lines():
    code = 'String s = """\n    hello\n    """;'
    block = [t for t in lex(code) if t.type == "TEXT_BLOCK"][0]
    assert block.line == 1
    assert block.end_line == 3


def test_comments_go_to_hidden_channel():
    code = "// head\nclass A { /* one\n two */ }"
    stream = TokenStream(JavaGrammarLexer(InputStream(code)))
    assert [c.type for c in stream.comments] == ["LINE_COMMENT", "BLOCK_COMMENT"]
    assert all(c.channel == Token.HIDDEN_CHANNEL for c in stream.comments)
    assert stream.comments[1].line == 2 and stream.comments[1].end_line == 3
    assert all(t.type not in ("LINE_COMMENT", "BLOCK_COMMENT") for t in stream.tokens)
    assert stream.tokens[-1].type == Token.EOF


def test_crlf_is_normalized():
    stream = InputStream("a\r\nb\rc\n")
    assert stream.lines() == ["a", "b", "c"]
