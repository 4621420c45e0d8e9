import re
from JavaGrammarLexer.Lexer import Lexer
from Token import Token

class JavaGrammarLexer(Lexer):

    KEYWORDS = {
        "abstract": "ABSTRACT", "assert": "ASSERT", "boolean": "BOOLEAN",
        "break": "BREAK", "byte": "BYTE", "case": "CASE", "catch": "CATCH",
        "char": "CHAR", "class": "CLASS", "continue": "CONTINUE",
        "default": "DEFAULT", "do": "DO", "else": "ELSE", "enum": "ENUM",
        "extends": "EXTENDS", "final": "FINAL", "finally": "FINALLY",
        "float": "FLOAT", "double": "DOUBLE", "for": "FOR", "if": "IF", "implements": "IMPLEMENTS",
        "import": "IMPORT", "instanceof": "INSTANCEOF", "int": "INT",
        "interface": "INTERFACE", "long": "LONG", "native": "NATIVE",
        "new": "NEW", "package": "PACKAGE", "private": "PRIVATE",
        "protected": "PROTECTED", "public": "PUBLIC", "return": "RETURN",
        "short": "SHORT", "static": "STATIC", "strictfp": "STRICTFP",
        "super": "SUPER", "switch": "SWITCH", "synchronized": "SYNCHRONIZED",
        "this": "THIS", "throw": "THROW", "throws": "THROWS",
        "transient": "TRANSIENT", "try": "TRY", "void": "VOID",
        "volatile": "VOLATILE", "while": "WHILE",
        "true": "TRUE", "false": "FALSE", "null": "NULL",
    }

    SYMBOLS_MAP = {
        '>>>=': 'URSHIFT_ASSIGN', '>>=': 'RSHIFT_ASSIGN', '<<=': 'LSHIFT_ASSIGN',
        '>>>': 'URSHIFT', '>>': 'RSHIFT', '<<': 'LSHIFT',
        '==': 'EQUAL', '<=': 'LE', '>=': 'GE', '!=': 'NOTEQUAL',
        '&&': 'AND', '||': 'OR', '++': 'INC', '--': 'DEC',
        '+=': 'ADD_ASSIGN', '-=': 'SUB_ASSIGN', '*=': 'MUL_ASSIGN', '/=': 'DIV_ASSIGN',
        '&=': 'AND_ASSIGN', '|=': 'OR_ASSIGN', '^=': 'XOR_ASSIGN', '%=': 'MOD_ASSIGN',
        '->': 'ARROW', '::': 'COLONCOLON', '...': 'ELLIPSIS',

        '{': 'LBRACE', '}': 'RBRACE', '(': 'LPAREN', ')': 'RPAREN',
        '[': 'LBRACK', ']': 'RBRACK', ';': 'SEMI', ',': 'COMMA', '.': 'DOT',
        '=': 'ASSIGN', '>': 'GT', '<': 'LT', '!': 'BANG', '~': 'TILDE',
        '?': 'QUESTION', ':': 'COLON', '+': 'ADD', '-': 'SUB', '*': 'MUL',
        '/': 'DIV', '&': 'BITAND', '|': 'BITOR', '^': 'CARET', '%': 'MOD', '@': 'AT'
    }

    # обратная таблица: тип токена -> исходный символ (для печати выражений)
    SYMBOL_TEXT = {v: k for k, v in SYMBOLS_MAP.items()}

    def __init__(self, input_stream):
        super().__init__(input_stream)
        self._code = input_stream.strdata
        self._length = len(self._code)
        self._pos = 0

        self._whitespace_re = re.compile(r'[ \t\f\r\n]+')
        self._line_comment_re = re.compile(r'//[^\n]*')
        self._block_comment_re = re.compile(r'/\*[\s\S]*?\*/')
        self._text_block_re = re.compile(r'"""[ \t\f]*\n(?:\\[\s\S]|(?!""")[^\\])*"""')
        self._string_re = re.compile(r'"(?:\\.|[^"\\\n])*"')
        self._char_re = re.compile(r"'(?:\\u[0-9a-fA-F]{4}|\\[0-7]{1,3}|\\.|[^'\\\n])'")
        self._number_re = re.compile(
            r'0[xX][0-9a-fA-F_]+[lL]?'
            r'|0[bB][01_]+[lL]?'
            r'|(?:\d[\d_]*(?:\.(?!\.)[\d_]*)?|\.\d[\d_]*)(?:[eE][+-]?\d+)?[fFdDlL]?'
        )
        self._identifier_re = re.compile(r'(?:[^\W\d]|\$)[\w$]*')

        sym_keys = sorted(self.SYMBOLS_MAP.keys(), key=lambda x: -len(x))
        sym_pattern = '|'.join(re.escape(s) for s in sym_keys)
        self._symbol_re = re.compile(sym_pattern)

        # порядок важен: текстовый блок раньше строки, комментарии раньше '/'
        self._rules = [
            (self._line_comment_re, 'LINE_COMMENT', Token.HIDDEN_CHANNEL),
            (self._block_comment_re, 'BLOCK_COMMENT', Token.HIDDEN_CHANNEL),
            (self._text_block_re, 'TEXT_BLOCK', Token.DEFAULT_CHANNEL),
            (self._string_re, 'STRING', Token.DEFAULT_CHANNEL),
            (self._char_re, 'CHAR', Token.DEFAULT_CHANNEL),
            (self._number_re, 'NUMBER', Token.DEFAULT_CHANNEL),
        ]

    def _advance_position(self, text_segment: str):
        """Updates self._pos, self._line and self._column past the consumed text."""
        self._pos += len(text_segment)

        if '\n' in text_segment:
            parts = text_segment.split('\n')
            self._line += len(parts) - 1
            self._column = len(parts[-1])
        else:
            self._column += len(text_segment)

    def _emit(self, token_type, value, channel=Token.DEFAULT_CHANNEL):
        start = self._pos
        stop = start + len(value) - 1
        tok = self._factory.create((self, self._input), token_type, value, channel, start, stop, self._line, self._column)
        self._advance_position(value)
        return tok

    def nextToken(self):
        while True:
            if self._pos >= self._length:
                return self.emitEOF()

            # 1) Пробелы / переводы строк - пропускаем
            m = self._whitespace_re.match(self._code, self._pos)
            if m:
                self._advance_position(m.group(0))
                continue

            # 2) Комментарии, литералы, числа
            for regex, token_type, channel in self._rules:
                m = regex.match(self._code, self._pos)
                if m:
                    return self._emit(token_type, m.group(0), channel)

            # 3) Идентификатор / ключевое слово
            m = self._identifier_re.match(self._code, self._pos)
            if m:
                value = m.group(0)
                return self._emit(self.KEYWORDS.get(value, 'IDENTIFIER'), value)

            # 4) Операторы / символы (многосимвольные в приоритете)
            m = self._symbol_re.match(self._code, self._pos)
            if m:
                value = m.group(0)
                return self._emit(self.SYMBOLS_MAP.get(value, 'SYMBOL'), value)

            # 5) Нераспознанный символ - возвращаем как UNKNOWN
            return self._emit('UNKNOWN', self._code[self._pos])
