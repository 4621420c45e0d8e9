from Token import Token, CommonTokenFactory


class Lexer:
    """Base of the hand-written lexers: position bookkeeping and EOF emission."""

    def __init__(self, input_stream):
        self._input = input_stream
        self._factory = CommonTokenFactory.DEFAULT
        self._line = 1
        self._column = 0
        self._hitEOF = False

    @property
    def line(self) -> int:
        return self._line

    @property
    def column(self) -> int:
        return self._column

    def emitEOF(self):
        self._hitEOF = True
        size = getattr(self._input, "size", 0)
        return self._factory.create((self, self._input), Token.EOF, None, Token.DEFAULT_CHANNEL,
                                    size, size - 1, self._line, self._column)

    def nextToken(self):
        raise NotImplementedError

    def getAllTokens(self):
        tokens = []
        t = self.nextToken()
        while t.type != Token.EOF:
            tokens.append(t)
            t = self.nextToken()
        return tokens
