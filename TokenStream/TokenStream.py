from Token import Token


class TokenStream:
    def __init__(self, lexer):
        self.lexer = lexer
        self.tokens = []
        self.comments = []   # hidden channel, in source order
        self.pos = 0
        self._fill_tokens()

    def _fill_tokens(self):
        while True:
            tok = self.lexer.nextToken()
            if getattr(tok, "channel", 0) == Token.HIDDEN_CHANNEL:
                self.comments.append(tok)
                continue
            tok.tokenIndex = len(self.tokens)
            self.tokens.append(tok)
            if tok.type == Token.EOF:
                break

    def LT(self, k: int):
        index = self.pos + k - 1
        if 0 <= index < len(self.tokens):
            return self.tokens[index]
        return self.tokens[-1]  # EOF fallback

    def LB(self):
        """Last consumed token, or None at the start of the stream."""
        if self.pos == 0:
            return None
        return self.tokens[self.pos - 1]

    def consume(self):
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
