"""Recursive-descent parser for Boo, turning the Tokens produced by lexer.py into an Expression tree.

Precedence, loosest first:

```
<expression>     ::= <additive>
<additive>       ::= <multiplicative> (("+" | "-") <multiplicative>)*   ; left-associative
<multiplicative> ::= <application> ("*" <application>)*                ; left-associative
<application>    ::= <atom> <atom>*                                     ; left-associative juxtaposition
<atom>           ::= <integer> | "-" <integer> | <identifier> | "(" <expression> ")"
                   | "fn" <identifier>+ "->" <expression>
                   | "let" <identifier> "=" <expression> "in" <expression>
                   | "match" <expression> "{" [<arm> (";" <arm>)* [";"]] "}"
<arm>            ::= <pattern> "->" <expression>
<pattern>        ::= "_" | <integer> | "-" <integer>
```

`fn` and `let` extend as far right as they can, so `let x = a in b + c` is `let x = a in (b + c)` even though they
are atoms. A "-" directly before an integer where an atom is expected is a negative literal; anywhere else it is the
subtraction operator, so `f -1` is `f - 1`.

The parser fails fast on the first token that does not fit: there is no error recovery.
"""

from boo.lang.error import ParseError
from boo.pure.lexer import TokenKind, tokenize
from boo.pure.lexical import Anything, Apply, Assign, Identifier, Literal, Match, Primitive, function, infix
from boo.pure.primitive import Integer

ATOM_STARTS = {
    TokenKind.INTEGER,
    TokenKind.IDENTIFIER,
    TokenKind.START_GROUP,
    TokenKind.FN,
    TokenKind.LET,
    TokenKind.MATCH,
}


class Parser:
    """Parses one complete expression out of a token list. source is only used for error messages."""
    ADDITIVE = ("+", "-")
    MULTIPLICATIVE = ("*",)

    def __init__(self, tokens, source=""):
        if not tokens or tokens[-1].kind is not TokenKind.END:
            raise ValueError("token list must end with an END token")

        self.tokens = tokens
        self.source = source
        self.position = 0

    def peek(self, offset=0):
        """Returns the token offset tokens ahead without consuming anything. Never reads past END."""
        return self.tokens[min(self.position + offset, len(self.tokens) - 1)]

    def advance(self):
        """Consumes and returns the current token."""
        token = self.peek()
        if token.kind is not TokenKind.END:
            self.position += 1
        return token

    def expect(self, kind, expected=None):
        """Consumes the current token if it is of kind, otherwise raises a ParseError."""
        token = self.peek()
        if token.kind is not kind:
            raise ParseError(self.source, expected or kind.value, token)
        return self.advance()

    def at_operator(self, operators):
        token = self.peek()
        return token.kind is TokenKind.OPERATOR and token.text in operators

    def parse(self):
        """Parses the whole token list, which must hold exactly one expression."""
        expr = self.expression()
        self.expect(TokenKind.END)
        return expr

    def expression(self):
        return self.additive()

    def additive(self):
        left = self.multiplicative()
        while self.at_operator(Parser.ADDITIVE):
            operator = self.advance().text
            left = infix(operator, left, self.multiplicative())
        return left

    def multiplicative(self):
        left = self.application()
        while self.at_operator(Parser.MULTIPLICATIVE):
            operator = self.advance().text
            left = infix(operator, left, self.application())
        return left

    def application(self):
        expr = self.atom()
        while self.peek().kind in ATOM_STARTS:
            expr = Apply(expr, self.atom())
        return expr

    def atom(self):
        token = self.peek()

        if token.kind is TokenKind.INTEGER or self.at_negative_integer():
            return Primitive(self.integer())
        elif token.kind is TokenKind.IDENTIFIER:
            return Identifier(self.advance().text)
        elif token.kind is TokenKind.START_GROUP:
            self.advance()
            expr = self.expression()
            self.expect(TokenKind.END_GROUP)
            return expr
        elif token.kind is TokenKind.FN:
            return self.function()
        elif token.kind is TokenKind.LET:
            return self.assignment()
        elif token.kind is TokenKind.MATCH:
            return self.match()

        raise ParseError(self.source, "an expression", token)

    def at_negative_integer(self):
        return self.at_operator(("-",)) and self.peek(1).kind is TokenKind.INTEGER

    def integer(self):
        """Parses an integer literal, with an optional leading '-'."""
        negative = self.at_negative_integer()
        if negative:
            self.advance()
        return Integer.parse(self.expect(TokenKind.INTEGER).value, negative)

    def function(self):
        """fn x y -> body, curried into fn x -> fn y -> body."""
        self.expect(TokenKind.FN)
        parameters = [self.expect(TokenKind.IDENTIFIER).text]
        while self.peek().kind is TokenKind.IDENTIFIER:
            parameters.append(self.advance().text)
        self.expect(TokenKind.ARROW, "an identifier or '->'")
        return function(parameters, self.expression())

    def assignment(self):
        self.expect(TokenKind.LET)
        name = self.expect(TokenKind.IDENTIFIER).text
        self.expect(TokenKind.ASSIGN)
        value = self.expression()
        self.expect(TokenKind.IN)
        return Assign(name, value, self.expression())

    def match(self):
        self.expect(TokenKind.MATCH)
        value = self.expression()
        self.expect(TokenKind.BLOCK_START)

        arms = []
        while self.peek().kind is not TokenKind.BLOCK_END:
            pattern = self.pattern()
            self.expect(TokenKind.ARROW)
            arms.append((pattern, self.expression()))

            if self.peek().kind is TokenKind.SEPARATOR:
                self.advance()
            elif self.peek().kind is not TokenKind.BLOCK_END:
                raise ParseError(self.source, "';' or '}'", self.peek())

        self.expect(TokenKind.BLOCK_END)
        return Match(value, arms)

    def pattern(self):
        token = self.peek()
        if token.kind is TokenKind.ANYTHING:
            self.advance()
            return Anything()
        elif token.kind is TokenKind.INTEGER or self.at_negative_integer():
            return Literal(self.integer())
        raise ParseError(self.source, "a pattern", token)


def parse_tokens(tokens, source=""):
    """Parses a token list (ending in END) into an Expression."""
    return Parser(tokens, source).parse()


def parse(source):
    """Lexes and parses source text into an Expression. Raises a LexError or a ParseError."""
    return parse_tokens(tokenize(source), source)
