class ParseError(Exception):
    """The first grammar rule that failed, and where.

    ``offset`` is a byte offset into the input handed to the parser.
    """

    production = "input"

    def __init__(self, offset: int, production: str = None):
        if production is not None:
            self.production = production
        self.offset = offset
        super().__init__(f"expected {self.production} at offset {offset}")


class EmptyMethod(ParseError):
    production = "method"


class MissingPathRoot(ParseError):
    production = "'/'"


class EmptySegment(ParseError):
    production = "path segment"


class MalformedQueryPair(ParseError):
    production = "query pair"


class MalformedHeaderLine(ParseError):
    production = "':'"


class EmptyVersion(ParseError):
    production = "version"


class UnexpectedInput(ParseError):
    "A literal (separator, line terminator) did not match."


class InvalidEncoding(ParseError):
    production = "utf-8 text"
