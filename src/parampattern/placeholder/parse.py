from lark import Lark, Token, Transformer

from parampattern.source import Source, SourceSpan

from .grammar import BODY_GRAMMAR
from .model import PlaceholderBody


class _BodyTransformer(Transformer[Token, PlaceholderBody]):
    def start(self, items: list[Token]) -> PlaceholderBody:
        name = ""
        fmt: str | None = None
        separator: int | None = None

        for tok in items:
            if tok.type == "NAME":
                name = str(tok).strip()
            elif tok.type == "SEPARATOR":
                separator = tok.start_pos
                fmt = ""
            elif tok.type == "FORMAT":
                fmt = str(tok).strip()

        return PlaceholderBody(name=name, format=fmt, separator=separator)

_PARSER = Lark(
    BODY_GRAMMAR,
    start="start",
    parser="lalr",
    propagate_positions=True,
    lexer="contextual",
    cache=False,
)

def parse_body(source: Source, body: SourceSpan) -> PlaceholderBody:
    # Every string is a valid body: both terminals accept any character, so the
    # only structural rules (blank format, adjacency) are checked by the scanner.
    return _BodyTransformer().transform(_PARSER.parse(source.slice(body)))

def parse_body_str(text: str) -> PlaceholderBody:
    source = Source.from_string(text)
    return parse_body(source, source.full_span())
