"""
Query Parser - Hand-written recursive descent parser

Parses the select-project-join subset the optimizer understands:
- SELECT * FROM R
- SELECT a, b FROM R, S
- WHERE a = b AND c = "value"

Attribute names are globally unique, so they are never qualified with a
relation name.
"""

import re
from typing import List, Optional

from relcost.core.errors import RelcostError
from relcost.core.types import Attribute
from relcost.sql.ast_nodes import EqualityPredicate, JoinPredicate, Predicate, SelectStatement

KEYWORDS = ("SELECT", "FROM", "WHERE", "AND")

TOKEN_PATTERN = re.compile(r"\"[^\"]*\"|'[^']*'|[,=*]|[^\s,=*]+")
NUMBER_PATTERN = re.compile(r"^-?\d+(\.\d+)?$")


class ParseError(RelcostError):
    """Raised when query parsing fails"""

    pass


class QueryParser:
    """
    Simple recursive descent parser for queries

    Grammar:
        QUERY      := SELECT attributes FROM relations [WHERE conditions]
        attributes := * | name [, name]*
        relations  := name [, name]*
        conditions := condition [AND condition]*
        condition  := name = name | name = literal
        literal    := "text" | 'text' | number
    """

    def __init__(self, text: str):
        self.text = text.strip().rstrip(";")
        self.tokens = self._tokenize(self.text)
        self.pos = 0

    def _tokenize(self, text: str) -> List[str]:
        """Split into names, quoted literals and the punctuation , = *"""
        return TOKEN_PATTERN.findall(text)

    def current(self) -> Optional[str]:
        """Get current token without advancing"""
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def consume(self, expected: Optional[str] = None) -> str:
        """
        Consume and return current token, optionally checking it matches expected

        Raises:
            ParseError: If expected token doesn't match or no more tokens
        """
        if self.pos >= len(self.tokens):
            raise ParseError(f"Unexpected end of query. Expected: {expected}")

        token = self.tokens[self.pos]

        if expected and token.upper() != expected.upper():
            raise ParseError(f"Expected '{expected}' but got '{token}' at position {self.pos}")

        self.pos += 1
        return token

    def parse(self) -> SelectStatement:
        """Parse query into a SelectStatement"""
        self.consume("SELECT")
        attributes = self._parse_attributes()

        self.consume("FROM")
        relations = [self._parse_name()]
        while self.current() == ",":
            self.consume(",")
            relations.append(self._parse_name())

        predicates: List[Predicate] = []
        if self.current() and self.current().upper() == "WHERE":
            self.consume("WHERE")
            predicates.append(self._parse_condition())
            while self.current() and self.current().upper() == "AND":
                self.consume("AND")
                predicates.append(self._parse_condition())

        if self.current() is not None:
            raise ParseError(f"Unexpected token '{self.current()}' at position {self.pos}")

        return SelectStatement(attributes=attributes, relations=relations, predicates=predicates)

    def _parse_attributes(self) -> Optional[List[Attribute]]:
        if self.current() == "*":
            self.consume("*")
            return None

        attributes = [Attribute(self._parse_name())]
        while self.current() == ",":
            self.consume(",")
            attributes.append(Attribute(self._parse_name()))
        return attributes

    def _parse_name(self) -> str:
        token = self.consume()
        if token.upper() in KEYWORDS or token in (",", "=", "*") or _is_literal(token):
            raise ParseError(f"Expected a name but got '{token}' at position {self.pos - 1}")
        return token

    def _parse_condition(self) -> Predicate:
        """
        Parse one condition

        Examples:
            persid = manager
            dept = "Research"
            age = 30
        """
        left = Attribute(self._parse_name())
        self.consume("=")
        right = self.consume()

        if _is_literal(right):
            return EqualityPredicate(left, _unquote(right))
        if right.upper() in KEYWORDS or right in (",", "*"):
            raise ParseError(f"Expected a value or attribute after '=' but got '{right}'")
        return JoinPredicate(left, Attribute(right))


def _is_literal(token: str) -> bool:
    return token[:1] in ("'", '"') or bool(NUMBER_PATTERN.match(token))


def _unquote(token: str) -> str:
    if token[:1] in ("'", '"'):
        return token[1:-1]
    return token


def parse(text: str) -> SelectStatement:
    """
    Convenience function to parse a query

    Args:
        text: Query string

    Returns:
        Parsed SelectStatement

    Raises:
        ParseError: If query is invalid

    Examples:
        >>> stmt = parse("SELECT * FROM Person")
        >>> stmt = parse('SELECT persname FROM Person, Project WHERE persid = manager AND dept = "IT"')
    """
    return QueryParser(text).parse()
