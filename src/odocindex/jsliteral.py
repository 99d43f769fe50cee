from __future__ import annotations

import re
from typing import Any

# Object literals decode to ObjectPairs so repeated keys survive.


class ObjectPairs(list):
    """Ordered ``(key, value)`` pairs of a decoded object, duplicates included."""

    def to_dict(self) -> dict:
        return dict(self)


class LiteralSyntaxError(ValueError):
    def __init__(self, message: str, pos: int):
        super().__init__(f"{message} at offset {pos}")
        self.pos = pos


_TOKEN = re.compile(
    r"""
    (?P<ws>\s+|//[^\n]*|/\*.*?\*/)
    |(?P<string>"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*')
    |(?P<number>-?\d+(?:\.\d+)?(?:[eE][-+]?\d+)?)
    |(?P<ident>[A-Za-z_$][A-Za-z0-9_$]*)
    |(?P<punct>[{}\[\]:,;=])
    """,
    re.VERBOSE | re.DOTALL,
)

_ESCAPE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|.)", re.DOTALL)
_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0", "b": "\b", "f": "\f"}
_KEYWORDS = {"true": True, "false": False, "null": None}


def _unescape(body: str) -> str:
    def repl(match: re.Match) -> str:
        seq = match.group(1)
        if seq.startswith("u{"):
            return chr(int(seq[2:-1], 16))
        if seq[0] in "ux" and len(seq) > 1:
            return chr(int(seq[1:], 16))
        return _SIMPLE_ESCAPES.get(seq, seq)

    return _ESCAPE.sub(repl, body)


def tokenize(text: str) -> list[tuple[str, str, int]]:
    tokens: list[tuple[str, str, int]] = []
    pos = 0
    while pos < len(text):
        match = _TOKEN.match(text, pos)
        if match is None:
            raise LiteralSyntaxError(f"unexpected character {text[pos]!r}", pos)
        kind = match.lastgroup or ""
        if kind != "ws":
            tokens.append((kind, match.group(kind), pos))
        pos = match.end()
    return tokens


class _Parser:
    def __init__(self, tokens: list[tuple[str, str, int]], end: int):
        self.tokens = tokens
        self.i = 0
        self.end = end

    def peek(self) -> tuple[str, str, int]:
        if self.i >= len(self.tokens):
            return ("eof", "", self.end)
        return self.tokens[self.i]

    def take(self) -> tuple[str, str, int]:
        tok = self.peek()
        self.i += 1
        return tok

    def expect(self, value: str) -> None:
        kind, text, pos = self.take()
        if kind != "punct" or text != value:
            raise LiteralSyntaxError(f"expected {value!r}, got {text or kind!r}", pos)

    def value(self) -> Any:
        kind, text, pos = self.take()
        if kind == "string":
            return _unescape(text[1:-1])
        if kind == "number":
            return float(text) if any(c in text for c in ".eE") else int(text)
        if kind == "ident" and text in _KEYWORDS:
            return _KEYWORDS[text]
        if kind == "punct" and text == "[":
            return self._array()
        if kind == "punct" and text == "{":
            return self._object()
        raise LiteralSyntaxError(f"unexpected token {text or kind!r}", pos)

    def _array(self) -> list:
        items: list = []
        while True:
            kind, text, _ = self.peek()
            if kind == "punct" and text == "]":
                self.take()
                return items
            items.append(self.value())
            kind, text, pos = self.take()
            if kind == "punct" and text == "]":
                return items
            if kind != "punct" or text != ",":
                raise LiteralSyntaxError("expected ',' or ']'", pos)

    def _object(self) -> ObjectPairs:
        pairs = ObjectPairs()
        while True:
            kind, text, pos = self.take()
            if kind == "punct" and text == "}":
                return pairs
            if kind == "string":
                key = _unescape(text[1:-1])
            elif kind in ("ident", "number"):
                key = text
            else:
                raise LiteralSyntaxError(f"bad object key {text or kind!r}", pos)
            self.expect(":")
            pairs.append((key, self.value()))
            kind, text, pos = self.take()
            if kind == "punct" and text == "}":
                return pairs
            if kind != "punct" or text != ",":
                raise LiteralSyntaxError("expected ',' or '}'", pos)


def parse_value(text: str) -> Any:
    """Decode a single JavaScript literal (superset of JSON)."""
    parser = _Parser(tokenize(text), len(text))
    result = parser.value()
    kind, tok, pos = parser.peek()
    if kind != "eof":
        raise LiteralSyntaxError(f"trailing data {tok!r}", pos)
    return result


def parse_bindings(text: str) -> dict[str, Any]:
    """Collect ``name = <literal>`` bindings from a script of declarations.

    Only literal right-hand sides are supported; everything else in the script
    (directives, ``const``/``let`` keywords, separators) is skipped.
    """
    tokens = tokenize(text)
    parser = _Parser(tokens, len(text))
    bindings: dict[str, Any] = {}
    while parser.peek()[0] != "eof":
        kind, name, _ = parser.take()
        nxt = parser.peek()
        if kind == "ident" and nxt[0] == "punct" and nxt[1] == "=":
            parser.take()
            bindings[name] = parser.value()
    return bindings


__all__ = ["LiteralSyntaxError", "ObjectPairs", "parse_bindings", "parse_value", "tokenize"]
