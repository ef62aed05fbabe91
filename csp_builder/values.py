"""Directive values: quoted reserved keywords and verbatim raw tokens."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from csp_builder.errors import InvalidValueError

# Keywords are emitted inside single quotes, so these would break the token.
_UNSAFE_KEYWORD = re.compile(r"[\s';]")

_HASH_ALGORITHMS = frozenset({"sha256", "sha384", "sha512"})


@dataclass(frozen=True)
class Keyword:
    """A reserved CSP keyword such as ``self`` or ``nonce-abc``.

    Rendered wrapped in single quotes.
    """

    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise InvalidValueError("keyword name must be a non-empty string")
        if _UNSAFE_KEYWORD.search(self.name):
            raise InvalidValueError(f"keyword contains whitespace, quote or semicolon: {self.name!r}")

    def render(self) -> str:
        return f"'{self.name}'"


@dataclass(frozen=True)
class RawToken:
    """Free-form source expression (origin, scheme, ``*``), rendered as-is."""

    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise InvalidValueError(f"raw token must be a string, got {type(self.text).__name__}")
        if not self.text.strip():
            raise InvalidValueError("raw token must not be empty")

    def render(self) -> str:
        return self.text


Value = Union[Keyword, RawToken]


def reserved(name: str) -> Keyword:
    return Keyword(name)


SELF = Keyword("self")
NONE = Keyword("none")
UNSAFE_INLINE = Keyword("unsafe-inline")
UNSAFE_EVAL = Keyword("unsafe-eval")
UNSAFE_HASHES = Keyword("unsafe-hashes")
STRICT_DYNAMIC = Keyword("strict-dynamic")
REPORT_SAMPLE = Keyword("report-sample")
WASM_UNSAFE_EVAL = Keyword("wasm-unsafe-eval")


def nonce(value: str) -> Keyword:
    """Build a ``'nonce-<value>'`` source."""
    return Keyword(f"nonce-{value}")


def hash_source(algorithm: str, digest: str) -> Keyword:
    """Build a ``'<algorithm>-<digest>'`` source, e.g. ``'sha256-...'``."""
    algorithm = algorithm.lower()
    if algorithm not in _HASH_ALGORITHMS:
        raise InvalidValueError(
            f"unsupported hash algorithm {algorithm!r}, expected one of {sorted(_HASH_ALGORITHMS)}"
        )
    return Keyword(f"{algorithm}-{digest}")


def to_value(obj: Value | str) -> Value:
    """Coerce a declared value: plain strings become raw tokens."""
    if isinstance(obj, (Keyword, RawToken)):
        return obj
    if isinstance(obj, str):
        return RawToken(obj)
    raise InvalidValueError(f"directive values must be str, Keyword or RawToken, got {type(obj).__name__}")


def parse_value(text: str) -> Value:
    """Read a value written in config notation.

    ``"'self'"`` is the keyword ``self``; anything else is a raw token.
    """
    text = text.strip()
    if len(text) > 2 and text.startswith("'") and text.endswith("'"):
        return Keyword(text[1:-1])
    return RawToken(text)
