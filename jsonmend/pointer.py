"""JSON Pointer (RFC 6901) parsing, formatting and lookup."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class InvalidPointerError(ValueError):
    """Raised when a pointer is malformed or does not resolve in a document."""


def escape_token(token: str) -> str:
    """Encode a reference token for use inside a pointer string."""
    return token.replace("~", "~0").replace("/", "~1")


def unescape_token(token: str) -> str:
    """Decode an encoded reference token."""
    head, *rest = token.split("~")
    decoded = [head]
    for part in rest:
        marker = part[:1]
        if marker == "0":
            decoded.append("~" + part[1:])
        elif marker == "1":
            decoded.append("/" + part[1:])
        else:
            raise InvalidPointerError(f"invalid escape sequence in token {token!r}")
    return "".join(decoded)


def _lookup_index(token: str) -> int | None:
    """Read an array index for lookups; '-' and malformed numbers give None."""
    if not token or not (token.isascii() and token.isdigit()):
        return None
    if token[0] == "0" and len(token) != 1:
        return None
    return int(token)


def parse_index(token: str, length: int, allow_next: bool) -> int:
    """Turn a token into an index into an array of ``length`` elements.

    With ``allow_next`` the index may equal ``length`` and ``-`` stands for it;
    otherwise the index must refer to an existing element.
    """
    if token == "-":
        if allow_next:
            return length
        raise InvalidPointerError("'-' does not refer to an existing element")
    if not token or not (token.isascii() and token.isdigit()):
        raise InvalidPointerError(f"invalid array index {token!r}")
    if token[0] == "0" and token != "0":
        raise InvalidPointerError(f"array index {token!r} has leading zeros")
    index = int(token)
    limit = length if allow_next else length - 1
    if index > limit:
        raise InvalidPointerError(
            f"array index {index} is out of bounds for length {length}"
        )
    return index


@dataclass(frozen=True)
class Pointer:
    """A JSON Pointer held as a tuple of decoded reference tokens."""

    tokens: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "tokens", tuple(str(token) for token in self.tokens))

    @classmethod
    def parse(cls, text: str) -> Pointer:
        """Parse a pointer string such as ``/a/b~1c``."""
        if text == "":
            return cls()
        if not text.startswith("/"):
            raise InvalidPointerError(f"pointer {text!r} must start with '/'")
        return cls(tuple(unescape_token(token) for token in text[1:].split("/")))

    def __str__(self) -> str:
        return "".join("/" + escape_token(token) for token in self.tokens)

    def is_root(self) -> bool:
        """True for the empty pointer, which refers to the whole document."""
        return not self.tokens

    def child(self, token: str | int) -> Pointer:
        """Return a pointer one level deeper."""
        return Pointer(self.tokens + (str(token),))

    def split_back(self) -> tuple[Pointer, str] | None:
        """Split into parent pointer and last token, or None at the root."""
        if not self.tokens:
            return None
        return Pointer(self.tokens[:-1]), self.tokens[-1]

    def starts_with(self, other: Pointer) -> bool:
        """True if ``other`` is this pointer or one of its ancestors."""
        size = len(other.tokens)
        return self.tokens[:size] == other.tokens

    def resolve(self, doc: Any) -> Any:
        """Return the value this pointer refers to within ``doc``."""
        current = doc
        for token in self.tokens:
            if isinstance(current, dict):
                if token not in current:
                    raise InvalidPointerError(f"pointer {str(self)!r} does not resolve")
                current = current[token]
            elif isinstance(current, list):
                index = _lookup_index(token)
                if index is None or index >= len(current):
                    raise InvalidPointerError(f"pointer {str(self)!r} does not resolve")
                current = current[index]
            else:
                raise InvalidPointerError(f"pointer {str(self)!r} does not resolve")
        return current