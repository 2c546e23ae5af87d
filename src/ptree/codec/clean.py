"""Identifier cleaning for pairtree paths.

Cleaning happens in two passes over the UTF-8 bytes of an identifier:

1. Every byte outside visible ASCII (0x21-0x7e), plus the characters
   ``" * + , < = > ? \\ ^ |``, becomes ``^hh`` (two lowercase hex digits).
2. The common identifier characters ``/ : .`` are swapped for
   ``= + ,`` so they stay single characters.

Examples::

    clean("ark:/13030/xt12t3")   -> "ark+=13030=xt12t3"
    clean("what-the-*@?#!^!?")   -> "what-the-^2a@^3f#!^5e!^3f"
"""

import logging
import string

from ..core.messages import format_message
from ..errors import MalformedEscapeError

logger = logging.getLogger(__name__)

HEX_INDICATOR = "^"

_UNSAFE_PRINTABLE = frozenset(b'"*+,<=>?\\^|')
_HEX_DIGITS = frozenset(string.hexdigits)

SUBSTITUTIONS = {"/": "=", ":": "+", ".": ","}
REVERSE_SUBSTITUTIONS = {v: k for k, v in SUBSTITUTIONS.items()}


def is_unsafe_byte(b: int) -> bool:
    """True if the byte must be hex-escaped."""
    return b < 0x21 or b > 0x7E or b in _UNSAFE_PRINTABLE


def _encode_byte(b: int) -> str:
    if is_unsafe_byte(b):
        return f"{HEX_INDICATOR}{b:02x}"
    return chr(b)


def clean(identifier: str) -> str:
    """Clean an identifier so it can be split into pairtree shorties.

    Never fails; the empty string cleans to the empty string.
    """
    escaped = "".join(_encode_byte(b) for b in identifier.encode("utf-8"))
    return "".join(SUBSTITUTIONS.get(ch, ch) for ch in escaped)


def unclean(cleaned: str) -> str:
    """Reverse :func:`clean`.

    Escaped bytes are collected and decoded as UTF-8 together, so
    multi-byte characters escaped as several ``^hh`` tokens come back
    as the original character.

    Raises:
        MalformedEscapeError: On a truncated escape, non-hex digits, or
            escaped bytes that are not valid UTF-8
    """
    buf = bytearray()
    # index in ``cleaned`` that produced each byte of ``buf``
    origins: list[int] = []
    pos = 0
    end = len(cleaned)

    while pos < end:
        ch = cleaned[pos]
        if ch == HEX_INDICATOR:
            hex_pair = cleaned[pos + 1:pos + 3]
            if len(hex_pair) < 2:
                logger.debug(f"Truncated escape in {cleaned!r}")
                raise MalformedEscapeError(
                    cleaned, pos, format_message("pt.truncated_escape", pos, cleaned)
                )
            if not _HEX_DIGITS.issuperset(hex_pair):
                logger.debug(f"Bad hex escape {hex_pair!r} in {cleaned!r}")
                raise MalformedEscapeError(
                    cleaned, pos, format_message("pt.bad_hex", hex_pair, pos, cleaned)
                )
            buf.append(int(hex_pair, 16))
            origins.append(pos)
            pos += 3
            continue

        encoded = REVERSE_SUBSTITUTIONS.get(ch, ch).encode("utf-8")
        buf.extend(encoded)
        origins.extend([pos] * len(encoded))
        pos += 1

    try:
        return buf.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedEscapeError(
            cleaned, origins[e.start], format_message("pt.bad_utf8", cleaned)
        ) from e


__all__ = ["HEX_INDICATOR", "SUBSTITUTIONS", "clean", "unclean", "is_unsafe_byte"]
