"""
Argspan matcher: which option claims a token.

Ordering rules
- Keyword options are tried first, in declaration order; the first whose
  matches() accepts the token wins. Duplicate identifiers across options are
  therefore resolved first-declared-wins.
- Only when no keyword option matches are positional options tried, in
  declaration order; the first one whose matches() accepts (the first unfilled
  slot) wins.
- When neither scan succeeds the token is unrecognized (None).

Keyword identifiers are specific, so they take precedence: a positional slot
never absorbs a token that a keyword option would have claimed. Positional
slots are content-blind, though, so a mistyped keyword-looking token (e.g.
"--typo") still fills the next unfilled slot when one exists.
"""
from typing import NamedTuple

from .options import Kind


class Split(NamedTuple):
    """
    Options partitioned by kind, each part in declaration order.
    """
    keyword: tuple
    positional: tuple


def split(options, /):
    """
    Partition `options` by their Kind tag, preserving declaration order.

    Raises TypeError for an object whose kind is not a Kind member.
    """
    keyword = []
    positional = []
    for option in options:
        match getattr(option, "kind", None):
            case Kind.KEYWORD:
                keyword.append(option)
            case Kind.POSITIONAL:
                positional.append(option)
            case kind:
                raise TypeError("%r has no valid option kind (got %r)" % (option, kind))
    return Split(tuple(keyword), tuple(positional))


def match(token, options, /):
    """
    Return the option claiming `token`, or None when none does.
    """
    keyword, positional = split(options)
    for option in keyword:
        if option.matches(token):
            return option
    for option in positional:
        if option.matches(token):
            return option
    return None


__all__ = (
    "Split",
    "split",
    "match",
)
