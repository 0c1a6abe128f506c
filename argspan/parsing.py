"""
Argspan parsing engine: scan an argument vector against a set of options.

What this module provides
- resolve(option, index, argv): arity negotiation for a matched option; returns
  the exclusive end of the slice of argv that belongs to it.
- Parser: the engine bound to a caller-owned option sequence. It scans left to
  right, hands each matched slice to the option's parse(), and accumulates the
  tokens no option claims.
- parse(argv, options): one-shot function form returning the unrecognized
  tokens.

Scan rules
- The cursor starts at `skip` (default 1, conventionally the program name).
- A matched option receives argv[index:stop], i.e. the matched token followed
  by its parameters; the cursor then jumps to stop (the end of argv for greedy
  options, so anything declared after a greedy option is unreachable once it
  fires).
- An unmatched token is appended to the unrecognized list and skipped.
- Faults (ConversionError, ArgumentCountError, IllegalArityError) abort the
  scan immediately; options parsed before the fault keep their values.

Ownership
- The parser keeps a reference to the caller's option sequence, never a copy:
  options appended later by the caller take part in later scans, and the
  options themselves carry all parse results.
- Options are mutated in place; one option set must not be parsed from several
  threads at once.

Quick start
    from argspan import Parser, Flag, KeywordOption, PositionalOption

    verbose = Flag("-v", "--verbose")
    jobs = KeywordOption("-j", "--jobs", type=int, default=1)
    source = PositionalOption("SOURCE")

    parser = Parser([verbose, jobs, source])
    if not parser.parse(["tool", "-j", "4", "src/"]):
        print("unrecognized:", parser.unrecognized)
"""
from .faults import ArgumentCountError, IllegalArityError, FaultCode
from .logger import logger
from .matching import match, split
from .options import Arity


def resolve(option, index, argv, /):
    """
    Compute the exclusive end of the slice belonging to `option`.

    parameters
    - option: the option that matched argv[index].
    - index: cursor position of the matched token.
    - argv: the full argument vector.

    returns
    - index + 1 for arity 0;
    - index + 1 + N for arity N, when N tokens remain after the match;
    - len(argv) for Arity.GREEDY (zero remaining tokens is fine).

    raises
    - ArgumentCountError when fewer than N tokens remain.
    - IllegalArityError for any negative arity other than Arity.GREEDY.
    """
    count = option.param_count()
    match count:
        case Arity.GREEDY:
            return len(argv)
        case int() if count >= 0:
            if (stop := index + 1 + count) > len(argv):
                identifier = argv[index]
                available = len(argv) - index - 1
                raise ArgumentCountError(
                    "option %r at position %d expects %d value(s) but only %d remain" % (
                        identifier, index, count, available
                    ),
                    title="not enough values",
                    code=FaultCode.NOT_ENOUGH_VALUES,
                    hint="pass %d value(s) after %r" % (count, identifier),
                    identifier=identifier,
                    index=index,
                    expected=count,
                    available=available,
                )
            return stop
        case _:
            raise IllegalArityError(
                "%r reports an illegal arity of %r" % (option, count),
                title="illegal arity",
                code=FaultCode.ILLEGAL_ARITY,
                hint="param_count() must return a non-negative integer or Arity.GREEDY",
                option=option,
                arity=count,
            )


class Parser:
    """
    Parsing engine bound to a caller-owned, ordered option sequence.

    Properties
    - options: the caller's sequence itself (not a copy).
    - unrecognized: tuple of every token no option claimed, across all parse()
      calls on this instance, in encounter order. It is never cleared.
    """

    def __init__(self, options, /):
        self._options = options
        self._unrecognized = []

    @property
    def options(self):
        return self._options

    @property
    def unrecognized(self):
        return tuple(self._unrecognized)

    def parse(self, argv, /, skip=1):
        """
        Scan `argv` from position `skip` and dispatch every token.

        Returns True when every token of every parse() call so far was
        recognized, i.e. the unrecognized list is empty.
        """
        if isinstance(skip, bool) or not isinstance(skip, int):
            raise TypeError("parse() 'skip' must be an integer")
        if skip < 0:
            raise ValueError("parse() 'skip' cannot be negative")

        argv = list(argv)
        index = skip
        while index < len(argv):
            token = argv[index]
            if (option := match(token, self._options)) is None:
                logger.debug("unrecognized token %r at position %d", token, index)
                self._unrecognized.append(token)
                index += 1
                continue
            stop = resolve(option, index, argv)
            logger.debug("token %r at position %d matched %r (slice %d:%d)", token, index, option, index, stop)
            option.parse(argv[index:stop])
            index = stop

        logger.debug("scan finished: %d unrecognized token(s) so far", len(self._unrecognized))
        return not self._unrecognized

    def missing(self):
        """
        Required positional options that are still unset, in declaration order.

        Parsing never fails on them; this is for callers that want to report
        them.
        """
        return tuple(
            option for option in split(self._options).positional
            if getattr(option, "required", False) and not option.is_set()
        )


def parse(argv, options, /, skip=1):
    """
    Parse `argv` against `options` once and return the unrecognized tokens.
    """
    parser = Parser(options)
    parser.parse(argv, skip)
    return list(parser.unrecognized)


__all__ = (
    "resolve",
    "Parser",
    "parse",
)
