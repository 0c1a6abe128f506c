"""
Argspan converters: raw token → typed value.

Conversion is the only per-type extension point of the library. A converter is
any callable taking one raw token (str) and returning the converted value; it
signals failure by raising ValueError, TypeError or ArithmeticError, which
convert() normalizes into a ConversionError.

Registry
- register(type): decorator installing the converter for a type (replaces any
  previous entry).
- lookup(type): resolve a converter by walking type.__mro__, so a converter
  registered for a base class serves all its subclasses. Enum classes without a
  registration get a name-then-value converter. Anything else falls back to the
  generic converter: the type itself, called with the token.

Built-ins
- str: verbatim, the token is taken as-is.
- bool: strict textual booleans (true/false, yes/no, on/off, 1/0).
  Presence-only flags never reach this converter: a keyword bool option
  without explicit nargs consumes no token and is simply set to True.
- Enum subclasses: member name first, then member value.
- everything else (int, float, Decimal, Path, ...): type(token), which must
  accept the whole token.

Quick example
    >>> @register(complex)
    ... def to_complex(token):
    ...     return complex(token.replace(" ", ""))
    >>> convert(complex, "1 + 2j")
    (1+2j)
"""
import builtins
import functools
from enum import EnumType

from .faults import ConversionError, FaultCode
from .utils import Unset, rename

_converters = {}

# builtin scalar types whose entries only serve the exact type, never subclasses
_exact = frozenset((str, bool))


def register(type, /):
    """
    Install the decorated callable as the converter for `type`.

    The callable receives the raw token and returns the converted value.
    Returns the callable unchanged so it can still be used directly.
    """
    if not isinstance(type, builtins.type):
        raise TypeError("register() argument must be a type")

    @rename("register")
    def wrapper(converter, /):
        if not callable(converter):
            raise TypeError("@register() must be applied to a callable")
        _converters[type] = converter
        return converter

    return wrapper


def lookup(type, /):
    """
    Return the converter serving `type`.

    Resolution order
    - the closest registered entry along type.__mro__ (only enum bases are
      considered for Enum classes; str and bool entries only serve str and
      bool themselves, so a str subclass builds its own instances);
    - the enum converter, for Enum classes;
    - the type itself (generic conversion).
    """
    enum = isinstance(type, EnumType)
    for base in getattr(type, "__mro__", ()):
        # mixed-in data types (str, int) must not shadow enum conversion
        if enum and not isinstance(base, EnumType):
            continue
        if base is not type and base in _exact:
            continue
        if base in _converters:
            return _converters[base]
    if enum:
        return _enumeration(type)
    if not callable(type):
        raise TypeError("%r is not a convertible type" % (type,))
    return type


def convert(type, token, /, identifier=Unset, converter=None):
    """
    Convert `token` into `type`, raising ConversionError on failure.

    Parameters
    - type: the declared value type (used for lookup and in messages).
    - token: the raw token to convert.
    - identifier: the token that triggered the option (keyword identifier, or
      the positional token itself); reported in the error.
    - converter: explicit converter overriding the registry (None: use the registry).
    """
    function = lookup(type) if converter is None else converter
    try:
        return function(token)
    except (ValueError, TypeError, ArithmeticError) as exception:
        name = getattr(type, "__name__", repr(type))
        if identifier is Unset or identifier == token:
            message = "cannot convert %r to %s" % (token, name)
        else:
            message = "cannot convert %r to %s for option %r" % (token, name, identifier)
        raise ConversionError(
            message,
            title="conversion failed",
            code=FaultCode.CONVERSION_FAILED,
            hint="pass a value that is a valid %s" % name,
            token=token,
            identifier=identifier,
            type=type,
        ) from exception


@register(str)
def verbatim(token, /):
    return token


_booleans = {
    "true": True, "yes": True, "on": True, "1": True,
    "false": False, "no": False, "off": False, "0": False,
}


@register(bool)
def boolean(token, /):
    """
    Strict boolean parsing; unknown spellings are rejected instead of being
    treated as truthy strings.
    """
    try:
        return _booleans[token.strip().lower()]
    except KeyError:
        raise ValueError("%r is not a boolean" % token) from None


@functools.cache
def _enumeration(enum, /):
    """
    Build the converter for one Enum class: by member name, then by value
    converted through the type of the first member's value.
    """

    @rename("enumeration")
    def converter(token, /):
        try:
            return enum[token]
        except KeyError:
            pass
        try:
            return enum(lookup(builtins.type(next(iter(enum)).value))(token))
        except (StopIteration, ValueError, TypeError):
            values = ", ".join(str(member.value) for member in enum)
            raise ValueError("%r should be one of {%s}" % (token, values)) from None

    return converter


__all__ = (
    "register",
    "lookup",
    "convert",
)
