r"""
Argspan option descriptors.

Overview
- Capability
  • OptionBase: what every option implements (matching predicate, arity,
    conversion, set-state, help label). Custom options subclass Positional or
    Keyword and provide the abstract methods.
- Kinds (closed, tagged by Kind)
  • Positional: matched by unfilled slot, in declaration order (content-blind).
  • Keyword: matched by exact identifier equality (e.g., -o/--output).
- Typed variants
  • PositionalOption[_T]: positional, value-bearing.
  • KeywordOption[_T]: keyword, value-bearing (a bool keyword option is a flag).
  • Flag: keyword, presence-only switch (bool, default False).

Arity (param_count)
- Arity.FLAG (0): no following token (flags, scalar positionals).
- N > 0: exactly N following tokens.
- Arity.GREEDY (-1): every remaining token of the argument vector.

Parsing contract
- parse(tokens) receives [matched-token, param_1, …, param_N] and is the only
  mutator: it converts, stores the value, then marks the option as set (even
  when the value equals the default). A failed conversion raises
  ConversionError and leaves value and set-state untouched.
- is_set() goes from False to True once and never reverts.

Metadata (sanitized on construction)
- descr: Unset | str | Text, non-empty when provided.
- name (positional): non-empty string.
- identifiers (keyword): at least one, non-empty, no whitespace, no duplicates
  within one option. Duplicates across options are allowed; the first
  declared option wins when matching.
- type: callable; conversion goes through argspan.converters unless an explicit
  converter is given.
- nargs: Unset | int (>= 1) | Ellipsis / "..." (greedy).

Quick example:
    >>> verbose = Flag("-v", "--verbose", descr="chatty output")
    >>> jobs = KeywordOption[int]("-j", "--jobs", type=int, default=1)
    >>> source = PositionalOption("SOURCE")
    >>> jobs.parse(["--jobs", "4"])
    >>> jobs.value, jobs.is_set()
    (4, True)
"""
import builtins
import functools
import operator
import re
from abc import ABCMeta, abstractmethod
from enum import Enum, IntEnum
from types import EllipsisType

from rich.text import Text

from .converters import convert
from .faults import ArgumentCountError, FaultCode
from .utils import *


class Kind(Enum):
    """
    Closed tag of option kinds; the matcher dispatches on it.
    """
    POSITIONAL = "positional"
    KEYWORD = "keyword"


class Arity(IntEnum):
    """
    Well-known param_count() values. Any positive integer is a valid arity too.
    """
    GREEDY = -1
    FLAG = 0
    SINGLE = 1


class OptionType(ABCMeta):
    """
    Metaclass giving option classes stable introspection.

    Responsibilities
    - __typename__ is derived from the class name (camel-case split with
      hyphens) and used in validation messages.
    - Every name listed in a class's __introspectable__ becomes a read-only
      property over the backing field "_{name}" (see utils.view).
    - __displayable__ accumulates the introspectable names of the whole
      hierarchy, in base-first order, for repr and rich pretty-printing.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        displayable = []
        for base in reversed(bases):
            for field in getattr(base, "__displayable__", ()):
                if field not in displayable:
                    displayable.append(field)
        for field in namespace.get("__introspectable__", ()):
            if field not in displayable:
                displayable.append(field)

        return super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
                "__displayable__": tuple(displayable),
            } | {
                field: view(field) for field in namespace.get("__introspectable__", ())
            },
            **options
        )


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate the metadata shared by every option.

    - descr: optional short description. If omitted (Unset), it becomes None.
      If provided, it must be a string (or rich Text) that is non-empty after
      trimming.
    """
    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)


def _sanitize_positional_metadata(cls, metadata, /):
    """
    Internal: validate the name of a positional option (shown in usage/help).
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not (name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    metadata["name"] = name
    metadata["required"] = bool(metadata["required"])


def _sanitize_keyword_metadata(cls, metadata, /):
    """
    Internal: validate the identifiers of a keyword option.

    Identifiers keep their declaration order (it is the help label order).
    Uniqueness is only enforced inside one option.
    """
    identifiers = []
    if not metadata["identifiers"]:
        raise TypeError(f"{cls.__typename__} must specify at least one identifier")

    for identifier in metadata["identifiers"]:
        if not isinstance(identifier, str):
            raise TypeError(f"{cls.__typename__} identifiers must be strings")
        elif not identifier or re.search(r"\s", identifier):
            raise ValueError(f"{cls.__typename__} identifiers must be non-empty and contain no whitespace")
        elif identifier in identifiers:
            raise ValueError(f"{cls.__typename__} identifiers cannot contain duplicates")
        identifiers.append(identifier)

    metadata["identifiers"] = tuple(identifiers)


def _sanitize_typed_metadata(cls, metadata, /):
    """
    Internal: validate the value-bearing fields of typed options.

    - type: must be callable (it is the target of conversion).
    - converter: Unset or callable; overrides the converter registry.
    - nargs: Unset (single value) | int (>= 1) | Ellipsis or "..." (greedy).
    - default: any value, not validated.
    """
    if not callable(metadata["type"]):
        raise TypeError(f"{cls.__typename__} 'type' must be callable")

    if not (metadata["converter"] is Unset or callable(metadata["converter"])):
        raise TypeError(f"{cls.__typename__} 'converter' must be callable")
    metadata["converter"] = coalesce(metadata["converter"])

    match nargs := metadata["nargs"]:
        case UnsetType() | EllipsisType():
            pass
        case "...":
            nargs = Ellipsis
        case bool():
            raise TypeError(f"{cls.__typename__} 'nargs' must be an integer or ellipsis")
        case int() if nargs < 1:
            raise ValueError(f"{cls.__typename__} 'nargs' must be a positive integer")
        case int():
            pass
        case _:
            raise TypeError(f"{cls.__typename__} 'nargs' must be an integer or ellipsis")
    metadata["nargs"] = coalesce(nargs)


def _values(option, identifier, tokens, /):
    """
    Internal: convert the value tokens of a typed option.

    Single-valued options (nargs unset or 1) yield the converted scalar;
    fixed-N and greedy options yield a tuple.
    """
    match option.nargs:
        case None:
            expected = 1
        case EllipsisType():
            expected = len(tokens)
        case count:
            expected = count
    if len(tokens) != expected:
        missing = len(tokens) < expected
        raise ArgumentCountError(
            "option %r expects %d value(s) but %d were given" % (identifier, expected, len(tokens)),
            title="not enough values" if missing else "too many values",
            code=FaultCode.NOT_ENOUGH_VALUES if missing else FaultCode.TOO_MANY_VALUES,
            hint="pass exactly %d value(s) to %r" % (expected, identifier),
            identifier=identifier,
            expected=expected,
            available=len(tokens),
        )
    values = tuple(
        convert(option.type, token, identifier, option.converter)
        for token in tokens
    )
    if option.nargs in (None, 1):
        return values[0]
    return values


class OptionBase(metaclass=OptionType):
    """
    Capability implemented by every option.

    Subclasses provide matches(), param_count(), help() and _from_strings();
    parse() and is_set() are shared so the set-state invariant holds for every
    option, including user-defined ones.
    """

    __introspectable__ = ("descr",)

    kind = Unset

    def __init__(self, descr=Unset):
        metadata = {"descr": descr}
        _sanitize_metadata(type(self), metadata)
        self._descr = metadata["descr"]
        self._set = False

    @abstractmethod
    def matches(self, token, /):
        """
        Tell whether this option claims `token`. Must not mutate the option.
        """

    @abstractmethod
    def param_count(self):
        """
        Number of tokens following the matched one that belong to this option:
        a non-negative integer, or Arity.GREEDY for every remaining token.
        """

    @abstractmethod
    def help(self):
        """
        Return (label, description) for help rendering.
        """

    @abstractmethod
    def _from_strings(self, tokens, /):
        """
        Convert and store the value from [matched-token, param_1, …, param_N].

        Raise ConversionError when the conversion is impossible.
        """

    def parse(self, tokens, /):
        """
        Convert `tokens` into this option's value, then mark the option as set.
        """
        self._from_strings(tuple(tokens))
        self._set = True

    def is_set(self):
        return self._set

    def __repr__(self):
        return f"{type(self).__typename__}({
            ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
        })"

    def __rich_repr__(self):
        for name in type(self).__displayable__:
            yield name, getattr(self, name)
        yield "set", self._set


class Positional(OptionBase):
    """
    Positional option: claims whatever token reaches it while unset.

    Positional options fill in declaration order because the matcher offers a
    token to each of them in turn and the first unset one accepts. The
    `required` flag only shapes help output ("NAME" vs "[NAME]").
    """

    __introspectable__ = ("name", "required")

    kind = Kind.POSITIONAL

    def __init__(self, name, /, descr=Unset, required=True):
        super().__init__(descr)
        metadata = {"name": name, "required": required}
        _sanitize_positional_metadata(type(self), metadata)
        self._name = metadata["name"]
        self._required = metadata["required"]

    def matches(self, token, /):
        # content-blind: any token fills the slot
        return not self._set

    def help(self):
        label = self._name if self._required else "[%s]" % self._name
        return label, self._descr if self._descr is not None else ""


class Keyword(OptionBase):
    """
    Keyword option: claims exactly the tokens equal to one of its identifiers.
    """

    __introspectable__ = ("identifiers",)

    kind = Kind.KEYWORD

    def __init__(self, *identifiers, descr=Unset):
        super().__init__(descr)
        metadata = {"identifiers": identifiers}
        _sanitize_keyword_metadata(type(self), metadata)
        self._identifiers = metadata["identifiers"]

    def matches(self, token, /):
        return token in self._identifiers

    def help(self):
        return ", ".join(self._identifiers), self._descr if self._descr is not None else ""


class PositionalOption[_T](Positional):
    """
    Positional, value-bearing option.

    The matched token is the (first) value, so a single-valued positional
    option consumes no further token; nargs=N consumes N - 1 more and greedy
    arity swallows the rest of the argument vector.

    Properties
    - value: the default until set, then the converted value.
    - type, nargs, default, converter: sanitized metadata (read-only).
    """

    __introspectable__ = ("type", "nargs", "default", "converter", "value")

    def __init__(
            self,
            name,
            /,
            descr=Unset,
            required=True,
            *,
            type=str,
            nargs=Unset,
            default=Unset,
            converter=Unset
    ):
        super().__init__(name, descr, required)
        metadata = {"type": type, "nargs": nargs, "default": default, "converter": converter}
        _sanitize_typed_metadata(builtins.type(self), metadata)
        self._type = metadata["type"]
        self._nargs = metadata["nargs"]
        self._converter = metadata["converter"]
        self._default = self._value = coalesce(metadata["default"])

    def param_count(self):
        match self._nargs:
            case None:
                return Arity.FLAG
            case EllipsisType():
                return Arity.GREEDY
            case count:
                return count - 1

    def _from_strings(self, tokens, /):
        self._value = _values(self, tokens[0], tokens)


class KeywordOption[_T](Keyword):
    """
    Keyword, value-bearing option.

    The matched identifier is followed by param_count() value tokens. A bool
    option without explicit nargs is a flag: it consumes nothing and becomes
    True when matched (defaulting to False). Matching again overwrites the
    value; the option stays set.

    Properties
    - value: the default until set, then the converted value.
    - type, nargs, default, converter: sanitized metadata (read-only).
    """

    __introspectable__ = ("type", "nargs", "default", "converter", "value")

    def __init__(
            self,
            *identifiers,
            descr=Unset,
            type=str,
            nargs=Unset,
            default=Unset,
            converter=Unset
    ):
        super().__init__(*identifiers, descr=descr)
        metadata = {"type": type, "nargs": nargs, "default": default, "converter": converter}
        _sanitize_typed_metadata(builtins.type(self), metadata)
        self._type = metadata["type"]
        self._nargs = metadata["nargs"]
        self._converter = metadata["converter"]
        self._default = self._value = coalesce(metadata["default"], False if self.flag else None)

    @property
    def flag(self):
        """
        True when this option is a presence-only switch.
        """
        return self._type is bool and self._nargs is None

    def param_count(self):
        match self._nargs:
            case None:
                return Arity.FLAG if self.flag else Arity.SINGLE
            case EllipsisType():
                return Arity.GREEDY
            case count:
                return count

    def _from_strings(self, tokens, /):
        if self.flag:
            self._value = True
            return
        identifier, *values = tokens
        self._value = _values(self, identifier, values)


class Flag(KeywordOption[bool]):
    """
    Presence-only keyword option: False by default, True once matched.
    """

    def __init__(self, *identifiers, descr=Unset):
        super().__init__(*identifiers, descr=descr, type=bool, default=False)


__all__ = (
    # Tags
    "Kind",
    "Arity",

    # Capability and kinds
    "OptionBase",
    "Positional",
    "Keyword",

    # Typed options
    "PositionalOption",
    "KeywordOption",
    "Flag",
)
