"""
Argspan faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every error the parsing
  engine can raise. Codes are grouped by domain to keep logs/searches predictable.
- ParserFault: base type that carries message + options and knows how to render
  itself for a rich console.
- ConversionError / ArgumentCountError / IllegalArityError: the concrete faults.

Propagation
- Faults are raised where they are detected and travel unmodified to the caller.
  A parse scan aborts on the first fault; options already applied stay applied.
- Unrecognized tokens are not faults: the parser collects them instead.

Rendering
- Printing a fault on a rich Console yields a short header, the message and a
  single hint. Output is uncolored unless the fault carries colorful=True.
- The host application can relabel codes with a __codes__ mapping and restyle
  the output with a __styles__ mapping, both defined in __main__.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes raised by the parsing engine (stable identifiers).

    grouping
    - conversion (2111x)
      • CONVERSION_FAILED
    - arity (2112x)
      • NOT_ENOUGH_VALUES, ILLEGAL_ARITY, TOO_MANY_VALUES
    """
    # --- conversion errors (21xxx) ---
    CONVERSION_FAILED           = 21111

    # --- arity errors (21xxx) ---
    NOT_ENOUGH_VALUES           = 21121
    ILLEGAL_ARITY               = 21122
    TOO_MANY_VALUES             = 21123

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ParserFault(Exception):
    """
    Base class of every error raised while parsing an argument vector.

    Attributes
    - message: the one-sentence, lowercased description (also str(fault)).
    - options: read-only mapping with the rendering fields (title, code, hint,
      colorful) and any context the raiser attached (token, identifier, ...).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    def __getattr__(self, name):
        # context fields are reachable as attributes (fault.token, fault.identifier, ...)
        try:
            return self.__dict__["options"][name]
        except KeyError:
            raise AttributeError(name) from None

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white library name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), styles[style])

        code = self.options.get("code")
        header = Text.assemble(
            "[ ",
            text(getattr(main, "__prog__", "argspan"), "prog-name"),
            " — ",
            text(code.normalize() if isinstance(code, FaultCode) else "-", "code"),
            " | ",
            text(str(self.options.get("title", type(self).__name__)).title(), "error-title"),
            " ]"
        )
        renders = [header, text(self.message, "error-message")]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))
        return Group(*renders)


class ConversionError(ParserFault):
    """A token could not be converted to the option's declared type."""


class ArgumentCountError(ParserFault):
    """A matched option received a different number of tokens than its declared arity requires."""


class IllegalArityError(ParserFault):
    """An option reported a negative arity other than the greedy sentinel."""


__all__ = (
    "FaultCode",
    "ParserFault",
    "ConversionError",
    "ArgumentCountError",
    "IllegalArityError",
)
