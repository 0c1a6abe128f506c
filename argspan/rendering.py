"""
Argspan help rendering.

Layout
    Usage: COMMAND <options> LABEL...

    <label padded to width><description>
    <label as wide as width or wider>
    <width spaces><description>

- The usage line shows "<options>" once when any keyword option exists, then
  each positional label in declaration order ("NAME", or "[NAME]" when
  optional).
- Each option contributes one entry, in declaration order: its help() label,
  left-justified to the column width, followed by its description. A label
  that does not fit leaves the description to the next line, at the column.
- Line breaks inside a description are re-indented to the column.
- The default width is 25, or 15 when there are no positional options.

Rendering only reads option state (help(), kind), so identical option state
always renders to identical text.

Styling
- With colorful=True the text is styled through a palette; define a mapping
  named __styles__ in __main__ to override any entry:
  usage-label, program-name, usage-section, keyword-name, positional-name,
  argument-description.
- Without colorful, no style is applied at all.
"""
from collections import defaultdict

from rich.console import Console
from rich.text import Text

from .matching import split
from .options import Kind
from .utils import Unset

_WIDTH = 25
_KEYWORD_ONLY_WIDTH = 15


def format_help(command, options, /, width=Unset, *, colorful=False):
    """
    Build the help text for `command` with `options` as a rich Text.

    parameters
    - command: program name shown on the usage line.
    - options: ordered option sequence (not modified).
    - width: minimum label column width; defaults to 25, or 15 for keyword-only
      option sets.
    - colorful: apply the style palette.
    """
    keyword, positional = split(options)
    if width is Unset:
        width = _WIDTH if positional else _KEYWORD_ONLY_WIDTH
    if isinstance(width, bool) or not isinstance(width, int) or width < 0:
        raise ValueError("format_help() 'width' must be a non-negative integer")

    styles = defaultdict(str, {
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "usage-section": "bold #36C5F0",  # SKY-BLUE → softer than cyan
        "keyword-name": "bold #00E6FF",  # CYAN for keyword options
        "positional-name": "bold #FFD600",  # AMBER for positionals
        "argument-description": "#9CA3AF",  # Muted gray
    } | getattr(__import__("__main__"), "__styles__", {}))

    def text(fragment, style=""):
        # Normalize to Text; in non-colorful mode, strip styles.
        if not colorful:
            return Text(str(fragment) if not isinstance(fragment, Text) else fragment.plain)
        if isinstance(fragment, Text):
            return fragment.copy()
        return Text(str(fragment), styles[style])

    usage = Text()
    usage.append(text("Usage", "usage-label")).append(": ")
    usage.append(text(command, "program-name"))
    if keyword:
        usage.append(" ").append(text("<options>", "usage-section"))
    for option in positional:
        usage.append(" ").append(text(option.help()[0], "positional-name"))

    render = usage
    if keyword or positional:
        render.append("\n")
    indent = " " * width
    for option in options:
        label, descr = option.help()
        style = "keyword-name" if option.kind is Kind.KEYWORD else "positional-name"

        entry = text(label, style)
        if descr:
            if len(label) >= width:
                entry.append("\n").append(indent)
            else:
                entry.append(" " * (width - len(label)))
            lines = text(descr, "argument-description").split("\n", allow_blank=True)
            entry.append(Text("\n" + indent).join(lines))

        render.append("\n").append(entry)

    return render


def print_help(sink, command, options, /, width=Unset, *, colorful=False):
    """
    Render the help text for `command` into `sink`.

    sink
    - a rich Console: printed as-is (soft-wrapped, no highlighting);
    - any object with write(str): receives the plain text and a final newline.
    """
    render = format_help(command, options, width, colorful=colorful)
    if isinstance(sink, Console):
        sink.print(render, soft_wrap=True, highlight=False)
    else:
        sink.write(render.plain + "\n")


__all__ = (
    "format_help",
    "print_help",
)
