import logging
import sys

from rich.console import Console
from rich.pretty import pprint

from argspan import *

__styles__ = {
    "program-name": "bold #7CFC00",
}

console = Console()

verbose = Flag("-v", "--verbose", descr="log every dispatch step")
jobs = KeywordOption[int]("-j", "--jobs", descr="number of workers", type=int, default=1)
source = PositionalOption("SOURCE", "file to read")
rest = PositionalOption("ARGS", "forwarded to the worker", required=False, nargs=...)
options = [verbose, jobs, source, rest]


if __name__ == '__main__':
    if "-v" in sys.argv or "--verbose" in sys.argv:
        logging.basicConfig(level=logging.DEBUG)
    parser = Parser(options)
    try:
        parser.parse(sys.argv)
    except ParserFault as fault:
        console.print(fault)
        sys.exit(2)
    if parser.missing():
        print_help(console, sys.argv[0], options, colorful=True)
        sys.exit(2)
    pprint(options)
    if parser.unrecognized:
        pprint(parser.unrecognized)
