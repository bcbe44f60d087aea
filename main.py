from dataclasses import dataclass

from rich.pretty import pprint

from tagflags import *


@dataclass
class Options:
    help: bool = option("-h, --help", default=False)
    quiet: bool = option("-q, --quiet             suppress output", default=False)
    verbose: int = option("-v, --verbose           be more verbose (may be given multiple times)", default=0)
    num: int = option("-n, --num=NUMBER        specify number", default=0)
    unsigned: UInt = option("-u, --unsigned=NUMBER   specify number >= 0", default=UInt(0))
    file: str = option("-f, --file=FILE         specify filename", default="")


if __name__ == '__main__':
    import sys

    if len(sys.argv) <= 1:
        print("usage: example [options] [args ...]")
        sys.exit(1)

    opts = Options()
    args = invoke(opts)

    pprint(opts)
    pprint(args)

    if opts.help:
        print("usage: example [options] [args ...]")
        print_help(opts)
        sys.exit(1)
