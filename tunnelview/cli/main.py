"""Main entry point for the TunnelView CLI."""

from __future__ import annotations

import sys
from pathlib import Path

from pydantic import ValidationError

from tunnelview import __version__
from tunnelview.config import settings
from tunnelview.kernel.info_list import InfoList
from tunnelview.kernel.location import LocationKey
from tunnelview.kernel.types import Facing, TunnelInfo, VisibilityFlags, format_frequency
from tunnelview.logging_config import setup_logging
from tunnelview.services.sync import ListSync


def print_help():
    """Print help message."""
    print(f"""
TunnelView CLI v{__version__}

Usage:
  tunnelview [options] FILE

FILE is a JSON batch: {{"full": true, "infos": [{{"loc": {{"x": 0, "y": 64, "z": 0, "f": 2, "d": 0}},
                                              "frequency": 5, "output": false, "name": "Main"}}]}}

Options:
  --query TEXT          Search text (words match names; @in @out @b @u @f=<hex>)
  --select X,Y,Z,F,D    Select a tunnel (F is a side name or 0-5)
  --hide-in             Hide inputs
  --hide-out            Hide outputs
  --hide-bound          Hide bound tunnels
  --hide-unbound        Hide unbound or errored tunnels
  --visible N           Rows visible at once (default: TUNNELVIEW_VISIBLE_ENTRIES)
  -h, --help            Show this help
  -v, --version         Show version

Environment:
  TUNNELVIEW_VISIBLE_ENTRIES   Default for --visible
  TUNNELVIEW_LOG_LEVEL         Log level (default: INFO)
  TUNNELVIEW_LOG_FILE          Also log to this file
""")


class TextScrollbar:
    """Scrollbar stand-in that just remembers its range."""

    def __init__(self) -> None:
        self.min = 0
        self.max = 0
        self.page_size = 0

    def set_range(self, min: int, max: int, page_size: int) -> None:
        self.min = min
        self.max = max
        self.page_size = page_size


def parse_location(text: str) -> LocationKey:
    """Parse "x,y,z,facing,dim". Raises ValueError."""
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 5:
        raise ValueError(f"expected X,Y,Z,FACING,DIM, got {text!r}")
    x, y, z, facing, dim = parts
    if facing.isdigit():
        side = Facing(int(facing))
    else:
        try:
            side = Facing[facing.upper()]
        except KeyError:
            raise ValueError(f"unknown side: {facing!r}") from None
    return LocationKey(int(x), int(y), int(z), side, int(dim))


def parse_args(args: list[str]) -> dict:
    """
    Parse command line arguments.

    Returns dict with:
        file: str | None
        query: str
        select: LocationKey | None
        flags: VisibilityFlags
        visible: int
        show_help: bool
        show_version: bool
    """
    result = {
        "file": None,
        "query": "",
        "select": None,
        "flags": VisibilityFlags(),
        "visible": settings.VISIBLE_ENTRIES,
        "show_help": False,
        "show_version": False,
    }
    hide = {"hide_in": False, "hide_out": False, "hide_bound": False, "hide_unbound": False}

    i = 0
    while i < len(args):
        arg = args[i]

        if arg in ("--query", "--select", "--visible"):
            if i + 1 >= len(args):
                print(f"Error: {arg} requires a value")
                sys.exit(1)
            value = args[i + 1]
            i += 1
            if arg == "--query":
                result["query"] = value
            elif arg == "--select":
                try:
                    result["select"] = parse_location(value)
                except ValueError as e:
                    print(f"Error: --select: {e}")
                    sys.exit(1)
            else:
                if not value.isdigit():
                    print("Error: --visible requires a non-negative integer")
                    sys.exit(1)
                result["visible"] = int(value)
        elif arg.startswith("--hide-") and arg[2:].replace("-", "_") in hide:
            hide[arg[2:].replace("-", "_")] = True
        elif arg in ("--help", "-h"):
            result["show_help"] = True
        elif arg in ("--version", "-v"):
            result["show_version"] = True
        elif arg.startswith("-"):
            print(f"Unknown option: {arg}")
            print("Run 'tunnelview --help' for usage.")
            sys.exit(1)
        elif result["file"] is None:
            result["file"] = arg
        else:
            print(f"Unexpected argument: {arg}")
            print("Run 'tunnelview --help' for usage.")
            sys.exit(1)

        i += 1

    result["flags"] = VisibilityFlags(**hide)
    return result


def format_row(info: TunnelInfo, selected: bool) -> str:
    marker = ">" if selected else " "
    side = "OUT" if info.output else "IN "
    state = " ERROR" if info.error else ""
    name = info.name or "(unnamed)"
    return f"{marker} {side} {format_frequency(info.frequency):<19}  {name:<24} {info.loc}{state}"


def main():
    """Main entry point."""
    args = parse_args(sys.argv[1:])

    if args["show_help"]:
        print_help()
        return

    if args["show_version"]:
        print(f"tunnelview {__version__}")
        return

    if args["file"] is None:
        print("Error: FILE is required")
        print("Run 'tunnelview --help' for usage.")
        sys.exit(1)

    setup_logging()

    path = Path(args["file"])
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        print(f"Error: cannot read {path}: {e}")
        sys.exit(1)

    scrollbar = TextScrollbar()
    infos = InfoList(scrollbar=scrollbar, visible_entries=args["visible"])
    sync = ListSync(infos, search=args["query"], flags=args["flags"])
    try:
        sync.apply_json(text)
    except ValidationError as e:
        print(f"Error: invalid batch in {path}:\n{e}")
        sys.exit(1)

    if args["select"] is not None:
        infos.select(args["select"])
        if infos.selected is None:
            print(f"Warning: no tunnel at {args['select']}")

    for info in infos.filtered:
        print(format_row(info, info.loc == infos.selected))

    print(f"-- {len(infos.filtered)} of {infos.size} shown, scroll 0..{scrollbar.max} (page {scrollbar.page_size})")


if __name__ == "__main__":
    main()
