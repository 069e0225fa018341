import argparse
import sys
from pathlib import Path

from devtools_cli import __version__
from devtools_cli.cli import run_cli
from devtools_cli.config import settings
from devtools_cli.logging import LoggerFactory, setup_logging
from devtools_cli.menu import MenuNavigator
from devtools_cli.modules import build_root_menu, default_tools
from devtools_cli.ui.renderer import MenuRenderer
from devtools_cli.ui.terminal import Terminal

ROOT_MENU_TITLE = "Developer Tools CLI"


def build_parser():
    # -h/--help belong to the line-mode help command, not argparse
    parser = argparse.ArgumentParser(
        prog="devtools",
        description="Developer tools launcher. Run without a command for the interactive menu.",
        add_help=False,
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable verbose debug output")
    parser.add_argument("--trace", action="store_true", help="Log every key press and repaint")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colours in the menu")
    parser.add_argument("--max-depth", type=int, default=None, help="Maximum menu nesting depth")
    parser.add_argument("--log-dir", type=Path, default=None, help="Directory for log files")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("command", nargs=argparse.REMAINDER, help="tui | list | help | run ...")
    return parser


def is_interactive(command):
    return not command or command[0] == "tui"


def main(argv=None):
    args, leading = build_parser().parse_known_args(argv)
    # REMAINDER does not pick up a leading unknown flag such as --help
    args.command = leading + args.command
    setup_logging(
        debug=args.debug,
        trace=args.trace,
        log_dir=args.log_dir,
        console=not is_interactive(args.command),
    )
    log = LoggerFactory.for_system()

    tools = default_tools()
    max_depth = args.max_depth
    if max_depth is None:
        max_depth = settings.get_int("max_depth", settings.DEFAULT_MAX_DEPTH)

    def run_tui():
        root = build_root_menu(ROOT_MENU_TITLE, tools)
        renderer = MenuRenderer(
            settings.get_setting("session_title", settings.DEFAULT_SESSION_TITLE),
            use_color=False if args.no_color else None,
        )
        MenuNavigator(root, Terminal(), renderer, max_depth=max_depth).run()

    try:
        run_cli(args.command, sys.stdout, tools, run_tui)
    except KeyboardInterrupt:
        return 130
    except Exception as error:
        log.error(f"{type(error).__name__}: {error}")
        print(f"error: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
