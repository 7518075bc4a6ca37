from __future__ import annotations
import argparse
import logging
import shlex
import sys
from . import __version__
from .gather import run
from .info import InvocationContext, PromptError
from .styles import THEME, ANSIStyler, BashStyler, Painter


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="crab-ps1",
        description=(
            "Print a Bash statement setting PS1 to a prompt with Git status."
            '  Use as: PROMPT_COMMAND=\'eval "$(crab-ps1 "$?")"\''
        ),
    )
    parser.add_argument(
        "--ansi",
        action="store_true",
        help="Print just the prompt, formatted for direct display",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log debugging information to stderr",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "exit_code",
        nargs="?",
        type=int,
        default=1,
        help="Exit status of the previous command  [default: 1]",
    )
    args = parser.parse_args(argv)
    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s"
        )
    try:
        ctx = InvocationContext.from_env(args.exit_code)
        result = run(ctx)
    except PromptError as e:
        sys.exit(f"crab-ps1: {e}")
    if args.ansi:
        paint = Painter(styler=ANSIStyler(), theme=THEME)
        print(result.info.display(paint))
    else:
        paint = Painter(styler=BashStyler(), theme=THEME)
        if result.skip_git_next:
            print("export SKIP_GIT_STATUS=1")
        print(f"export PS1={shlex.quote(result.info.display(paint))}")


if __name__ == "__main__":
    main()
