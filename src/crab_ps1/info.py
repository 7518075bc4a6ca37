from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass
import os
from pathlib import Path, PurePosixPath
from .git import GitStatus
from .styles import Painter
from .styles import StyleClass as SC
from .util import first_line

#: File consulted for the hostname when :envvar:`HOSTNAME` is not set
HOSTNAME_FILE = Path("/etc/hostname")

#: Separates the hostname from the user in the prompt
CRAB = "🦀"

#: The user for whom the prompt ends in ``#`` instead of ``$``
ROOT_USER = "root"


class PromptError(Exception):
    """
    Raised when the environment lacks something without which no sensible
    prompt can be built
    """


@dataclass(frozen=True)
class InvocationContext:
    #: The exit status of the command run before this prompt
    exit_code: int

    #: The current working directory as given by :envvar:`PWD` (symlinks
    #: unresolved); empty if unset
    pwd: str

    #: The user's home directory
    home: str

    #: `True` iff the Git scan should be skipped on this run
    skip_git: bool

    @classmethod
    def from_env(
        cls, exit_code: int, environ: Mapping[str, str] | None = None
    ) -> InvocationContext:
        if environ is None:
            environ = os.environ
        try:
            home = str(Path.home())
        except (KeyError, RuntimeError) as e:
            raise PromptError(f"could not determine home directory: {e}") from e
        return cls(
            exit_code=exit_code,
            pwd=environ.get("PWD", ""),
            home=home,
            skip_git="SKIP_GIT_STATUS" in environ,
        )


@dataclass
class PromptInfo:
    exit_code: int
    hostname: str
    user: str

    #: The path to the current working directory.  If the directory is at or
    #: under the home directory, the path will start with ``~``.
    cwdstr: str

    git: GitStatus | None

    @property
    def prompt_char(self) -> str:
        return "#" if self.user == ROOT_USER else "$"

    def display(self, paint: Painter) -> str:
        """
        Construct & return a complete prompt string from the gathered
        information
        """

        # Exit status, hostname & user, all in one color that shows whether
        # the last command succeeded:
        ident = f"[{self.hostname}{CRAB}{self.user}]"
        if self.exit_code == 0:
            ps1 = paint(ident, SC.EXIT_SUCCESS)
        else:
            ps1 = paint(f"({self.exit_code}){ident}", SC.EXIT_FAILURE)

        # Show the path to the current working directory:
        ps1 += "(" + paint.styler.escape(self.cwdstr) + ")"

        # Show Git status information, if any:
        if self.git is not None:
            ps1 += self.git.display(paint)

        # The actual prompt symbol at the end of the prompt:
        ps1 += self.prompt_char

        return ps1


def get_hostname(
    environ: Mapping[str, str] | None = None, hostname_file: Path = HOSTNAME_FILE
) -> str:
    """
    Return :envvar:`HOSTNAME`, or else the first line of ``/etc/hostname``.
    Raises `PromptError` if neither is available.
    """
    if environ is None:
        environ = os.environ
    if (hostname := environ.get("HOSTNAME")) is not None:
        return hostname
    if (hostname := first_line(hostname_file)) is not None:
        return hostname
    raise PromptError(f"HOSTNAME is not set and {hostname_file} is unavailable")


def get_user(environ: Mapping[str, str] | None = None) -> str:
    if environ is None:
        environ = os.environ
    return environ.get("USER", "?")


def cwdstr(pwd: str, home: str) -> str:
    """
    Show the path to the current working directory.  If the directory is at or
    under ``home``, the path will start with ``~``; otherwise, it is returned
    unchanged.
    """
    if not pwd:
        return pwd
    try:
        rel = PurePosixPath(pwd).relative_to(home)
    except ValueError:
        return pwd
    if rel == PurePosixPath("."):
        return "~"
    else:
        return f"~/{rel}"
