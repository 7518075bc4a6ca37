from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class Color(Enum):
    """
    An enumeration of the supported foreground colors.  Each color's value
    equals its xterm number.
    """

    RED = 1
    GREEN = 2
    ORANGE = 208

    def asfg(self) -> str:
        """
        Return the ANSI SGR parameter for setting the color as the foreground
        color
        """
        c = self.value
        return str(c + 30) if c < 8 else f"38;5;{c}"


@dataclass
class Style:
    color: Color | None = None

    def as_params(self) -> list[str]:
        params = []
        if self.color is not None:
            params.append(self.color.asfg())
        return params


class Styler(Protocol):
    def __call__(self, s: str, style: Style) -> str: ...

    def escape(self, s: str) -> str: ...


class BashStyler:
    """Class for escaping & styling strings for use in Bash's PS1 variable"""

    def __call__(self, s: str, style: Style) -> str:
        r"""
        Return the string ``s`` escaped for use in a PS1 variable.  If
        ``style.color`` is non-`None`, the string will be wrapped in the proper
        escape sequences to display it as the given foreground color.  All
        escape sequences are wrapped in ``\[ ... \]`` so that Bash does not
        count them towards the prompt's width.

        :param str s: the string to stylize
        :param Style style: the color to stylize the string with
        """
        s = self.escape(s)
        if params := style.as_params():
            s = rf"\[\e[{';'.join(params)}m\]{s}\[\e[m\]"
        return s

    def escape(self, s: str) -> str:
        r"""
        Escape characters in the string ``s`` that have special meaning in a
        PS1 variable.

        Bash first decodes the backslash escapes in PS1 and then subjects the
        result to parameter expansion & command substitution as though it
        were in double quotes.  Backslashes, dollar signs, and backticks are
        escaped for the second pass, and the resulting backslashes are escaped
        again for the first.  (A bare ``\$`` would decode to ``#`` for root.)
        """
        return (
            s.replace("\\", r"\\\\")
            .replace("$", r"\\$")
            .replace("`", r"\\`")
        )


class ANSIStyler:
    """Class for styling strings for display immediately in the terminal"""

    def __call__(self, s: str, style: Style) -> str:
        if params := style.as_params():
            s = f"\x1B[{';'.join(params)}m{s}\x1B[m"
        return s

    def escape(self, s: str) -> str:
        return s


StyleClass = Enum(
    "StyleClass",
    [
        "EXIT_SUCCESS",
        "EXIT_FAILURE",
        "GIT_CLEAN",
        "GIT_DIRTY",
        "GIT_DETACHED",
    ],
)

Theme = dict[StyleClass, Style]

THEME: Theme = {
    StyleClass.EXIT_SUCCESS: Style(Color.GREEN),
    StyleClass.EXIT_FAILURE: Style(Color.RED),
    StyleClass.GIT_CLEAN: Style(Color.GREEN),
    StyleClass.GIT_DIRTY: Style(Color.ORANGE),
    StyleClass.GIT_DETACHED: Style(Color.RED),
}


@dataclass
class Painter:
    styler: Styler
    theme: Theme

    def __call__(self, s: str, klass: StyleClass) -> str:
        return self.styler(s, self.theme[klass])
