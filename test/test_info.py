from __future__ import annotations
from pathlib import Path
import pytest
from crab_ps1.git import GitStatus, WorkTreeStatus
from crab_ps1.info import (
    InvocationContext,
    PromptError,
    PromptInfo,
    get_hostname,
    get_user,
)
from crab_ps1.styles import THEME, ANSIStyler, BashStyler, Color, Painter

CLEAN_MAIN = GitStatus(
    head="main",
    detached=False,
    wkt=WorkTreeStatus(
        conflict=False,
        unstaged=False,
        staged=False,
        untracked=False,
    ),
)


@pytest.mark.parametrize(
    "info,rendered",
    [
        pytest.param(
            PromptInfo(
                exit_code=0,
                hostname="firefly",
                user="alice",
                cwdstr="~/work",
                git=None,
            ),
            "\x1B[32m[firefly🦀alice]\x1B[m(~/work)$",
            id="simple",
        ),
        pytest.param(
            PromptInfo(
                exit_code=127,
                hostname="firefly",
                user="alice",
                cwdstr="/tmp",
                git=None,
            ),
            "\x1B[31m(127)[firefly🦀alice]\x1B[m(/tmp)$",
            id="failure",
        ),
        pytest.param(
            PromptInfo(
                exit_code=0,
                hostname="firefly",
                user="root",
                cwdstr="/etc",
                git=None,
            ),
            "\x1B[32m[firefly🦀root]\x1B[m(/etc)#",
            id="root",
        ),
        pytest.param(
            PromptInfo(
                exit_code=0,
                hostname="box",
                user="alice",
                cwdstr="~/proj",
                git=CLEAN_MAIN,
            ),
            "\x1B[32m[box🦀alice]\x1B[m(~/proj)|\x1B[32mmain\x1B[m|$",
            id="simple-git",
        ),
        pytest.param(
            PromptInfo(
                exit_code=1,
                hostname="box",
                user="alice",
                cwdstr="~/proj",
                git=GitStatus(
                    head="feature",
                    detached=False,
                    wkt=WorkTreeStatus(
                        conflict=False,
                        unstaged=True,
                        staged=True,
                        untracked=True,
                    ),
                ),
            ),
            (
                "\x1B[31m(1)[box🦀alice]\x1B[m"
                "(~/proj)"
                "|\x1B[38;5;208mfeature✏️🚧❓\x1B[m|"
                "$"
            ),
            id="dirty-git",
        ),
    ],
)
def test_display_prompt_info_ansi(info: PromptInfo, rendered: str) -> None:
    paint = Painter(ANSIStyler(), THEME)
    assert info.display(paint) == rendered


def test_display_prompt_info_bash() -> None:
    info = PromptInfo(
        exit_code=0,
        hostname="box",
        user="alice",
        cwdstr="~/proj",
        git=CLEAN_MAIN,
    )
    paint = Painter(BashStyler(), THEME)
    assert info.display(paint) == (
        r"\[\e[32m\][box🦀alice]\[\e[m\]"
        "(~/proj)"
        r"|\[\e[32m\]main\[\e[m\]|"
        "$"
    )


def test_display_prompt_info_bash_escapes_backslashes() -> None:
    info = PromptInfo(
        exit_code=0,
        hostname="box",
        user="alice",
        cwdstr=r"/tmp/a\nb",
        git=None,
    )
    paint = Painter(BashStyler(), THEME)
    assert info.display(paint) == r"\[\e[32m\][box🦀alice]\[\e[m\](/tmp/a\\\\nb)$"


@pytest.mark.parametrize(
    "s,escaped",
    [
        ("plain", "plain"),
        (r"a\b", r"a\\\\b"),
        ("$(rm -rf ~)", r"\\$(rm -rf ~)"),
        ("`id`", r"\\`id\\`"),
        (r"\$HOME", r"\\\\\\$HOME"),
        ("it's \"q\"", "it's \"q\""),
    ],
)
def test_bash_escape(s: str, escaped: str) -> None:
    assert BashStyler().escape(s) == escaped


def test_display_prompt_info_bash_escapes_branch() -> None:
    info = PromptInfo(
        exit_code=0,
        hostname="box",
        user="alice",
        cwdstr="~",
        git=GitStatus(
            head="$(touch pwned)",
            detached=False,
            wkt=WorkTreeStatus(False, False, False, False),
        ),
    )
    paint = Painter(BashStyler(), THEME)
    assert info.display(paint) == (
        r"\[\e[32m\][box🦀alice]\[\e[m\](~)|\[\e[32m\]\\$(touch pwned)\[\e[m\]|$"
    )


@pytest.mark.parametrize("exit_code", [1, 2, 127, 255, -1])
def test_display_failure_shows_exit_code(exit_code: int) -> None:
    info = PromptInfo(
        exit_code=exit_code,
        hostname="h",
        user="u",
        cwdstr="/",
        git=None,
    )
    s = info.display(Painter(ANSIStyler(), THEME))
    assert s.startswith(f"\x1B[31m({exit_code})[")


@pytest.mark.parametrize(
    "user,char",
    [
        ("root", "#"),
        ("alice", "$"),
        ("rooty", "$"),
        ("?", "$"),
    ],
)
def test_prompt_char(user: str, char: str) -> None:
    info = PromptInfo(exit_code=0, hostname="h", user=user, cwdstr="/", git=None)
    assert info.prompt_char == char


def test_get_hostname_from_env(tmp_path: Path) -> None:
    hostfile = tmp_path / "hostname"
    hostfile.write_text("fromfile\n", encoding="utf-8")
    assert get_hostname({"HOSTNAME": "box"}, hostfile) == "box"


def test_get_hostname_from_file(tmp_path: Path) -> None:
    hostfile = tmp_path / "hostname"
    hostfile.write_text("fromfile\nignored\n", encoding="utf-8")
    assert get_hostname({}, hostfile) == "fromfile"


def test_get_hostname_unavailable(tmp_path: Path) -> None:
    with pytest.raises(PromptError):
        get_hostname({}, tmp_path / "nonexistent")


def test_get_hostname_file_is_directory(tmp_path: Path) -> None:
    with pytest.raises(PromptError):
        get_hostname({}, tmp_path)


def test_get_user() -> None:
    assert get_user({"USER": "alice"}) == "alice"
    assert get_user({}) == "?"


def test_invocation_context_from_env(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    ctx = InvocationContext.from_env(0, {"PWD": "/srv/data"})
    assert ctx == InvocationContext(
        exit_code=0, pwd="/srv/data", home=str(tmp_path), skip_git=False
    )


def test_invocation_context_skip_git(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    ctx = InvocationContext.from_env(3, {"SKIP_GIT_STATUS": ""})
    assert ctx.skip_git
    assert ctx.pwd == ""
    assert ctx.exit_code == 3


@pytest.mark.parametrize(
    "color,param",
    [
        (Color.RED, "31"),
        (Color.GREEN, "32"),
        (Color.ORANGE, "38;5;208"),
    ],
)
def test_color_asfg(color: Color, param: str) -> None:
    assert color.asfg() == param
