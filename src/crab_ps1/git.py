from __future__ import annotations
from dataclasses import dataclass
import logging
from pathlib import Path
import re
import subprocess
from .styles import Painter
from .styles import StyleClass as SC

log = logging.getLogger(__name__)

#: Shown in place of the branch name when ``HEAD`` is detached
NO_BRANCH = "NO BRANCH"

CONFLICT_GLYPH = "❌"
UNSTAGED_GLYPH = "✏️"
STAGED_GLYPH = "🚧"
UNTRACKED_GLYPH = "❓"

#: Two-letter ``git status --porcelain`` codes for unmerged paths
UNMERGED_CODES = frozenset({"DD", "AU", "UD", "UA", "DU", "AA", "UU"})


@dataclass
class GitStatus:
    #: The name of the current branch, or `NO_BRANCH` if ``HEAD`` is detached
    head: str

    #: `True` iff the repository is in a detached ``HEAD`` state
    detached: bool

    #: Status of the repository's worktree; this is `None` for bare
    #: repositories and for detached ``HEAD``s, where no scan is done
    wkt: WorkTreeStatus | None

    @property
    def dirty(self) -> bool:
        return self.wkt is not None and self.wkt.dirty

    def display(self, paint: Painter) -> str:
        if self.detached:
            return "|" + paint(NO_BRANCH, SC.GIT_DETACHED) + "|"
        s = self.head
        if (wkt := self.wkt) is not None:
            if wkt.conflict:
                s += CONFLICT_GLYPH
            if wkt.unstaged:
                s += UNSTAGED_GLYPH
            if wkt.staged:
                s += STAGED_GLYPH
            if wkt.untracked:
                s += UNTRACKED_GLYPH
        return "|" + paint(s, SC.GIT_DIRTY if self.dirty else SC.GIT_CLEAN) + "|"


@dataclass
class WorkTreeStatus:
    #: `True` iff there are any paths in the working tree with merge conflicts
    conflict: bool

    #: `True` iff there are modified files that have not been staged
    unstaged: bool

    #: `True` iff there are modifications staged to be committed
    staged: bool

    #: `True` iff there are untracked files in the working tree
    untracked: bool

    #: `True` iff there are changes not covered by the above flags (added,
    #: deleted, renamed, etc. paths); these have no glyph but still make the
    #: repository dirty
    other_changes: bool = False

    @property
    def dirty(self) -> bool:
        return (
            self.conflict
            or self.unstaged
            or self.staged
            or self.untracked
            or self.other_changes
        )


def git_status(path: str) -> GitStatus | None:
    """
    If ``path`` is in a Git repository, ``git_status()`` returns a `GitStatus`
    instance describing the repository's current state.  Parent directories
    are searched for the repository the same way Git itself does it.

    If ``path`` is empty, does not exist, or is not in a Git repository, or if
    Git is not installed, or if the repository cannot be read (e.g., because
    of a corrupt index), ``git_status()`` returns `None`.

    This function blocks on several ``git`` subprocesses; asynchronous callers
    should run it in a worker thread.
    """

    if not path:
        return None
    try:
        git_dir_str = git("rev-parse", "--absolute-git-dir", cwd=path)
    except OSError as e:
        # Git is not installed, or `path` is not a usable directory
        log.debug("Cannot run git in %r: %s", path, e)
        return None
    if git_dir_str is None:
        log.debug("No Git repository found at or above %r", path)
        return None
    git_dir = Path(git_dir_str)
    log.debug("Found Git directory %s", git_dir)

    try:
        head = (git_dir / "HEAD").read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        log.debug("Cannot read HEAD in %s: %s", git_dir, e)
        return None
    if not head.startswith("ref: "):
        return GitStatus(head=NO_BRANCH, detached=True, wkt=None)
    head = re.sub(r"^(ref: )?(refs/heads/)?", "", head)

    # The latter condition actually means that we're inside a .git directory,
    # but that's similar enough to a bare repo.
    if (
        git("rev-parse", "--is-bare-repository", cwd=path) == "true"
        or git("rev-parse", "--is-inside-work-tree", cwd=path) == "false"
    ):
        return GitStatus(head=head, detached=False, wkt=None)

    # Untracked files have to be asked for explicitly so that
    # `status.showUntrackedFiles=no` in the user's config doesn't hide them.
    try:
        r = subprocess.run(
            ["git", "status", "--porcelain", "--untracked-files=normal"],
            cwd=path,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=True,
            text=True,
        )
    except (subprocess.CalledProcessError, OSError) as e:
        # Corrupt index, stale lock, unreadable files, ...
        log.debug("git status failed in %r: %s", path, e)
        return None
    return GitStatus(head=head, detached=False, wkt=parse_porcelain(r.stdout))


def parse_porcelain(output: str) -> WorkTreeStatus:
    """
    Summarize the output of ``git status --porcelain`` (format version 1) as a
    `WorkTreeStatus`
    """
    conflict = False
    unstaged = False
    staged = False
    untracked = False
    other_changes = False
    for line in output.splitlines():
        if len(line) < 2 or line.startswith("##"):
            continue
        code = line[:2]
        if code == "??":
            untracked = True
        elif code == "!!":
            pass
        elif code in UNMERGED_CODES:
            conflict = True
        elif "M" in code:
            if code[0] == "M":
                staged = True
            if code[1] == "M":
                unstaged = True
        else:
            other_changes = True
    return WorkTreeStatus(
        conflict=conflict,
        unstaged=unstaged,
        staged=staged,
        untracked=untracked,
        other_changes=other_changes,
    )


def git(*args: str, cwd: str | None = None) -> str | None:
    """
    Run a Git command (suppressing stderr) and return its stdout with leading &
    trailing whitespace stripped.  If the command fails, return `None`.
    """
    try:
        return subprocess.run(
            ["git", *args],
            cwd=cwd,
            check=True,
            text=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
        ).stdout.strip()
    except subprocess.CalledProcessError:
        return None
