from __future__ import annotations
import asyncio
from collections.abc import Callable
from dataclasses import dataclass
import logging
import time
from .git import GitStatus, git_status
from .info import InvocationContext, PromptInfo, cwdstr, get_hostname, get_user

log = logging.getLogger(__name__)

#: If a Git scan takes longer than this many seconds, the shell is told to
#: skip the scan on the next prompt
SLOW_GIT_THRESHOLD = 0.5

#: A blocking function that returns the status of the repository enclosing the
#: given path, or `None` if there is none
StatusSource = Callable[[str], "GitStatus | None"]


@dataclass
class PromptResult:
    info: PromptInfo

    #: `True` iff the Git scan was slow enough that the shell should set
    #: :envvar:`SKIP_GIT_STATUS` before the next prompt
    skip_git_next: bool = False


async def gated_status(
    path: str,
    status_source: StatusSource = git_status,
    threshold: float = SLOW_GIT_THRESHOLD,
) -> tuple[GitStatus | None, bool]:
    """
    Run ``status_source(path)`` in a worker thread and return its result
    together with whether it took longer than ``threshold`` seconds.  The scan
    always runs to completion; the timing only affects the next invocation.
    """
    start = time.monotonic()
    status = await asyncio.to_thread(status_source, path)
    elapsed = time.monotonic() - start
    slow = elapsed > threshold
    log.debug("Git scan of %r took %.3fs (slow: %s)", path, elapsed, slow)
    return status, slow


async def get_identity() -> tuple[str, str]:
    return get_hostname(), get_user()


async def get_cwdstr(pwd: str, home: str) -> str:
    return cwdstr(pwd, home)


async def gather_prompt(
    ctx: InvocationContext, status_source: StatusSource = git_status
) -> PromptResult:
    """
    Gather the pieces of the prompt concurrently and combine them into a
    `PromptResult`.  Results are collected in prompt order, regardless of
    which task finishes first.
    """
    git_task: asyncio.Task[tuple[GitStatus | None, bool]] | None
    if ctx.skip_git:
        log.debug("SKIP_GIT_STATUS is set; not scanning for a repository")
        git_task = None
    else:
        git_task = asyncio.create_task(gated_status(ctx.pwd, status_source))
    identity_task = asyncio.create_task(get_identity())
    cwd_task = asyncio.create_task(get_cwdstr(ctx.pwd, ctx.home))

    hostname, user = await identity_task
    cwd = await cwd_task
    if git_task is not None:
        gs, slow = await git_task
    else:
        gs, slow = None, False

    return PromptResult(
        info=PromptInfo(
            exit_code=ctx.exit_code,
            hostname=hostname,
            user=user,
            cwdstr=cwd,
            git=gs,
        ),
        skip_git_next=slow,
    )


def run(
    ctx: InvocationContext, status_source: StatusSource = git_status
) -> PromptResult:
    return asyncio.run(gather_prompt(ctx, status_source))
