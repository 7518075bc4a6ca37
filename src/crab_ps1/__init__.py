"""
A crab-flavored Bash prompt with asynchronous Git status

``crab-ps1`` prints a shell statement that sets Bash's ``PS1`` to a one-line
prompt showing the last command's exit status, the hostname, the user, the
current directory, and the state of the enclosing Git repository.  The pieces
are gathered concurrently; if ``git status`` turns out to be slow, the output
also tells the shell to skip the Git scan on the next prompt.

Usage in ``~/.bashrc``::

    PROMPT_COMMAND='eval "$(crab-ps1 "$?")"'

Running ``unset SKIP_GIT_STATUS`` turns the Git integration back on.
"""

__version__ = "0.1.0"
__license__ = "MIT"
