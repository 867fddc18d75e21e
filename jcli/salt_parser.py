"""
Extract failed states from SaltStack highstate output.

Salt prints one block per state, separated by a line of ten hyphens:

    ----------
              ID: nginx
        Function: pkg.installed
          Result: False
         Comment: ...

A failed state is any block containing ``Result: False``.
"""

from __future__ import annotations

STATE_SEPARATOR = "----------"
FAILED_MARKER = "Result: False"


def failed_salt_states(output: str) -> list[str]:
    return [
        state for state in output.split(STATE_SEPARATOR)
        if FAILED_MARKER in state
    ]


def render_console(output: str, salt: bool = False) -> str:
    """Return the console text to print.

    Without *salt* the output is returned untouched.  With it, only failed
    Salt states are kept, each terminated by a newline.
    """
    if not salt:
        return output
    return "".join(f"{state}\n" for state in failed_salt_states(output))
