"""Guess whether Java source reads standard input.

Advisory only: the editor uses it to open the stdin panel by default. It never
decides whether stdin is sent; stdin is always forwarded to the provider.
"""

STDIN_TOKENS: tuple[str, ...] = (
    "Scanner",
    "System.in",
    "BufferedReader",
    "InputStreamReader",
)


def uses_stdin(code: str) -> bool:
    """Return True if the source mentions any input-reading token."""
    return any(token in code for token in STDIN_TOKENS)
