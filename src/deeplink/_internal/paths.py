"""Canonical path helpers shared by the parser and the route registry."""


def normalize_path(path: str) -> str:
    """Return the canonical form of *path*.

    Canonical paths start with ``/`` and carry no trailing slash, except
    for the root path itself::

        "settings/blocked"  -> "/settings/blocked"
        " /u/mike/ "        -> "/u/mike"
        ""                  -> "/"
    """
    p = path.strip()
    if not p.startswith("/"):
        p = "/" + p
    if len(p) > 1:
        p = p.rstrip("/") or "/"
    return p


def split_path(path: str) -> list[str]:
    """Split a path into its non-empty segments."""
    return [part for part in path.split("/") if part]
