"""
File identity and change signature used as the cache key and freshness check.
"""
import os


def identity_of(path: str) -> str:
    """
    Canonical absolute path of `path` (symlinks and '..' resolved).
    Raises OSError (FileNotFoundError) if the path does not exist.
    """
    resolved = os.path.realpath(path)
    if not os.path.exists(resolved):
        raise FileNotFoundError(f"No such file: {path}")
    return resolved


def signature_of(path: str) -> str:
    """
    '<size>-<mtime seconds>'. Any change to either invalidates the cache entry.
    Raises OSError if the file cannot be stat'ed.
    """
    st = os.stat(path)
    return f"{st.st_size}-{int(st.st_mtime)}"
