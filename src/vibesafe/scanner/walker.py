"""File enumeration — directory traversal with ignore rules.

Traversal is depth-first in directory-listing order, driven by an explicit
stack of listing iterators. Symlinked entries are skipped unless
``follow_symlinks`` is set; when followed, each physical directory is
entered at most once (keyed by ``(st_dev, st_ino)``).
"""

from __future__ import annotations

import logging
import os
import re
import stat as stat_mod
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Iterator, List, Optional, Sequence, Set, Tuple, Union

logger = logging.getLogger(__name__)

PathArg = Union[str, "os.PathLike[str]"]

DEFAULT_IGNORE_NAMES: Tuple[str, ...] = ("node_modules", ".git")
DEFAULT_IGNORE_PATTERNS: Tuple[str, ...] = (r"node_modules/", r"\.git/")


@dataclass(frozen=True)
class IgnoreRules:
    """Path predicates that prune traversal.

    ``names`` match directory basenames exactly. ``patterns`` are regexes
    searched against the entry path (POSIX separators) and apply to files
    and directories alike.
    """

    names: Tuple[str, ...] = DEFAULT_IGNORE_NAMES
    patterns: Tuple[str, ...] = DEFAULT_IGNORE_PATTERNS
    _compiled: Tuple[re.Pattern[str], ...] = field(
        default=(), init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        # re.error propagates: a bad pattern is a configuration bug
        object.__setattr__(self, "_compiled", tuple(re.compile(p) for p in self.patterns))

    @classmethod
    def with_patterns(cls, extra: Sequence[str]) -> "IgnoreRules":
        """Default rules extended with caller-supplied *extra* patterns."""
        return cls(patterns=DEFAULT_IGNORE_PATTERNS + tuple(extra))

    def matches_path(self, path: str) -> bool:
        posix = PurePath(path).as_posix()
        return any(p.search(posix) for p in self._compiled)

    def is_ignored(self, path: str, *, is_dir: bool) -> bool:
        if is_dir and os.path.basename(path) in self.names:
            return True
        return self.matches_path(path)


def _list_dir(path: str) -> Optional[List[os.DirEntry[str]]]:
    try:
        with os.scandir(path) as it:
            return list(it)
    except FileNotFoundError:
        logger.warning("Directory not found: %s", path)
    except PermissionError:
        logger.warning("Permission denied: %s", path)
    except OSError as exc:
        logger.error("Error reading directory %s: %s", path, exc)
    return None


def _dir_key(path: str) -> Optional[Tuple[int, int]]:
    try:
        st = os.stat(path)
    except OSError:
        return None
    return (st.st_dev, st.st_ino)


def _walk(
    root: str,
    ignore: IgnoreRules,
    follow_symlinks: bool,
    max_depth: int,
) -> Iterator[str]:
    visited: Set[Tuple[int, int]] = set()
    if follow_symlinks:
        key = _dir_key(root)
        if key is not None:
            visited.add(key)

    entries = _list_dir(root)
    if entries is None:
        return
    stack: List[Tuple[Iterator[os.DirEntry[str]], int]] = [(iter(entries), 0)]

    while stack:
        it, depth = stack[-1]
        entry = next(it, None)
        if entry is None:
            stack.pop()
            continue

        full_path = entry.path
        try:
            if entry.is_symlink() and not follow_symlinks:
                continue
            is_dir = entry.is_dir(follow_symlinks=follow_symlinks)
            is_file = not is_dir and entry.is_file(follow_symlinks=follow_symlinks)
        except OSError as exc:
            logger.warning("Cannot stat %s: %s", full_path, exc)
            continue

        if ignore.is_ignored(full_path, is_dir=is_dir):
            continue

        if is_dir:
            if 0 <= max_depth <= depth:
                continue
            if follow_symlinks:
                key = _dir_key(full_path)
                if key is None or key in visited:
                    logger.debug("Skipping already visited directory: %s", full_path)
                    continue
                visited.add(key)
            children = _list_dir(full_path)
            if children:
                stack.append((iter(children), depth + 1))
        elif is_file:
            yield full_path


def enumerate_files(
    base_path: PathArg,
    ignore: Optional[IgnoreRules] = None,
    *,
    follow_symlinks: bool = False,
    max_depth: int = -1,
) -> List[str]:
    """Return the files to scan under *base_path*.

    A regular file yields ``[base_path]``. A directory yields every regular
    file below it that survives *ignore*. A missing path, or one that is
    neither file nor directory, yields ``[]``.

    *max_depth* limits how many directory levels below *base_path* are
    entered; negative means unlimited.
    """
    path = os.fspath(base_path)
    ignore = ignore or IgnoreRules()

    try:
        st = os.stat(path)
    except FileNotFoundError:
        logger.warning("Path not found: %s", path)
        return []
    except OSError as exc:
        logger.error("Error accessing path %s: %s", path, exc)
        return []

    if stat_mod.S_ISREG(st.st_mode):
        return [path]
    if not stat_mod.S_ISDIR(st.st_mode):
        logger.warning("Path is not a file or directory: %s", path)
        return []

    return list(_walk(path, ignore, follow_symlinks, max_depth))
