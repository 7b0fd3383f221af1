"""디렉터리 순회 도우미./Directory walking helpers."""

from __future__ import annotations

import fnmatch
import logging
import os
from pathlib import Path
from typing import Iterator

from .exceptions import TraversalError
from .models import ScanOptions

logger = logging.getLogger(__name__)


class DirectoryWalker:
    """옵션에 맞게 파일을 순회합니다./Walk files according to options.

    Any failure to open a root or list a directory raises ``TraversalError``.
    Symbolic links are skipped unless ``follow_symlinks`` is set. Each
    directory is listed once per walk, keyed by device and inode, so link
    cycles and overlapping roots never repeat a file.
    """

    def __init__(self, options: ScanOptions) -> None:
        self._options = options
        self._include = tuple(options.include)
        self._exclude = tuple(options.exclude)

    def iter_files(self) -> Iterator[Path]:
        """파일 경로를 생성합니다./Yield file paths."""

        visited: set[tuple[int, int]] = set()
        for root in self._options.roots:
            yield from self._walk_root(Path(root), visited)

    def _walk_root(self, root: Path, visited: set[tuple[int, int]]) -> Iterator[Path]:
        if not root.exists():
            raise TraversalError(f"missing root: {root}")
        if not root.is_dir():
            raise TraversalError(f"root is not a directory: {root}")
        stack: list[tuple[Path, int]] = [(root, 0)]
        follow = self._options.follow_symlinks
        max_depth = self._options.max_depth
        while stack:
            current, depth = stack.pop()
            try:
                info = os.stat(current)
            except OSError as exc:
                raise TraversalError(f"cannot stat {current}: {exc}") from exc
            key = (info.st_dev, info.st_ino)
            if key in visited:
                logger.debug("skipping already walked directory %s", current)
                continue
            visited.add(key)
            try:
                with os.scandir(current) as iterator:
                    entries = sorted(iterator, key=lambda item: item.name)
            except OSError as exc:
                raise TraversalError(f"cannot list {current}: {exc}") from exc
            subdirs: list[tuple[Path, int]] = []
            for entry in entries:
                entry_path = Path(entry.path)
                rel_posix = entry_path.relative_to(root).as_posix()
                try:
                    if not follow and entry.is_symlink():
                        continue
                    is_dir = entry.is_dir(follow_symlinks=follow)
                    is_file = not is_dir and entry.is_file(follow_symlinks=follow)
                except OSError as exc:
                    raise TraversalError(f"cannot stat {entry_path}: {exc}") from exc
                if self._is_excluded(rel_posix, is_dir):
                    continue
                if is_dir:
                    if max_depth is not None and depth + 1 > max_depth:
                        continue
                    subdirs.append((entry_path, depth + 1))
                    continue
                if not is_file:
                    continue
                if self._include and not self._match_include(rel_posix):
                    continue
                yield entry_path
            stack.extend(reversed(subdirs))

    def _match_include(self, rel: str) -> bool:
        return any(fnmatch.fnmatchcase(rel, pattern) for pattern in self._include)

    def _is_excluded(self, rel: str, is_dir: bool) -> bool:
        if not self._exclude:
            return False
        if any(fnmatch.fnmatchcase(rel, pattern) for pattern in self._exclude):
            return True
        if is_dir:
            rel_dir = f"{rel}/"
            return any(fnmatch.fnmatchcase(rel_dir, pattern) for pattern in self._exclude)
        return False
