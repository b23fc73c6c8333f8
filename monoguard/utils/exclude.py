from __future__ import annotations

import fnmatch
from pathlib import PurePath
from typing import Generator


def _with_optional_trailing_slashes(patterns: list[str]) -> Generator[str, None, None]:
    for pattern in patterns:
        yield pattern
        if pattern.endswith("/"):
            yield pattern[:-1]


# Assumes 'relative_path' is a path relative to the workspace root
def is_path_excluded(exclude_paths: list[str], relative_path: PurePath) -> bool:
    if not exclude_paths:
        return False

    path_str = relative_path.as_posix()
    return any(
        fnmatch.fnmatch(path_str, exclude_path)
        or fnmatch.fnmatch(relative_path.name, exclude_path)
        for exclude_path in _with_optional_trailing_slashes(exclude_paths)
    )
