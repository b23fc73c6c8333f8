from __future__ import annotations

import os
import posixpath
import re
from pathlib import Path, PurePath
from typing import Generator, Optional

from monoguard.utils.exclude import is_path_excluded

EXTENSION_REGEX = re.compile(r"\.[^/.]+$")


def remove_ext(file_path: str) -> str:
    return EXTENSION_REGEX.sub("", file_path)


def is_relative(import_path: str) -> bool:
    return import_path.startswith(".")


def to_posix(path: str | PurePath) -> str:
    return str(path).replace(os.sep, "/")


def resolve_relative_import(source_file: str, import_path: str) -> str:
    """
    Join a relative import specifier onto the directory of 'source_file'.

    Both inputs and the result are workspace-relative with forward slashes.
    A result starting with '..' points outside the workspace.
    """
    source_dir = posixpath.dirname(to_posix(source_file))
    return posixpath.normpath(posixpath.join(source_dir, to_posix(import_path)))


def read_file(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def walk(
    root: Path,
    workspace_root: Optional[Path] = None,
    exclude_paths: Optional[list[str]] = None,
) -> Generator[tuple[Path, list[Path]], None, None]:
    root = root.resolve()
    workspace_root = workspace_root.resolve() if workspace_root else None
    for dirpath, dirnames, filenames in os.walk(root):
        rel_dirpath = Path(dirpath).relative_to(root)

        if rel_dirpath.name.startswith("."):
            # This prevents recursing into child directories of hidden paths
            del dirnames[:]
            continue

        if exclude_paths:
            workspace_dirpath = (
                Path(dirpath).relative_to(workspace_root)
                if workspace_root
                else rel_dirpath
            )
            if is_path_excluded(exclude_paths, workspace_dirpath):
                del dirnames[:]
                continue

        def filter_filename(filename: str) -> bool:
            return not filename.startswith(".")

        yield rel_dirpath, list(map(Path, filter(filter_filename, filenames)))


def walk_source_files(
    root: Path,
    extensions: list[str],
    workspace_root: Optional[Path] = None,
    exclude_paths: Optional[list[str]] = None,
) -> Generator[Path, None, None]:
    """
    Yield paths (relative to 'root') of files ending in one of 'extensions'.

    Exclude patterns are matched against paths relative to 'workspace_root'.
    """
    base = workspace_root.resolve() if workspace_root else root.resolve()
    for dirpath, filepaths in walk(
        root, workspace_root=workspace_root, exclude_paths=exclude_paths
    ):
        for filepath in filepaths:
            if not any(filepath.name.endswith(ext) for ext in extensions):
                continue
            rel_filepath = dirpath / filepath
            if exclude_paths and is_path_excluded(
                exclude_paths, (root.resolve() / rel_filepath).relative_to(base)
            ):
                continue
            yield rel_filepath
