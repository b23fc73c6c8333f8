from __future__ import annotations

from os import getenv
from pathlib import Path

from monoguard.constants import CACHE_DIR_NAME, TOOL_NAME


def get_cache_path(project_root: Path) -> Path:
    env_value = getenv("MONOGUARD_CACHE_DIR")

    if env_value is None:
        return project_root / CACHE_DIR_NAME

    env_path = Path(env_value).expanduser()
    if not env_path.is_absolute():
        return project_root / env_path

    return env_path


def resolve_cache_path(project_root: Path) -> Path:
    def _create(path: Path, is_file: bool = False, file_content: str = "") -> None:
        if not path.exists():
            if is_file:
                path.write_text(file_content.strip())
            else:
                path.mkdir(parents=True)

    # Create cache dir
    cache_dir = get_cache_path(project_root)
    _create(cache_dir)
    # Create .gitignore
    gitignore_content = f"""
# This folder is for {TOOL_NAME}. Do not edit.

# gitignore all content, including this .gitignore
*
    """
    gitignore_path = cache_dir / ".gitignore"
    _create(gitignore_path, is_file=True, file_content=gitignore_content)
    return cache_dir
