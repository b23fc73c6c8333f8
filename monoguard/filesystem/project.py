from __future__ import annotations

from pathlib import Path

from monoguard.constants import CONFIG_FILE_NAME


def build_project_config_path(root: Path, file_name: str = CONFIG_FILE_NAME) -> Path:
    return root / f"{file_name}.toml"


def get_project_config_path(
    root: Path, *, file_name: str = CONFIG_FILE_NAME
) -> Path | None:
    file_path = build_project_config_path(root, file_name)
    if file_path.exists():
        return file_path
    return None


def get_yaml_project_config_path(
    root: Path, *, file_name: str = CONFIG_FILE_NAME
) -> Path | None:
    for suffix in (".yml", ".yaml"):
        file_path = root / f"{file_name}{suffix}"
        if file_path.exists():
            return file_path
    return None


def has_project_config(root: Path) -> bool:
    return (
        get_project_config_path(root) is not None
        or get_yaml_project_config_path(root) is not None
    )


def find_project_config_root(start: Path | None = None) -> Path | None:
    cwd = (start or Path.cwd()).resolve()

    if has_project_config(cwd):
        return cwd

    # Iterate upwards, looking for project config
    for parent in cwd.parents:
        if has_project_config(parent):
            return parent

    return None
