from __future__ import annotations

import os
import sys
from enum import Enum
from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from monoguard.check import BoundaryError


def is_interactive() -> bool:
    return sys.stdout.isatty() and sys.stderr.isatty()


class BCOLORS:
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"


def colorize(text: str, color_start: str, color_end: str = BCOLORS.ENDC) -> str:
    if is_interactive():
        return f"{color_start}{text}{color_end}"
    return text


class TerminalEnvironment(Enum):
    UNKNOWN = 1
    JETBRAINS = 2
    VSCODE = 3


@lru_cache(maxsize=None)
def detect_environment() -> TerminalEnvironment:
    if "jetbrains" in os.environ.get("TERMINAL_EMULATOR", "").lower():
        return TerminalEnvironment.JETBRAINS
    elif "vscode" in os.environ.get("TERM_PROGRAM", "").lower():
        return TerminalEnvironment.VSCODE
    return TerminalEnvironment.UNKNOWN


def render_path_simple(file_path: str, line: int | None = None) -> str:
    if line:
        return f"{file_path}[L{line}]"
    return file_path


def create_clickable_link(
    file_path: Path, display_path: str, line: int | None = None
) -> str:
    if not is_interactive():
        return render_path_simple(display_path, line)

    terminal_env = detect_environment()
    abs_path = file_path.resolve()

    if terminal_env == TerminalEnvironment.JETBRAINS:
        link = f"file://{abs_path}:{line}" if line else f"file://{abs_path}"
    elif terminal_env == TerminalEnvironment.VSCODE:
        link = f"vscode://file/{abs_path}:{line}" if line else f"vscode://file/{abs_path}"
    else:
        link = f"file://{abs_path}"

    # ANSI escape codes for clickable link
    return f"\033]8;;{link}\033\\{render_path_simple(display_path, line)}\033]8;;\033\\"


def build_error_message(error: BoundaryError, project_root: Path) -> str:
    location = create_clickable_link(
        project_root / error.file_path, error.file_path, error.line_number
    )
    return (
        f"{location}: {colorize(error.error_info.message, BCOLORS.FAIL)} "
        f"{colorize(f'[{error.import_mod_path}]', BCOLORS.WARNING)}"
    )
