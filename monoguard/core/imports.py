from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Span:
    start: int
    length: int


@dataclass(frozen=True)
class ImportInfo:
    """
    A single import declaration found in a source file.

    'containing_file' is workspace-relative with forward slashes.
    """

    module_path: str
    containing_file: str
    span: Span = Span(0, 0)
    line_number: int = 0
