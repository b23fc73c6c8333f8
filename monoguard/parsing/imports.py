from __future__ import annotations

import bisect
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from monoguard import filesystem as fs
from monoguard.constants import IGNORE_DIRECTIVE
from monoguard.core.imports import ImportInfo, Span

if TYPE_CHECKING:
    from pathlib import Path


IMPORT_DECLARATION_REGEX = re.compile(
    r"""(?<![\w$.])(?:import|export)\s+(?:type\s+)?"""
    r"""(?:[\w$*{}\s,]+?\s+from\s+)?(['"])([^'"\n]+)\1[ \t]*;?"""
)
DYNAMIC_IMPORT_REGEX = re.compile(r"""(?<![\w$.])import\s*\(\s*(['"])([^'"\n]+)\1\s*\)""")
LOAD_CHILDREN_REGEX = re.compile(r"""\bloadChildren\s*:\s*(['"])([^'"\n]+)\1""")
IGNORE_DIRECTIVE_REGEX = re.compile(rf"//\s*{IGNORE_DIRECTIVE}\b")


@dataclass(frozen=True)
class MaskedSource:
    """
    Source text with comments blanked out, plus the offsets of every
    string and template literal as half-open (start, end) ranges.
    """

    text: str
    literal_ranges: tuple[tuple[int, int], ...] = ()

    def in_literal(self, offset: int) -> bool:
        index = bisect.bisect_right(self.literal_ranges, (offset, float("inf"))) - 1
        return index >= 0 and offset < self.literal_ranges[index][1]


def mask_source(content: str) -> MaskedSource:
    """
    Replace comments with spaces, keeping offsets and newlines intact.

    String and template literals are skipped so that '//' inside a URL
    is not mistaken for a comment, and their extents are recorded.
    Template literals are treated as opaque, '${...}' included.
    Regex literals are not recognized.
    """
    chars = list(content)
    literal_ranges: list[tuple[int, int]] = []
    i = 0
    length = len(content)
    quote: str | None = None
    literal_start = 0
    while i < length:
        char = content[i]
        if quote is not None:
            if char == "\\":
                i += 2
                continue
            if char == quote or (char == "\n" and quote != "`"):
                quote = None
                literal_ranges.append((literal_start, i + 1))
            i += 1
            continue
        if char in "'\"`":
            quote = char
            literal_start = i
            i += 1
            continue
        if content.startswith("//", i):
            end = content.find("\n", i)
            end = length if end == -1 else end
            chars[i:end] = " " * (end - i)
            i = end
            continue
        if content.startswith("/*", i):
            end = content.find("*/", i + 2)
            end = length if end == -1 else end + 2
            for j in range(i, end):
                if chars[j] != "\n":
                    chars[j] = " "
            i = end
            continue
        i += 1
    if quote is not None:
        literal_ranges.append((literal_start, length))
    return MaskedSource(text="".join(chars), literal_ranges=tuple(literal_ranges))


def line_number_at(content: str, offset: int) -> int:
    return content.count("\n", 0, offset) + 1


def get_ignored_lines(content: str) -> set[int]:
    """
    A directive on a line of its own covers the next line,
    a trailing directive covers the line it is on.
    """
    ignored: set[int] = set()
    # Lines are split on '\n' only, matching line_number_at
    for lineno, line in enumerate(content.split("\n"), start=1):
        if not IGNORE_DIRECTIVE_REGEX.search(line):
            continue
        ignored.add(lineno + 1 if line.lstrip().startswith("//") else lineno)
    return ignored


def parse_imports(
    content: str, file_path: str, respect_ignore_directives: bool = True
) -> list[ImportInfo]:
    """
    Extract static import and re-export declarations from TypeScript or JavaScript source.
    """
    source = mask_source(content)
    masked = source.text
    ignored_lines = get_ignored_lines(content) if respect_ignore_directives else set()
    imports: list[ImportInfo] = []
    for match in IMPORT_DECLARATION_REGEX.finditer(masked):
        if source.in_literal(match.start()):
            continue
        line_number = line_number_at(masked, match.start())
        if line_number in ignored_lines:
            continue
        imports.append(
            ImportInfo(
                module_path=match.group(2),
                containing_file=file_path,
                span=Span(start=match.start(), length=match.end() - match.start()),
                line_number=line_number,
            )
        )
    return imports


@dataclass(frozen=True)
class LazyReference:
    module_path: str
    line_number: int


def parse_lazy_references(content: str) -> list[LazyReference]:
    """
    Extract lazily loaded module specifiers: 'loadChildren' route strings
    (the part before '#') and dynamic import() calls.
    """
    source = mask_source(content)
    masked = source.text
    references: list[LazyReference] = []
    for regex in (LOAD_CHILDREN_REGEX, DYNAMIC_IMPORT_REGEX):
        for match in regex.finditer(masked):
            if source.in_literal(match.start()):
                continue
            module_path = match.group(2).split("#", 1)[0]
            if module_path:
                references.append(
                    LazyReference(
                        module_path=module_path,
                        line_number=line_number_at(masked, match.start()),
                    )
                )
    return references


def get_file_imports(workspace_root: Path, file_path: str) -> list[ImportInfo]:
    content = fs.read_file(workspace_root / file_path)
    return parse_imports(content, file_path)
