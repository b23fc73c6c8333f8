from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, List

from typing_extensions import TypedDict

from monoguard import __version__
from monoguard.constants import TOOL_NAME

if TYPE_CHECKING:
    from monoguard.check import BoundaryError

SARIF_FILE_NAME = f"{TOOL_NAME}-check-results.sarif"


class ArtifactLocation(TypedDict):
    uri: str


class Region(TypedDict):
    startLine: int
    startColumn: int
    charOffset: int
    charLength: int


class PhysicalLocation(TypedDict):
    artifactLocation: ArtifactLocation
    region: Region


class Location(TypedDict):
    physicalLocation: PhysicalLocation


class Message(TypedDict):
    text: str


class SarifError(TypedDict):
    level: str
    ruleId: str
    message: Message
    locations: list[Location]


class SarifRun(TypedDict):
    tool: dict[str, dict[str, str]]
    results: list[SarifError]


SarifResults = TypedDict(
    "SarifResults",
    {
        "version": str,
        "runs": List[SarifRun],
        # need this format for the $ to be accepted
        "$schema": str,
    },
)


def create_results() -> SarifResults:
    return {
        "version": "2.1.0",
        "$schema": "https://docs.oasis-open.org/sarif/sarif/v2.1.0/errata01/os/schemas/sarif-schema-2.1.0.json",
        "runs": [
            {
                "tool": {
                    "driver": {
                        "name": TOOL_NAME,
                        "version": __version__,
                    }
                },
                "results": [],
            }
        ],
    }


def build_sarif_errors(errors: list[BoundaryError]) -> list[SarifError]:
    sarif_errors: list[SarifError] = []
    for error in errors:
        sarif_errors.append(
            {
                "level": "error",
                "ruleId": error.error_info.kind.value,
                "message": {"text": error.error_info.message},
                "locations": [
                    {
                        "physicalLocation": {
                            "artifactLocation": {
                                "uri": error.file_path,
                            },
                            "region": {
                                "startLine": max(error.line_number, 1),
                                "startColumn": 1,
                                "charOffset": error.error_info.span.start,
                                "charLength": error.error_info.span.length,
                            },
                        }
                    }
                ],
            }
        )
    return sarif_errors


def write_sarif_file(
    sarif_results: SarifResults, output_dir: Path | None = None
) -> Path:
    output_path = (output_dir or Path.cwd()) / SARIF_FILE_NAME
    with open(output_path, "w") as f:
        f.write(json.dumps(sarif_results, indent=2))
    return output_path


__all__ = [
    "build_sarif_errors",
    "create_results",
    "write_sarif_file",
]
