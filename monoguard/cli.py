from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from monoguard import __version__, icons
from monoguard import filesystem as fs
from monoguard.check import BoundaryContext, BoundaryError, check
from monoguard.console import console_err
from monoguard.constants import CONFIG_FILE_NAME, TOOL_NAME
from monoguard.errors import MonoguardError
from monoguard.logging import CallInfo, init_logging, logger
from monoguard.parsing import parse_workspace_config
from monoguard.sarif import build_sarif_errors, create_results, write_sarif_file
from monoguard.show import (
    generate_dependency_graph_dot_file,
    generate_dependency_graph_mermaid,
)
from monoguard.utils.display import build_error_message

if TYPE_CHECKING:
    from monoguard.core import WorkspaceConfig


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"
    SARIF = "sarif"

    @classmethod
    def choices(cls) -> list[str]:
        return [item.value for item in cls]


def print_no_config_found(output_format: str = OutputFormat.TEXT.value) -> None:
    if output_format == OutputFormat.JSON.value:
        json.dump({"error": "No config file found"}, sys.stdout)
    else:
        console_err.print(
            f"Configuration file '{CONFIG_FILE_NAME}.toml' not found "
            f"in {Path.cwd()} or any parent directory.",
            style="yellow",
        )


def print_errors(errors: list[BoundaryError], workspace_root: Path) -> None:
    if not errors:
        return
    sorted_errors = sorted(errors, key=lambda e: (e.file_path, e.line_number))
    for error in sorted_errors:
        print(
            f"{icons.FAIL} {build_error_message(error, workspace_root)}",
            file=sys.stderr,
        )


def serialize_errors(errors: list[BoundaryError]) -> list[dict[str, Any]]:
    return [
        {
            "file": error.file_path,
            "line": error.line_number,
            "import": error.import_mod_path,
            "kind": error.error_info.kind.value,
            "message": error.error_info.message,
            "span": asdict(error.error_info.span),
        }
        for error in errors
    ]


def add_base_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-e",
        "--exclude",
        required=False,
        type=str,
        metavar="file_or_path,...",
        help="Comma separated glob list to exclude. node_modules/, dist/, etc.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=TOOL_NAME,
        add_help=True,
    )
    parser.add_argument(
        "--version", action="version", version=f"{TOOL_NAME} {__version__}"
    )

    subparsers = parser.add_subparsers(title="commands", dest="command")

    ## monoguard check
    check_parser = subparsers.add_parser(
        "check",
        prog=f"{TOOL_NAME} check",
        help="Check every import in the workspace against the module boundaries",
        description="Check every import in the workspace against the module boundaries",
    )
    check_parser.add_argument(
        "-o",
        "--output",
        choices=OutputFormat.choices(),
        default=OutputFormat.TEXT.value,
        help="Output format (default: text)",
    )
    add_base_arguments(check_parser)

    ## monoguard show
    show_parser = subparsers.add_parser(
        "show",
        prog=f"{TOOL_NAME} show",
        help="Visualize the dependency graph between projects",
        description="Visualize the dependency graph between projects",
    )
    show_parser.add_argument(
        "--mermaid",
        action="store_true",
        help="Generate a Mermaid graph instead of a DOT file",
    )
    show_parser.add_argument(
        "-o",
        "--out",
        type=Path,
        nargs="?",
        default=None,
        help="Specify an output path for the generated graph file",
    )
    add_base_arguments(show_parser)

    return parser


def parse_arguments(
    args: list[str],
) -> tuple[argparse.Namespace, argparse.ArgumentParser]:
    parser = build_parser()
    parsed_args = parser.parse_args(args)
    return parsed_args, parser


def monoguard_check(
    workspace_config: WorkspaceConfig,
    workspace_root: Path,
    output_format: str = OutputFormat.TEXT.value,
):
    logger.info(
        "monoguard check called",
        extra={
            "data": CallInfo(
                function="monoguard_check",
                parameters={"output_format": output_format},
            ),
        },
    )
    try:
        errors = check(workspace_root=workspace_root, workspace_config=workspace_config)
    except MonoguardError as e:
        if output_format == OutputFormat.JSON.value:
            json.dump({"error": str(e)}, sys.stdout)
        else:
            console_err.print(f"{icons.FAIL} {e}", style="red", markup=False)
        sys.exit(1)

    exit_code = 1 if errors else 0
    if output_format == OutputFormat.JSON.value:
        json.dump(serialize_errors(errors), sys.stdout, indent=2)
        sys.exit(exit_code)

    if output_format == OutputFormat.SARIF.value:
        sarif_results = create_results()
        sarif_results["runs"][0]["results"].extend(build_sarif_errors(errors))
        output_path = write_sarif_file(sarif_results)
        console_err.print(f"Wrote SARIF results to '{output_path}'", style="cyan")
        sys.exit(exit_code)

    print_errors(errors, workspace_root)
    if exit_code == 0:
        console_err.print(
            f"{icons.SUCCESS} All module boundaries validated!", style="green"
        )
    sys.exit(exit_code)


def monoguard_show(
    workspace_config: WorkspaceConfig,
    workspace_root: Path,
    output_filepath: Path | None = None,
    is_mermaid: bool = False,
):
    logger.info(
        "monoguard show called",
        extra={
            "data": CallInfo(
                function="monoguard_show",
                parameters={"is_mermaid": is_mermaid},
            ),
        },
    )
    try:
        context = BoundaryContext.from_workspace(workspace_root, workspace_config)
        if is_mermaid:
            output_filepath = output_filepath or Path(f"{TOOL_NAME}_module_graph.mmd")
            generate_dependency_graph_mermaid(
                context.projects, context.dependencies, output_filepath
            )
        else:
            output_filepath = output_filepath or Path(f"{TOOL_NAME}_module_graph.dot")
            generate_dependency_graph_dot_file(
                context.projects, context.dependencies, output_filepath
            )
    except MonoguardError as e:
        console_err.print(f"{icons.FAIL} {e}", style="red", markup=False)
        sys.exit(1)

    console_err.print(
        f"Generated a {'Mermaid' if is_mermaid else 'DOT'} file containing your "
        f"dependency graph at '{output_filepath}'",
        style="green",
    )
    sys.exit(0)


def try_parse_workspace_config(workspace_root: Path) -> WorkspaceConfig | None:
    try:
        return parse_workspace_config(workspace_root)
    except MonoguardError as e:
        console_err.print(
            f"Failed to parse workspace config: {e}", style="red", markup=False
        )
        sys.exit(1)


def main(argv: list[str] = sys.argv[1:]) -> None:
    args, parser = parse_arguments(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(1)

    workspace_root = fs.find_project_config_root() or Path.cwd()
    workspace_config = try_parse_workspace_config(workspace_root)
    if workspace_config is None:
        print_no_config_found(getattr(args, "output", OutputFormat.TEXT.value))
        sys.exit(1)

    if not workspace_config.disable_logging:
        init_logging(workspace_root)

    # Exclude paths on the CLI extend those from the workspace config
    if getattr(args, "exclude", None):
        workspace_config.exclude = list(
            set(workspace_config.exclude) | set(args.exclude.split(","))
        )

    if args.command == "check":
        monoguard_check(
            workspace_config=workspace_config,
            workspace_root=workspace_root,
            output_format=args.output,
        )
    elif args.command == "show":
        monoguard_show(
            workspace_config=workspace_config,
            workspace_root=workspace_root,
            output_filepath=args.out,
            is_mermaid=args.mermaid,
        )
    else:
        print("Unrecognized command")
        parser.print_help()
        sys.exit(1)


__all__ = ["main"]
