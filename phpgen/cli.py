"""CLI entrypoints for phpgen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Sequence

from .commands import Command, discover_commands
from .config import ConfigError, PhpGenConfig, load_config
from .core.generator import Generator
from .logging import configure_logging
from .models import FilePreview

PREVIEW_LINES = 20


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity and show generated content in previews.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Path to .phpgen.yml or its directory (defaults to current directory).",
    )


def _option_dest(name: str) -> str:
    return "option_" + name.replace("-", "_")


def _build_parser(commands: Sequence[Command]) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="phpgen",
        description="Generate PHP classes, interfaces, traits and enums from blueprints.",
    )
    _add_verbose_option(parser)
    _add_config_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also append DEBUG-level logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="subcommand", required=True)

    for command in commands:
        sub = subparsers.add_parser(command.name, help=command.description)
        _add_verbose_option(sub, suppress_default=True)
        for argument in command.arguments:
            sub.add_argument(
                argument.name,
                nargs=None if argument.required else "?",
                help=argument.description,
            )
        for option in command.options:
            flags = [f"--{option.name}"]
            if option.shortcut:
                flags.append(f"-{option.shortcut}")
            if option.accepts_value:
                sub.add_argument(
                    *flags, dest=_option_dest(option.name), default=option.default, help=option.description
                )
            else:
                sub.add_argument(
                    *flags, dest=_option_dest(option.name), action="store_true", help=option.description
                )
        sub.add_argument(
            "--dry-run",
            action="store_true",
            help="Preview the files that would be generated without creating them.",
        )
        sub.set_defaults(handler=command)

    list_parser = subparsers.add_parser("list", help="List the available generator commands.")
    _add_verbose_option(list_parser, suppress_default=True)

    serve_parser = subparsers.add_parser("serve", help="Expose the commands over HTTP.")
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for phpgen commands."""
    argv = list(sys.argv[1:] if argv is None else argv)

    # The command set depends on the configuration, so read --config first.
    pre_parser = argparse.ArgumentParser(add_help=False)
    _add_config_option(pre_parser)
    known, _ = pre_parser.parse_known_args(argv)
    config_path = Path(known.config) if known.config else Path.cwd()

    try:
        config = load_config(config_path)
        commands = discover_commands(config.commands)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        raise SystemExit(1)

    parser = _build_parser(commands)
    args = parser.parse_args(argv)
    verbose = bool(args.verbose)
    configure_logging(verbose=verbose, log_file=args.log_file)

    if args.subcommand == "list":
        for command in commands:
            print(f"{command.name:<20} {command.description}")
        return
    if args.subcommand == "serve":
        from .service.app import run_service

        run_service(host=args.host, port=args.port, config_path=config_path)
        return

    command: Command = args.handler
    try:
        _run_command(command, _collect_params(command, args), config, dry_run=args.dry_run, verbose=verbose)
    except (ConfigError, ValueError) as exc:
        parser.exit(1, f"Configuration error: {exc}\n")
    except Exception as exc:
        parser.exit(1, f"Generation failed: {exc}\nRun with --verbose for more details.\n")


def _collect_params(command: Command, args: argparse.Namespace) -> Dict[str, Any]:
    values = vars(args)
    params: Dict[str, Any] = {}
    for argument in command.arguments:
        params[argument.name] = values.get(argument.name)
    for option in command.options:
        params[option.name] = values.get(_option_dest(option.name))
    return params


def _run_command(
    command: Command,
    params: Dict[str, Any],
    config: PhpGenConfig,
    *,
    dry_run: bool,
    verbose: bool,
) -> None:
    project = command.handle(params)
    generator = Generator(config)
    if dry_run:
        print("Preview mode - no files will be created")
        _print_previews(generator.preview(project), verbose=verbose)
        return
    print("Generating files...")
    for path in generator.generate(project):
        print(f"Generated {_relativize(path)}")
    print("Code generation completed successfully!")


def _print_previews(previews: List[FilePreview], *, verbose: bool) -> None:
    if not previews:
        print("No files would be generated")
        return
    print("Files that would be generated:")
    for preview in previews:
        print()
        print(preview.class_name)
        print(f"File: {_relativize(Path(preview.file_path))}")
        print(f"Class: {preview.class_name}")
        print(f"Namespace: {preview.namespace}")
        if verbose:
            print("Content preview:")
            print(_format_preview(preview.content))
    if not verbose:
        print()
        print("Use -v to see content previews")


def _format_preview(content: str) -> str:
    lines = content.splitlines()
    shown = "\n".join(lines[:PREVIEW_LINES])
    if len(lines) > PREVIEW_LINES:
        shown += f"\n... (truncated, {len(lines) - PREVIEW_LINES} more lines)"
    return shown


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
