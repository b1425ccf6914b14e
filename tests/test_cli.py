"""CLI parser and entrypoint behaviour tests."""

from __future__ import annotations

import pytest

from phpgen.cli import _build_parser, main
from phpgen.commands import discover_commands
from phpgen.config import PhpGenConfig
from tests._fixtures.workspace import Workspace


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser(discover_commands())
    args = parser.parse_args(["--verbose", "class:create", "App\\Mailer"])
    assert args.verbose is True
    assert args.subcommand == "class:create"
    assert vars(args)["fully-qualified-name"] == "App\\Mailer"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser(discover_commands())
    args = parser.parse_args(["class:create", "App\\Mailer", "--verbose"])
    assert args.verbose is True


def test_cli_maps_command_options() -> None:
    parser = _build_parser(discover_commands())
    args = parser.parse_args(["dto:create", "App\\UserDto", "-p", "id:int,name:string", "--dry-run"])
    assert args.option_properties == "id:int,name:string"
    assert args.dry_run is True

    args = parser.parse_args(["query:generate", "User", "FindUserById", "--no-query"])
    assert args.option_no_query is True
    assert vars(args)["queryName"] == "FindUserById"


def test_cli_option_defaults_come_from_command_metadata() -> None:
    parser = _build_parser(discover_commands())
    args = parser.parse_args(["dto:create", "App\\UserDto"])
    assert args.option_properties == "id:int"
    assert args.dry_run is False


def test_cli_only_exposes_enabled_commands() -> None:
    parser = _build_parser(discover_commands(["class:create"]))
    with pytest.raises(SystemExit):
        parser.parse_args(["dto:create", "App\\UserDto"])


def test_main_generates_files(
    laravel_config: PhpGenConfig, workspace: Workspace, capsys: pytest.CaptureFixture[str]
) -> None:
    main(["-c", str(workspace.root), "class:create", "App\\Services\\Mailer"])

    out = capsys.readouterr().out
    assert "Code generation completed successfully!" in out
    assert "Mailer.php" in out
    assert (workspace.root / "app" / "Services" / "Mailer.php").exists()


def test_main_dry_run_previews_without_writing(
    laravel_config: PhpGenConfig, workspace: Workspace, capsys: pytest.CaptureFixture[str]
) -> None:
    main(["-c", str(workspace.root), "dto:create", "App\\DTOs\\UserDto", "--dry-run", "-v"])

    out = capsys.readouterr().out
    assert "Preview mode - no files will be created" in out
    assert "Class: UserDto" in out
    assert "Namespace: App\\DTOs" in out
    assert "final readonly class UserDto" in out
    assert not (workspace.root / "app").exists()


def test_main_reports_configuration_errors(
    workspace: Workspace, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["-c", str(workspace.root), "class:create", "App\\Mailer"])

    assert excinfo.value.code == 1
    assert "Configuration error: At least one PSR-4 mapping" in capsys.readouterr().err


def test_main_rejects_unknown_configured_commands(
    workspace: Workspace, capsys: pytest.CaptureFixture[str]
) -> None:
    workspace.write({".phpgen.yml": 'commands: ["missing:create"]\n'})

    with pytest.raises(SystemExit) as excinfo:
        main(["-c", str(workspace.root), "list"])

    assert excinfo.value.code == 1
    assert "Unknown commands requested: missing:create" in capsys.readouterr().err


def test_main_lists_commands(workspace: Workspace, capsys: pytest.CaptureFixture[str]) -> None:
    main(["-c", str(workspace.root), "list"])

    out = capsys.readouterr().out
    assert "class:create" in out
    assert "Generate Laravel CQRS Query interface, implementation, and test" in out


def test_main_appends_debug_logs_to_log_file(laravel_config: PhpGenConfig, workspace: Workspace) -> None:
    log_file = workspace.root / "phpgen.log"

    main(["-c", str(workspace.root), "--log-file", str(log_file), "class:create", "App\\Services\\Mailer"])

    assert "phpgen.writer" in log_file.read_text(encoding="utf-8")
