from __future__ import annotations

from pathlib import Path

import pytest

from phpgen.config import NamespaceMappings
from phpgen.core.path_resolver import PathResolver
from phpgen.elements import PhpFile
from phpgen.printing.printer import PhpPrinter
from phpgen.writer import CodeWriter


@pytest.fixture
def writer(tmp_path: Path) -> CodeWriter:
    resolver = PathResolver(NamespaceMappings(normal={"App\\": "app"}), fallback_root="src")
    return CodeWriter(resolver, PhpPrinter(), tmp_path)


def _class_file(namespace: str, name: str) -> PhpFile:
    php_file = PhpFile().set_strict_types()
    php_file.add_namespace(namespace).add_class(name)
    return php_file


def test_write_file_creates_directories(writer: CodeWriter, tmp_path: Path) -> None:
    path = writer.write_file("App\\Models\\User", _class_file("App\\Models", "User"))

    assert path == tmp_path / "app" / "Models" / "User.php"
    assert path.read_text(encoding="utf-8").startswith("<?php\n\ndeclare(strict_types=1);\n")


def test_dry_run_touches_nothing(writer: CodeWriter, tmp_path: Path) -> None:
    result = writer.write_file("App\\Models\\User", _class_file("App\\Models", "User"), dry_run=True)

    assert result is None
    assert list(tmp_path.iterdir()) == []


def test_empty_namespace_goes_to_fallback_root(writer: CodeWriter, tmp_path: Path) -> None:
    path = writer.write_file("Helpers", _class_file("", "Helpers"))

    assert path == tmp_path / "src" / "Helpers.php"


def test_file_without_elements_uses_default_name(writer: CodeWriter, tmp_path: Path) -> None:
    php_file = PhpFile()
    php_file.add_namespace("App")

    assert writer.write_file("App\\Nothing", php_file) == tmp_path / "app" / "Generated.php"


def test_preview_reports_path_and_content(writer: CodeWriter, tmp_path: Path) -> None:
    preview = writer.preview_file("App\\Http\\Kernel", _class_file("App\\Http", "Kernel"))

    assert preview.file_path == str(tmp_path / "app" / "Http" / "Kernel.php")
    assert preview.class_name == "Kernel"
    assert preview.namespace == "App\\Http"
    assert "class Kernel\n" in preview.content
    assert not (tmp_path / "app").exists()
