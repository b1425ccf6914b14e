"""Writes printed PHP files to the directories their namespaces map to."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .core.path_resolver import PathResolver
from .elements import PhpFile
from .logging import get_logger
from .models import FilePreview
from .printing.printer import PhpPrinter

DEFAULT_CLASS_NAME = "Generated"


class CodeWriter:
    """Persists or previews one PhpFile per qualified name."""

    def __init__(self, resolver: PathResolver, printer: PhpPrinter, root: Path) -> None:
        self.resolver = resolver
        self.printer = printer
        self.root = Path(root)
        self.logger = get_logger("writer")

    def write_file(self, qualified_name: str, php_file: PhpFile, *, dry_run: bool = False) -> Optional[Path]:
        """Write the file and return its path; dry runs touch nothing and return None."""
        target, content, _ = self._render(qualified_name, php_file)
        if dry_run:
            self.logger.info("Dry-run: would write %s", target)
            return None
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        self.logger.info("Generated %s", target)
        return target

    def preview_file(self, qualified_name: str, php_file: PhpFile) -> FilePreview:
        target, content, class_name = self._render(qualified_name, php_file)
        namespace, _, _ = qualified_name.strip("\\").rpartition("\\")
        return FilePreview(
            file_path=str(target),
            content=content,
            class_name=class_name,
            namespace=namespace,
        )

    def target_path(self, qualified_name: str, php_file: PhpFile) -> Path:
        return self._render(qualified_name, php_file)[0]

    def _render(self, qualified_name: str, php_file: PhpFile) -> tuple[Path, str, str]:
        namespace, _, _ = qualified_name.strip("\\").rpartition("\\")
        element = php_file.primary_element(namespace)
        class_name = element.name if element is not None else DEFAULT_CLASS_NAME
        directory = self.resolver.resolve_namespace(namespace)
        target = self.root / directory / f"{class_name}.php"
        return target, self.printer.print_file(php_file), class_name


__all__ = ["CodeWriter", "DEFAULT_CLASS_NAME"]
