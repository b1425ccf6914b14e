"""Drives a Project from blueprints to files on disk."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from ..config import PhpGenConfig
from ..logging import get_logger
from ..models import FilePreview
from ..printing.assembler import FileAssembler
from ..printing.printer import PhpPrinter
from ..writer import CodeWriter
from .path_resolver import PathResolver
from .project import Project


class Generator:
    """Coordinates assembling, printing and writing for one configuration."""

    def __init__(
        self,
        config: PhpGenConfig,
        *,
        assembler: FileAssembler | None = None,
        printer: PhpPrinter | None = None,
        resolver: PathResolver | None = None,
    ) -> None:
        self.config = config
        self.assembler = assembler or FileAssembler(config)
        self.printer = printer or PhpPrinter(config.templates_dir)
        self.resolver = resolver or PathResolver(config.mappings, config.fallback_root)
        self.writer = CodeWriter(self.resolver, self.printer, config.root)
        self.logger = get_logger("generator")

    def generate(self, project: Project, *, dry_run: bool = False) -> List[Path]:
        """Build the whole batch, then write it; nothing is written if any entry fails."""
        self.config.validate()
        self.logger.info("Building %d artifact(s)", len(project))
        artifacts = project.build(self.assembler)

        written: List[Path] = []
        for artifact in artifacts:
            path: Optional[Path] = self.writer.write_file(
                artifact.qualified_name, artifact.file, dry_run=dry_run
            )
            if path is not None:
                written.append(path)
        if dry_run:
            self.logger.info("Dry-run completed; %d file(s) not written", len(artifacts))
        return written

    def preview(self, project: Project) -> List[FilePreview]:
        self.config.validate()
        artifacts = project.build(self.assembler)
        return [self.writer.preview_file(a.qualified_name, a.file) for a in artifacts]


__all__ = ["Generator"]
