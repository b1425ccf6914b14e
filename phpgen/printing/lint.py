"""Whitespace normalisation for generated PHP source."""

from __future__ import annotations

from typing import List


class PhpSourceLinter:
    """Normalises newlines, trailing spaces and blank-line runs."""

    def lint(self, source: str) -> str:
        normalized = source.replace("\r\n", "\n").replace("\r", "\n")
        cleaned: List[str] = []
        previous_blank = False

        for line in normalized.split("\n"):
            stripped = line.rstrip()
            if not stripped:
                # no blank line directly after an opening brace
                if previous_blank or (cleaned and cleaned[-1].endswith("{")):
                    continue
                previous_blank = True
                cleaned.append("")
                continue
            if stripped.lstrip() == "}" and previous_blank:
                cleaned.pop()
            cleaned.append(stripped)
            previous_blank = False

        while cleaned and cleaned[-1] == "":
            cleaned.pop()

        return "\n".join(cleaned) + "\n"


__all__ = ["PhpSourceLinter"]
