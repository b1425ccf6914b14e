"""Maps PHP namespaces to output directories using PSR-4 prefix tables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..config import DEFAULT_FALLBACK_ROOT, NamespaceMappings
from ..logging import get_logger

SEPARATOR = "\\"


@dataclass(frozen=True)
class PrefixMatch:
    """Most specific prefix found for a namespace."""

    prefix: str
    directory: str


class PathResolver:
    """Longest-prefix-match resolver over the effective namespace mappings.

    Resolution never fails: namespaces without a mapping land under the
    fallback root. Callers that need mapping-backed paths validate the
    mappings up front (`NamespaceMappings.validate`).
    """

    def __init__(
        self,
        mappings: NamespaceMappings,
        fallback_root: str = DEFAULT_FALLBACK_ROOT,
    ) -> None:
        self.mappings = mappings
        self.fallback_root = fallback_root.rstrip("/")
        self.logger = get_logger("path_resolver")

    def resolve(self, name: str) -> str:
        """Resolve a fully-qualified class name or a bare namespace to a directory."""
        namespace = name.strip(SEPARATOR)
        head, sep, last = namespace.rpartition(SEPARATOR)
        # A capitalised final segment is taken to be the class name.
        if sep and last[:1].isupper():
            namespace = head
        return self.resolve_namespace(namespace)

    def resolve_namespace(self, namespace: str) -> str:
        """Resolve a namespace (never a class name) to a directory."""
        namespace = namespace.strip(SEPARATOR)
        match = self.find_best_match(namespace)
        if match is None:
            path = self.fallback_root
            if namespace:
                path = f"{path}/{namespace.replace(SEPARATOR, '/')}"
            self.logger.debug("No PSR-4 mapping for '%s'; using %s", namespace, path)
            return path

        remainder = (namespace + SEPARATOR)[len(match.prefix):].strip(SEPARATOR)
        if not remainder:
            return match.directory
        return f"{match.directory}/{remainder.replace(SEPARATOR, '/')}"

    def find_best_match(self, namespace: str) -> Optional[PrefixMatch]:
        candidate = namespace.strip(SEPARATOR) + SEPARATOR
        best: Optional[PrefixMatch] = None
        tiers = ((self.mappings.normal, False), (self.mappings.priority, True))
        for mappings, is_priority in tiers:
            for prefix, directory in mappings.items():
                normalised = prefix.strip(SEPARATOR) + SEPARATOR
                if normalised == SEPARATOR or not candidate.startswith(normalised):
                    continue
                # `Tests` and `Tests\` are the same prefix; priority wins the tie.
                longer = best is None or len(normalised) > len(best.prefix)
                overrides = best is not None and is_priority and len(normalised) == len(best.prefix)
                if longer or overrides:
                    best = PrefixMatch(prefix=normalised, directory=directory.rstrip("/"))
        return best


__all__ = ["PathResolver", "PrefixMatch", "SEPARATOR"]
