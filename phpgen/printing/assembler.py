"""Assembles PhpFile instances from element specs."""

from __future__ import annotations

from ..blueprint.spec import ElementSpec
from ..config import PhpGenConfig
from ..elements import PhpFile


class FileAssembler:
    """Builds the real element for a spec under the project's settings."""

    def __init__(self, config: PhpGenConfig) -> None:
        self.config = config

    def assemble(self, spec: ElementSpec) -> PhpFile:
        php_file = PhpFile()
        if self.config.strict_types:
            php_file.set_strict_types()

        namespace = php_file.add_namespace(spec.namespace)
        # Declared before imports so aliases never shadow the element name.
        element = namespace.add_element(spec.kind.create(spec.short_name))
        for name in spec.imports:
            if name != spec.qualified_name.strip("\\"):
                namespace.add_use(name)

        if spec.structure is not None:
            configured = spec.structure(element)
            expected = spec.kind.element_type
            if not isinstance(configured, expected):
                actual = type(configured).__name__
                raise TypeError(
                    f"Structure for {spec.qualified_name} must return {expected.__name__}, got {actual}"
                )
            if configured is not element:
                # The callback built its own instance; keep what it returned.
                namespace.elements.pop(element.name, None)
                configured.name = spec.short_name
                namespace.add_element(configured)
        return php_file


__all__ = ["FileAssembler"]
