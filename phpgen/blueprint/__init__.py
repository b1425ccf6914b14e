"""Blueprints describing the PHP elements to generate."""

from .blueprint import Blueprint
from .dependencies import DependencyAnalyzer
from .spec import ElementSpec, StructureFn

__all__ = ["Blueprint", "DependencyAnalyzer", "ElementSpec", "StructureFn"]
