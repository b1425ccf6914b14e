from __future__ import annotations

import pytest

from phpgen.config import NamespaceMappings
from phpgen.core.path_resolver import PathResolver


@pytest.fixture
def resolver() -> PathResolver:
    mappings = NamespaceMappings(
        normal={
            "App\\": "app",
            "App\\Domain\\": "src/Domain/",
            "Tests\\": "vendor/tests",
        },
        priority={"Tests\\": "tests"},
    )
    return PathResolver(mappings, fallback_root="src")


def test_longest_prefix_wins(resolver: PathResolver) -> None:
    assert resolver.resolve("App\\Domain\\User\\Entity") == "src/Domain/User"
    assert resolver.resolve("App\\Http\\Controller") == "app/Http"


def test_exact_prefix_maps_to_directory(resolver: PathResolver) -> None:
    assert resolver.resolve("App\\Kernel") == "app"
    assert resolver.resolve_namespace("App") == "app"


def test_priority_tier_overrides_equal_prefix(resolver: PathResolver) -> None:
    assert resolver.resolve("Tests\\Feature\\UserTest") == "tests/Feature"


def test_prefix_without_trailing_separator_matches_the_same_way() -> None:
    resolver = PathResolver(NamespaceMappings(normal={"Tests": "vendor/tests"}, priority={"Tests\\": "tests"}))

    assert resolver.resolve("Tests\\Unit\\FooTest") == "tests/Unit"


def test_prefix_must_match_whole_segments(resolver: PathResolver) -> None:
    assert resolver.resolve("Application\\Service\\Mailer") == "src/Application/Service"


def test_unmapped_and_empty_namespaces_use_fallback(resolver: PathResolver) -> None:
    assert resolver.resolve_namespace("") == "src"
    assert resolver.resolve("Vendor\\Package\\Thing") == "src/Vendor/Package"


def test_lowercase_final_segment_is_treated_as_namespace(resolver: PathResolver) -> None:
    assert resolver.resolve("App\\Http\\controllers") == "app/Http/controllers"


def test_leading_separator_is_ignored(resolver: PathResolver) -> None:
    assert resolver.resolve("\\App\\Models\\User") == "app/Models"
