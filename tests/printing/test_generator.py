from __future__ import annotations

from pathlib import Path

import pytest

from phpgen.blueprint import Blueprint
from phpgen.config import ConfigError, PhpGenConfig
from phpgen.core.generator import Generator
from phpgen.core.path_resolver import PathResolver
from phpgen.core.project import BatchBuildError, Project
from phpgen.elements import ClassType, InterfaceType
from phpgen.printing.assembler import FileAssembler


def _config(root: Path) -> PhpGenConfig:
    return PhpGenConfig(root=root).with_psr4_mapping("Ns\\", "src")


def _user_project() -> Project:
    def user(cls: ClassType) -> ClassType:
        cls.add_implement("Ns\\Contracts\\HasId")
        cls.add_property("address").set_type("Ns\\Models\\Address").set_private()
        cls.add_method("getId").set_return_type("int").set_body("return $this->id;")
        return cls

    def has_id(iface: InterfaceType) -> InterfaceType:
        iface.add_method("getId").set_return_type("int")
        return iface

    return Project().add(Blueprint.for_class("Ns\\User", user)).add(
        Blueprint.for_interface("Ns\\Contracts\\HasId", has_id)
    )


def test_generate_writes_every_artifact(tmp_path: Path) -> None:
    written = Generator(_config(tmp_path)).generate(_user_project())

    assert written == [tmp_path / "src" / "User.php", tmp_path / "src" / "Contracts" / "HasId.php"]
    user = written[0].read_text(encoding="utf-8")
    assert (
        "namespace Ns;\n"
        "\n"
        "use Ns\\Contracts\\HasId;\n"
        "use Ns\\Models\\Address;\n"
        "\n"
        "class User implements HasId\n"
        "{\n"
        "    private Address $address;\n"
    ) in user
    assert "    public function getId(): int\n    {\n        return $this->id;\n    }\n" in user
    contract = written[1].read_text(encoding="utf-8")
    assert "namespace Ns\\Contracts;\n\ninterface HasId\n{\n    public function getId(): int;\n}\n" in contract


def test_artifact_imports_and_paths_follow_sub_namespaces(tmp_path: Path) -> None:
    config = _config(tmp_path)
    artifacts = _user_project().build(FileAssembler(config))
    resolver = PathResolver(config.mappings)

    user, has_id = artifacts
    [namespace] = user.file.get_namespaces()
    assert list(namespace.uses) == ["Ns\\Contracts\\HasId", "Ns\\Models\\Address"]
    assert resolver.resolve("Ns\\Models\\Address") == "src/Models"
    assert resolver.resolve(user.qualified_name) == "src"
    assert resolver.resolve(has_id.qualified_name) == "src/Contracts"


def test_dry_run_returns_no_paths(tmp_path: Path) -> None:
    assert Generator(_config(tmp_path)).generate(_user_project(), dry_run=True) == []
    assert not (tmp_path / "src").exists()


def test_preview_lists_targets_without_writing(tmp_path: Path) -> None:
    previews = Generator(_config(tmp_path)).preview(_user_project())

    assert [p.class_name for p in previews] == ["User", "HasId"]
    assert previews[1].namespace == "Ns\\Contracts"
    assert not (tmp_path / "src").exists()


def test_nothing_is_written_when_a_later_entry_fails(tmp_path: Path) -> None:
    project = _user_project()
    project.add_factory("Ns\\Broken", lambda: None)

    with pytest.raises(BatchBuildError):
        Generator(_config(tmp_path)).generate(project)

    assert not (tmp_path / "src").exists()


def test_invalid_mappings_fail_before_building(tmp_path: Path) -> None:
    built: list[str] = []

    def structure(cls: ClassType) -> ClassType:
        built.append(cls.name)
        return cls

    project = Project().add(Blueprint.for_class("Ns\\User", structure))

    with pytest.raises(ConfigError, match="At least one PSR-4 mapping"):
        Generator(PhpGenConfig(root=tmp_path)).generate(project)

    assert built == ["TempClass"]


def test_strict_types_setting_is_honoured(tmp_path: Path) -> None:
    config = _config(tmp_path)
    config.strict_types = False

    [path] = Generator(config).generate(Project().add(Blueprint.for_class("Ns\\Plain")))

    assert "declare(strict_types=1);" not in path.read_text(encoding="utf-8")
