from __future__ import annotations

import pytest

from phpgen.core.type_parser import PropertyTypeParser, parse_property_types


def test_parses_simple_list_in_order() -> None:
    result = parse_property_types("id:int,name:string,email:string")

    assert result == {"id": "int", "name": "string", "email": "string"}
    assert list(result) == ["id", "name", "email"]


def test_keeps_nested_generics_intact() -> None:
    result = parse_property_types("map:array<string,array<int,string>>,simple:int")

    assert result == {"map": "array<string,array<int,string>>", "simple": "int"}


def test_keeps_callable_signatures_intact() -> None:
    result = parse_property_types("callback:callable(string,int):bool,flag:bool")

    assert result == {"callback": "callable(string,int):bool", "flag": "bool"}


@pytest.mark.parametrize("text", ["id:int,name:string,", "id : int , name : string"])
def test_tolerates_trailing_comma_and_whitespace(text: str) -> None:
    assert parse_property_types(text) == {"id": "int", "name": "string"}


@pytest.mark.parametrize("text", [":int,name:string", "id:,name:string", "id,name:string"])
def test_drops_entries_with_empty_name_or_type(text: str) -> None:
    assert parse_property_types(text) == {"name": "string"}


def test_empty_input_yields_empty_mapping() -> None:
    assert PropertyTypeParser.parse("") == {}


def test_qualified_types_are_preserved() -> None:
    result = parse_property_types("address:App\\DTOs\\Address\\AddressDto,tags:array<App\\Tag>")

    assert result == {
        "address": "App\\DTOs\\Address\\AddressDto",
        "tags": "array<App\\Tag>",
    }


def test_later_duplicate_overwrites_type_but_keeps_position() -> None:
    result = parse_property_types("id:int,name:string,id:string")

    assert list(result) == ["id", "name"]
    assert result["id"] == "string"
