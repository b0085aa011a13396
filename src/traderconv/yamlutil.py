# -*- coding: utf-8 -*-
"""Utility code for helping with ruamel.yaml."""

from __future__ import annotations

import dataclasses
from typing import Any, ClassVar, Iterator, Self, TypeVar, cast, TYPE_CHECKING

from ruamel import yaml
from traderconv import errors

_T = TypeVar("_T")


if TYPE_CHECKING:
    from _typeshed import DataclassInstance


def _location(node: Any) -> str:
    mark = node.start_mark
    return f"{mark.name}:{mark.line+1}:{mark.column+1}"


def _check_node_type(
    yaml_tag: str,
    node: Any,
    want_type: type[_T],
) -> _T:
    if not isinstance(node, want_type):
        raise errors.ConfigurationError(
            f"{_location(node)}: "
            f"{yaml_tag} should be a {want_type.__name__}, but is {type(node).__name__}"
        )
    return node


class YamlMappingMixin:
    """Mixin for dataclasses instantiated by parsing YAML mappings.

    Mapping keys are the field names. Every field must have a default, and
    may be omitted from the YAML. Keys that do not name a field are rejected.
    """

    yaml_tag: ClassVar

    @classmethod
    def to_yaml(cls, representer, node):
        """Implements serialising the node as basic YAML types."""
        mapping = {
            field.name: getattr(node, field.name)
            for field in dataclasses.fields(cast(type["DataclassInstance"], cls))
        }
        return representer.represent_mapping(cls.yaml_tag, mapping)

    @classmethod
    def from_yaml(cls, constructor, node) -> Iterator[Self]:
        """Implements deserialising the node from basic YAML types.

        :raises errors.ConfigurationError: If an unknown field is present.
        """
        node = _check_node_type(cls.yaml_tag, node, yaml.MappingNode)

        obj = cls()
        yield obj
        data = yaml.CommentedMap()
        constructor.construct_mapping(node, maptyp=data, deep=True)
        for field in dataclasses.fields(cast(type["DataclassInstance"], cls)):
            if field.name in data:
                setattr(obj, field.name, data.pop(field.name))
        if data:
            names = ", ".join(sorted(str(k) for k in data))
            raise errors.ConfigurationError(
                f"{_location(node)}: unexpected fields {names} in {cls.yaml_tag}"
            )
