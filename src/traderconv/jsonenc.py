# -*- coding: utf-8 -*-
"""JSON encoding and decoding of TraderPlus documents."""

import json
from typing import Any, AnyStr, Protocol, TypeAlias, runtime_checkable

from traderconv import errors

Object: TypeAlias = dict[str, Any]

# TraderPlus v2 files are indented by four spaces.
INDENT = 4


@runtime_checkable
class Encodable(Protocol):
    """A value that knows its own JSON representation."""

    def to_json(self) -> Object: ...


class _Encoder(json.JSONEncoder):

    def default(self, o: Any):
        if isinstance(o, Encodable):
            return o.to_json()
        if isinstance(o, (set, frozenset)):
            return sorted(o)
        return super().default(o)


class Codec:
    """Encodes ``Encodable`` values, and decodes documents with error context."""

    def dumps(self, obj: Any) -> str:
        """Encodes as a pretty-printed document."""
        return json.dumps(obj, cls=_Encoder, indent=INDENT, ensure_ascii=False)

    def loads(self, s: AnyStr, source: str) -> Any:
        """Decodes a document.

        :param s: Document text.
        :param source: Name of the document, for error messages.
        :raises errors.ParseFormatError: If ``s`` is not valid JSON.
        :return: Decoded value.
        """
        try:
            return json.loads(s)
        except json.JSONDecodeError as exc:
            raise errors.ParseFormatError(
                source, f"invalid JSON: {exc.msg}", line_number=exc.lineno
            ) from exc


DEFAULT_CODEC = Codec()


def object_list(v: Any) -> list[Object]:
    """Returns the JSON objects in ``v`` if it is an array, otherwise nothing."""
    if not isinstance(v, list):
        return []
    return [item for item in v if isinstance(item, dict)]


def str_list(v: Any) -> list[str]:
    """Returns the strings in ``v`` if it is an array, otherwise nothing."""
    if not isinstance(v, list):
        return []
    return [item for item in v if isinstance(item, str)]


def get_or_default(o: Object, key: str, default: Any) -> Any:
    """Returns ``o[key]``, or ``default`` if it is absent or null."""
    v = o.get(key)
    return default if v is None else v
