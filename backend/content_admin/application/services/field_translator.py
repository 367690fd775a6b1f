"""Field Name Translator — maps record keys between storage and wire conventions.

Storage names are underscore-separated (``cover_img_url``), wire names are
camel-cased (``coverImgUrl``). Translation walks nested dicts and lists;
scalars, ``None`` and non-string keys are kept as they are.
"""

import re
from collections.abc import Mapping
from enum import Enum
from typing import Any

from content_admin.domain.exceptions import TranslationError

_SNAKE_SEGMENT = re.compile(r"_([a-z])")
_UPPER_CHAR = re.compile(r"[A-Z]")


class Direction(str, Enum):
    TO_WIRE = "to_wire"
    TO_STORAGE = "to_storage"


class FieldNameTranslator:
    """Pure, recursive key translator.

    ``aliases`` maps storage names to wire names for keys the convention
    rule cannot express; both directions honour them.
    """

    def __init__(self, aliases: Mapping[str, str] | None = None):
        self._to_wire_aliases = dict(aliases or {})
        self._to_storage_aliases = {v: k for k, v in self._to_wire_aliases.items()}

    def wire_key(self, name: str) -> str:
        if name in self._to_wire_aliases:
            return self._to_wire_aliases[name]
        return _SNAKE_SEGMENT.sub(lambda m: m.group(1).upper(), name)

    def storage_key(self, name: str) -> str:
        if name in self._to_storage_aliases:
            return self._to_storage_aliases[name]
        return _UPPER_CHAR.sub(lambda m: "_" + m.group(0).lower(), name)

    def to_wire(self, record: Any) -> Any:
        return self.translate(record, Direction.TO_WIRE)

    def to_storage(self, record: Any) -> Any:
        return self.translate(record, Direction.TO_STORAGE)

    def translate(self, record: Any, direction: Direction) -> Any:
        """Translate every key of a dict or list of dicts.

        Raises:
            TranslationError: if ``record`` is not a dict or list, or if it
                contains a reference cycle.
        """
        if not isinstance(record, (dict, list)):
            raise TranslationError(
                f"Cannot translate {type(record).__name__}; expected an object or array"
            )
        convert = self.wire_key if direction is Direction.TO_WIRE else self.storage_key
        return self._walk(record, convert, set())

    def _walk(self, value: Any, convert, path: set[int]) -> Any:
        if not isinstance(value, (dict, list)):
            return value

        marker = id(value)
        if marker in path:
            raise TranslationError("Cannot translate a record with a circular reference")
        path.add(marker)
        try:
            if isinstance(value, list):
                return [self._walk(item, convert, path) for item in value]
            return {
                (convert(key) if isinstance(key, str) else key): self._walk(item, convert, path)
                for key, item in value.items()
            }
        finally:
            path.discard(marker)
