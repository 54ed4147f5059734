"""ParameterBag - the merged request parameters handed to a facade.

Values are tagged so facades can branch on where a value came from and what
shape it has instead of casting blindly:

- ``Absent``: the key is not in the bag (only returned by ``get``)
- ``Single``: one string from a query string, url-encoded or multipart field
- ``Multiple``: every value of an array-notation field (``name[]``), in order
- ``JsonValue``: a member of a JSON object body, with its decoded JSON type
"""

from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from paramconverter.exceptions import ParamTypeError


@dataclass(frozen=True)
class Absent:
    """Marker for a key missing from the bag."""

    def __bool__(self) -> bool:
        return False


ABSENT = Absent()


@dataclass(frozen=True)
class Single:
    value: str


@dataclass(frozen=True)
class Multiple:
    values: Tuple[str, ...]


@dataclass(frozen=True)
class JsonValue:
    value: Any


ParamValue = Union[Absent, Single, Multiple, JsonValue]

_VARIANTS = (Single, Multiple, JsonValue)


class ParameterBag(MutableMapping):
    """Mutable mapping of parameter name to ``ParamValue``.

    Setting an existing key overwrites it, which is how later sources take
    precedence over earlier ones.
    """

    def __init__(self, initial: Optional[Dict[str, ParamValue]] = None):
        self._data: Dict[str, ParamValue] = {}
        if initial:
            for key, value in initial.items():
                self[key] = value

    def __getitem__(self, key: str) -> ParamValue:
        return self._data[key]

    def __setitem__(self, key: str, value: ParamValue) -> None:
        if not isinstance(value, _VARIANTS):
            raise TypeError(
                f"ParameterBag values must be Single, Multiple or JsonValue, got {type(value).__name__}"
            )
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._data!r})"

    def get(self, key: str, default: ParamValue = ABSENT) -> ParamValue:
        return self._data.get(key, default)

    def text(self, key: str) -> Optional[str]:
        """Return the value of ``key`` as one string, or None when absent.

        Raises:
            ParamTypeError: the value is a sequence or a non-string JSON value
        """
        value = self.get(key)

        if isinstance(value, Absent):
            return None
        if isinstance(value, Single):
            return value.value
        if isinstance(value, JsonValue) and isinstance(value.value, str):
            return value.value

        raise ParamTypeError(f'parameter "{key}" is not a single string')

    def texts(self, key: str) -> List[str]:
        """Return the value of ``key`` as a list of strings, empty when absent.

        Raises:
            ParamTypeError: the value is a JSON value that is not a string or list of strings
        """
        value = self.get(key)

        if isinstance(value, Absent):
            return []
        if isinstance(value, Multiple):
            return list(value.values)
        if isinstance(value, Single):
            return [value.value]
        if isinstance(value, JsonValue):
            if isinstance(value.value, str):
                return [value.value]
            if isinstance(value.value, list) and all(isinstance(v, str) for v in value.value):
                return list(value.value)

        raise ParamTypeError(f'parameter "{key}" is not a list of strings')

    def to_dict(self) -> Dict[str, Any]:
        """Plain-Python view of the bag (strings, lists and decoded JSON values)."""
        result: Dict[str, Any] = {}
        for key, value in self._data.items():
            if isinstance(value, Single):
                result[key] = value.value
            elif isinstance(value, Multiple):
                result[key] = list(value.values)
            else:
                result[key] = value.value
        return result
