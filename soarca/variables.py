"""CACAO playbook variables and the name-keyed collection that holds them."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

VARIABLE_TYPE_BOOL = "bool"
VARIABLE_TYPE_DICTIONARY = "dictionary"
VARIABLE_TYPE_FLOAT = "float"
VARIABLE_TYPE_HEX_STRING = "hexstring"
VARIABLE_TYPE_INT = "integer"
VARIABLE_TYPE_IPV4_ADDRESS = "ipv4-addr"
VARIABLE_TYPE_IPV6_ADDRESS = "ipv6-addr"
VARIABLE_TYPE_LONG = "long"
VARIABLE_TYPE_MAC_ADDRESS = "mac-addr"
VARIABLE_TYPE_HASH = "hash"
VARIABLE_TYPE_MD5_HASH = "md5-hash"
VARIABLE_TYPE_SHA256 = "sha256-hash"
VARIABLE_TYPE_STRING = "string"
VARIABLE_TYPE_URI = "uri"
VARIABLE_TYPE_UUID = "uuid"

_VALUE_SUFFIX = ":value"


@dataclass
class Variable:
    """A single CACAO variable."""

    type: str = ""
    name: str = ""
    description: str = ""
    value: str = ""
    constant: bool = False
    external: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Variable":
        """Build a variable from its JSON object form; missing fields take defaults."""
        if not isinstance(data, Mapping):
            raise TypeError("variable must be a JSON object")
        return cls(
            type=str(data.get("type", "") or ""),
            name=str(data.get("name", "") or ""),
            description=str(data.get("description", "") or ""),
            value=str(data.get("value", "") or ""),
            constant=bool(data.get("constant", False)),
            external=bool(data.get("external", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object form, leaving out empty optional fields."""
        result: dict[str, Any] = {"type": self.type}
        for key in ("name", "description", "value", "constant", "external"):
            field_value = getattr(self, key)
            if field_value:
                result[key] = field_value
        return result


class Variables(dict):
    """Variables keyed by their name."""

    def insert(self, variable: Variable) -> bool:
        """Add a variable unless one with the same name exists; return True if added."""
        if variable.name in self:
            return False
        self[variable.name] = variable
        return True

    def insert_or_replace(self, variable: Variable) -> bool:
        """Store a variable under its name; return True if an existing one was replaced."""
        found = variable.name in self
        self[variable.name] = variable
        return found

    def insert_range(self, source: Mapping[str, Variable]) -> None:
        """Add all variables of source, keeping existing ones on name clashes."""
        for variable in source.values():
            self.insert(variable)

    def find(self, key: str) -> Variable | None:
        """Return the variable stored under key, or None."""
        return self.get(key)

    def interpolate(self, text: str) -> str:
        """Replace every '<name>:value' reference in text with that variable's value."""
        if not self:
            return text
        replacements = {f"{key}{_VALUE_SUFFIX}": var.value for key, var in self.items()}
        pattern = re.compile(
            "|".join(re.escape(k) for k in sorted(replacements, key=len, reverse=True))
        )
        return pattern.sub(lambda match: replacements[match.group(0)], text)

    def select(self, keys: Iterable[str]) -> "Variables":
        """Return a new collection holding only the known variables among keys."""
        selected = Variables()
        for key in keys:
            variable = self.find(key)
            if variable is not None:
                selected.insert_or_replace(variable)
        return selected

    def merge(self, source: Mapping[str, Variable]) -> None:
        """Add all variables of source, replacing existing ones on name clashes."""
        for variable in source.values():
            self.insert_or_replace(variable)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "Variables":
        """Build a collection from a JSON object mapping keys to variable objects."""
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise TypeError("variables must be a JSON object")
        return cls({key: Variable.from_dict(value) for key, value in data.items()})

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Return the JSON object form."""
        return {key: variable.to_dict() for key, variable in self.items()}


def new_variables(*args: Variable) -> Variables:
    """Create a collection from the given variables; the first of a name wins."""
    variables = Variables()
    for variable in args:
        variables.insert(variable)
    return variables