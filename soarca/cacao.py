"""CACAO 2.0 playbook model: playbooks, workflow steps, agents, targets and friends."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Callable, Mapping, TypeVar

from .variables import Variables

STEP_TYPE_END = "end"
STEP_TYPE_START = "start"
STEP_TYPE_ACTION = "action"
STEP_TYPE_PLAYBOOK_ACTION = "playbook-action"
STEP_TYPE_PARALLEL = "parallel"
STEP_TYPE_IF_CONDITION = "if-condition"
STEP_TYPE_WHILE_CONDITION = "while-condition"
STEP_TYPE_SWITCH_CONDITION = "switch-condition"

COMMAND_TYPE_MANUAL = "manual"
COMMAND_TYPE_BASH = "bash"
COMMAND_TYPE_CALDERA_CMD = "caldera-cmd"
COMMAND_TYPE_ELASTIC = "elastic"
COMMAND_TYPE_HTTP_API = "http-api"
COMMAND_TYPE_JUPYTER = "jupyter"
COMMAND_TYPE_KESTREL = "kestrel"
COMMAND_TYPE_OPENC2_HTTP = "openc2-http"
COMMAND_TYPE_POWERSHELL = "powershell"
COMMAND_TYPE_SIGMA = "sigma"
COMMAND_TYPE_SSH = "ssh"
COMMAND_TYPE_YARA = "yara"

AUTH_INFO_OAUTH2_TYPE = "oauth2"
AUTH_INFO_HTTP_BASIC_TYPE = "http-basic"
AUTH_INFO_NOT_SET = ""
CACAO_VERSION_1 = "cacao-1.0"
CACAO_VERSION_2 = "cacao-2.0"

_ZERO_TIME = "0001-01-01T00:00:00Z"
_TIME_PATTERN = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})$"
)

_T = TypeVar("_T")


class NetAddressType(str, Enum):
    """Kinds of network address an agent or target may carry."""

    DNAME = "dname"
    IPV4 = "ipv4"
    IPV6 = "ipv6"
    L2MAC = "l2mac"
    VLAN = "vlan"
    URL = "url"


# ---------------------------------------------------------------- helpers


def _require_object(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise TypeError(f"{what} must be a JSON object")
    return data


def _get_str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"field {key!r} must be a string")
    return value


def _get_int(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"field {key!r} must be an integer")
    return value


def _get_bool(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise TypeError(f"field {key!r} must be a boolean")
    return value


def _get_str_list(data: Mapping[str, Any], key: str) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise TypeError(f"field {key!r} must be a list of strings")
    return list(value)


def _get_str_map(data: Mapping[str, Any], key: str) -> dict[str, str]:
    value = data.get(key)
    if value is None:
        return {}
    value = _require_object(value, f"field {key!r}")
    if not all(isinstance(item, str) for item in value.values()):
        raise TypeError(f"field {key!r} must map to strings")
    return dict(value)


def _get_str_list_map(data: Mapping[str, Any], key: str) -> dict[str, list[str]]:
    value = data.get(key)
    if value is None:
        return {}
    value = _require_object(value, f"field {key!r}")
    result: dict[str, list[str]] = {}
    for name, items in value.items():
        if not isinstance(items, list) or not all(isinstance(i, str) for i in items):
            raise TypeError(f"field {key!r} must map to lists of strings")
        result[name] = list(items)
    return result


def _get_extensions(data: Mapping[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    return dict(_require_object(value, f"field {key!r}"))


def _get_object_list(
    data: Mapping[str, Any], key: str, factory: Callable[[Mapping[str, Any]], _T]
) -> list[_T]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"field {key!r} must be a list")
    return [factory(item) for item in value]


def _get_object_map(
    data: Mapping[str, Any], key: str, factory: Callable[[Mapping[str, Any]], _T]
) -> dict[str, _T]:
    value = data.get(key)
    if value is None:
        return {}
    value = _require_object(value, f"field {key!r}")
    return {name: factory(item) for name, item in value.items()}


def _parse_time(text: str) -> datetime | None:
    match = _TIME_PATTERN.match(text)
    if match is None:
        raise ValueError(f"invalid timestamp: {text!r}")
    year, month, day, hour, minute, second, fraction, zone = match.groups()
    if zone in ("Z", "z"):
        tz = timezone.utc
    else:
        sign = -1 if zone[0] == "-" else 1
        offset = timedelta(hours=int(zone[1:3]), minutes=int(zone[4:6]))
        tz = timezone(sign * offset)
    microsecond = int((fraction or "").ljust(6, "0")[:6])
    moment = datetime(
        int(year), int(month), int(day), int(hour), int(minute), int(second),
        microsecond, tzinfo=tz,
    )
    if text.upper() == _ZERO_TIME.upper() or moment == datetime(1, 1, 1, tzinfo=timezone.utc):
        return None
    return moment


def _get_time(data: Mapping[str, Any], key: str) -> datetime | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"field {key!r} must be a timestamp string")
    return _parse_time(value)


def _format_time(moment: datetime | None) -> str:
    if moment is None:
        return _ZERO_TIME
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    text = (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    offset = moment.utcoffset() or timedelta(0)
    if not offset:
        return text + "Z"
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _put(result: dict[str, Any], key: str, value: Any) -> None:
    """Set key only when value is non-empty, as omitempty fields are written."""
    if value:
        result[key] = value


def _refs_to_list(refs: list["ExternalReference"]) -> list[dict[str, Any]]:
    return [ref.to_dict() for ref in refs]


# ---------------------------------------------------------------- model


@dataclass
class CivicLocation:
    """Physical location of an agent or target."""

    name: str = ""
    description: str = ""
    building_details: str = ""
    network_details: str = ""
    region: str = ""
    country: str = ""
    administrative_area: str = ""
    city: str = ""
    street_address: str = ""
    postal_code: str = ""
    latitude: str = ""
    longitude: str = ""
    precision: str = ""

    _FIELDS = (
        "name", "description", "building_details", "network_details", "region",
        "country", "administrative_area", "city", "street_address", "postal_code",
        "latitude", "longitude", "precision",
    )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CivicLocation":
        data = _require_object(data, "location")
        return cls(**{key: _get_str(data, key) for key in cls._FIELDS})

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key in self._FIELDS:
            _put(result, key, getattr(self, key))
        return result


@dataclass
class Contact:
    """Contact details of an agent or target."""

    email: dict[str, str] = field(default_factory=dict)
    phone: dict[str, str] = field(default_factory=dict)
    contact_details: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Contact":
        data = _require_object(data, "contact")
        return cls(
            email=_get_str_map(data, "email"),
            phone=_get_str_map(data, "phone"),
            contact_details=_get_str(data, "contact_details"),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        _put(result, "email", dict(self.email))
        _put(result, "phone", dict(self.phone))
        _put(result, "contact_details", self.contact_details)
        return result


@dataclass
class ExternalReference:
    """A reference to an outside source of information."""

    name: str = ""
    description: str = ""
    source: str = ""
    url: str = ""
    external_id: str = ""
    reference_id: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExternalReference":
        data = _require_object(data, "external reference")
        return cls(
            name=_get_str(data, "name"),
            description=_get_str(data, "description"),
            source=_get_str(data, "source"),
            url=_get_str(data, "url"),
            external_id=_get_str(data, "external_id"),
            reference_id=_get_str(data, "reference_id"),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name}
        for key in ("description", "source", "url", "external_id", "reference_id"):
            _put(result, key, getattr(self, key))
        return result


@dataclass
class AgentTarget:
    """An agent that executes commands or a target they act upon."""

    id: str = ""
    type: str = ""
    name: str = ""
    description: str = ""
    location: CivicLocation = field(default_factory=CivicLocation)
    agent_target_extensions: dict[str, Any] = field(default_factory=dict)
    contact: Contact = field(default_factory=Contact)
    logical: list[str] = field(default_factory=list)
    sector: str = ""
    auth_info_identifier: str = ""
    category: list[str] = field(default_factory=list)
    address: dict[str, list[str]] = field(default_factory=dict)
    port: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AgentTarget":
        """Build an agent or target from its JSON object form."""
        data = _require_object(data, "agent/target")
        location = data.get("location")
        contact = data.get("contact")
        return cls(
            id=_get_str(data, "id"),
            type=_get_str(data, "type"),
            name=_get_str(data, "name"),
            description=_get_str(data, "description"),
            location=CivicLocation() if location is None else CivicLocation.from_dict(location),
            agent_target_extensions=_get_extensions(data, "agent_target_extensions"),
            contact=Contact() if contact is None else Contact.from_dict(contact),
            logical=_get_str_list(data, "logical"),
            sector=_get_str(data, "sector"),
            auth_info_identifier=_get_str(data, "authentication_info"),
            category=_get_str_list(data, "category"),
            address=_get_str_list_map(data, "address"),
            port=_get_str(data, "port"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object form."""
        result: dict[str, Any] = {
            "type": self.type,
            "name": self.name,
            "location": self.location.to_dict(),
            "contact": self.contact.to_dict(),
        }
        _put(result, "id", self.id)
        _put(result, "description", self.description)
        _put(result, "agent_target_extensions", dict(self.agent_target_extensions))
        _put(result, "logical", list(self.logical))
        _put(result, "sector", self.sector)
        _put(result, "authentication_info", self.auth_info_identifier)
        _put(result, "category", list(self.category))
        _put(
            result,
            "address",
            {
                (key.value if isinstance(key, NetAddressType) else key): list(values)
                for key, values in self.address.items()
            },
        )
        _put(result, "port", self.port)
        return result


@dataclass
class AuthenticationInformation:
    """Credentials referenced by steps, agents and targets."""

    id: str = ""
    type: str = ""
    name: str = ""
    description: str = ""
    username: str = ""
    user_id: str = ""
    password: str = ""
    private_key: str = ""
    kms: bool = False
    kms_key_identifier: str = ""
    token: str = ""
    oauth_header: str = ""

    _OPTIONAL = (
        "id", "name", "description", "username", "user_id", "password",
        "private_key", "kms_key_identifier", "token", "oauth_header",
    )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AuthenticationInformation":
        """Build authentication information from its JSON object form."""
        data = _require_object(data, "authentication information")
        values: dict[str, Any] = {key: _get_str(data, key) for key in cls._OPTIONAL}
        return cls(type=_get_str(data, "type"), kms=_get_bool(data, "kms"), **values)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object form."""
        result: dict[str, Any] = {"type": self.type, "kms": self.kms}
        for key in self._OPTIONAL:
            _put(result, key, getattr(self, key))
        return result


@dataclass
class ExtensionDefinition:
    """Definition of an extension used by a playbook."""

    id: str = ""
    type: str = ""
    name: str = ""
    description: str = ""
    created_by: str = ""
    schema: str = ""
    version: str = ""
    external_references: list[ExternalReference] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExtensionDefinition":
        data = _require_object(data, "extension definition")
        return cls(
            id=_get_str(data, "id"),
            type=_get_str(data, "type"),
            name=_get_str(data, "name"),
            description=_get_str(data, "description"),
            created_by=_get_str(data, "created_by"),
            schema=_get_str(data, "schema"),
            version=_get_str(data, "version"),
            external_references=_get_object_list(
                data, "external_references", ExternalReference.from_dict
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "type": self.type,
            "name": self.name,
            "created_by": self.created_by,
            "schema": self.schema,
            "version": self.version,
        }
        _put(result, "id", self.id)
        _put(result, "description", self.description)
        _put(result, "external_references", _refs_to_list(self.external_references))
        return result


@dataclass
class Command:
    """A command carried by an action step."""

    type: str = ""
    command: str = ""
    description: str = ""
    command_b64: str = ""
    version: str = ""
    playbook_activity: str = ""
    headers: dict[str, list[str]] = field(default_factory=dict)
    content: str = ""
    content_b64: str = ""

    _OPTIONAL = (
        "description", "command_b64", "version", "playbook_activity",
        "content", "content_b64",
    )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Command":
        """Build a command from its JSON object form."""
        data = _require_object(data, "command")
        values: dict[str, Any] = {key: _get_str(data, key) for key in cls._OPTIONAL}
        return cls(
            type=_get_str(data, "type"),
            command=_get_str(data, "command"),
            headers=_get_str_list_map(data, "headers"),
            **values,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object form."""
        result: dict[str, Any] = {"type": self.type, "command": self.command}
        for key in self._OPTIONAL:
            _put(result, key, getattr(self, key))
        _put(result, "headers", {k: list(v) for k, v in self.headers.items()})
        return result


@dataclass
class Step:
    """One step of a playbook workflow."""

    type: str = ""
    id: str = ""
    name: str = ""
    description: str = ""
    external_references: list[ExternalReference] = field(default_factory=list)
    delay: int = 0
    timeout: int = 0
    step_variables: Variables = field(default_factory=Variables)
    owner: str = ""
    on_completion: str = ""
    on_success: str = ""
    on_failure: str = ""
    commands: list[Command] = field(default_factory=list)
    agent: str = ""
    targets: list[str] = field(default_factory=list)
    in_args: list[str] = field(default_factory=list)
    out_args: list[str] = field(default_factory=list)
    playbook_id: str = ""
    playbook_version: str = ""
    next_steps: list[str] = field(default_factory=list)
    condition: str = ""
    on_true: str = ""
    on_false: str = ""
    switch: str = ""
    cases: dict[str, str] = field(default_factory=dict)
    authentication_info: str = ""
    step_extensions: dict[str, Any] = field(default_factory=dict)

    _STRINGS = (
        "id", "name", "description", "owner", "on_completion", "on_success",
        "on_failure", "agent", "playbook_id", "playbook_version", "condition",
        "on_true", "on_false", "switch", "authentication_info",
    )
    _LISTS = ("targets", "in_args", "out_args", "next_steps")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Step":
        """Build a step from its JSON object form."""
        data = _require_object(data, "step")
        values: dict[str, Any] = {key: _get_str(data, key) for key in cls._STRINGS}
        values.update({key: _get_str_list(data, key) for key in cls._LISTS})
        return cls(
            type=_get_str(data, "type"),
            external_references=_get_object_list(
                data, "external_references", ExternalReference.from_dict
            ),
            delay=_get_int(data, "delay"),
            timeout=_get_int(data, "timeout"),
            step_variables=Variables.from_dict(data.get("step_variables")),
            commands=_get_object_list(data, "commands", Command.from_dict),
            cases=_get_str_map(data, "cases"),
            step_extensions=_get_extensions(data, "step_extensions"),
            **values,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object form, leaving out empty optional fields."""
        result: dict[str, Any] = {"type": self.type}
        for key in self._STRINGS:
            _put(result, key, getattr(self, key))
        for key in self._LISTS:
            _put(result, key, list(getattr(self, key)))
        _put(result, "external_references", _refs_to_list(self.external_references))
        _put(result, "delay", self.delay)
        _put(result, "timeout", self.timeout)
        _put(result, "step_variables", Variables(self.step_variables).to_dict())
        _put(result, "commands", [command.to_dict() for command in self.commands])
        _put(result, "cases", dict(self.cases))
        _put(result, "step_extensions", dict(self.step_extensions))
        return result


@dataclass
class DataMarking:
    """A data marking definition (statement, TLP or IEP)."""

    type: str = ""
    id: str = ""
    name: str = ""
    description: str = ""
    created_by: str = ""
    created: datetime | None = None
    revoked: bool = False
    valid_from: datetime | None = None
    valid_until: datetime | None = None
    labels: list[str] = field(default_factory=list)
    external_references: list[ExternalReference] = field(default_factory=list)
    tlpv2_level: str = ""
    statement: str = ""
    tlp: str = ""
    iep_version: str = ""
    start_date: datetime | None = None
    end_date: datetime | None = None
    encrypt_in_transit: str = ""
    permitted_actions: str = ""
    affected_party_notifications: str = ""
    attribution: str = ""
    unmodified_resale: str = ""
    marking_extensions: dict[str, Any] = field(default_factory=dict)

    _OPTIONAL = (
        "name", "description", "tlpv2_level", "statement", "tlp", "iep_version",
        "encrypt_in_transit", "permitted_actions", "affected_party_notifications",
        "attribution", "unmodified_resale",
    )
    _TIMES = ("created", "valid_from", "valid_until", "start_date", "end_date")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DataMarking":
        data = _require_object(data, "data marking")
        values: dict[str, Any] = {key: _get_str(data, key) for key in cls._OPTIONAL}
        values.update({key: _get_time(data, key) for key in cls._TIMES})
        return cls(
            type=_get_str(data, "type"),
            id=_get_str(data, "id"),
            created_by=_get_str(data, "created_by"),
            revoked=_get_bool(data, "revoked"),
            labels=_get_str_list(data, "labels"),
            external_references=_get_object_list(
                data, "external_references", ExternalReference.from_dict
            ),
            marking_extensions=_get_extensions(data, "marking_extensions"),
            **values,
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "type": self.type,
            "id": self.id,
            "created_by": self.created_by,
        }
        for key in self._TIMES:
            result[key] = _format_time(getattr(self, key))
        for key in self._OPTIONAL:
            _put(result, key, getattr(self, key))
        _put(result, "revoked", self.revoked)
        _put(result, "labels", list(self.labels))
        _put(result, "external_references", _refs_to_list(self.external_references))
        _put(result, "marking_extensions", dict(self.marking_extensions))
        return result


@dataclass
class Playbook:
    """A CACAO playbook."""

    id: str = ""
    type: str = ""
    spec_version: str = ""
    name: str = ""
    description: str = ""
    playbook_types: list[str] = field(default_factory=list)
    created_by: str = ""
    created: datetime | None = None
    modified: datetime | None = None
    valid_from: datetime | None = None
    valid_until: datetime | None = None
    derived_from: list[str] = field(default_factory=list)
    priority: int = 0
    severity: int = 0
    impact: int = 0
    labels: list[str] = field(default_factory=list)
    external_references: list[ExternalReference] = field(default_factory=list)
    markings: list[str] = field(default_factory=list)
    workflow_start: str = ""
    workflow_exception: str = ""
    workflow: dict[str, Step] = field(default_factory=dict)
    data_marking_definitions: dict[str, DataMarking] = field(default_factory=dict)
    authentication_info_definitions: dict[str, AuthenticationInformation] = field(
        default_factory=dict
    )
    agent_definitions: dict[str, AgentTarget] = field(default_factory=dict)
    target_definitions: dict[str, AgentTarget] = field(default_factory=dict)
    extension_definitions: dict[str, ExtensionDefinition] = field(default_factory=dict)
    playbook_variables: Variables = field(default_factory=Variables)
    playbook_extensions: dict[str, Any] = field(default_factory=dict)

    _LISTS = ("playbook_types", "derived_from", "labels", "markings")
    _TIMES = ("created", "modified", "valid_from", "valid_until")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Playbook":
        """Build a playbook from its JSON object form."""
        data = _require_object(data, "playbook")
        values: dict[str, Any] = {key: _get_str_list(data, key) for key in cls._LISTS}
        values.update({key: _get_time(data, key) for key in cls._TIMES})
        return cls(
            id=_get_str(data, "id"),
            type=_get_str(data, "type"),
            spec_version=_get_str(data, "spec_version"),
            name=_get_str(data, "name"),
            description=_get_str(data, "description"),
            created_by=_get_str(data, "created_by"),
            priority=_get_int(data, "priority"),
            severity=_get_int(data, "severity"),
            impact=_get_int(data, "impact"),
            external_references=_get_object_list(
                data, "external_references", ExternalReference.from_dict
            ),
            workflow_start=_get_str(data, "workflow_start"),
            workflow_exception=_get_str(data, "workflow_exception"),
            workflow=_get_object_map(data, "workflow", Step.from_dict),
            data_marking_definitions=_get_object_map(
                data, "data_marking_definitions", DataMarking.from_dict
            ),
            authentication_info_definitions=_get_object_map(
                data, "authentication_info_definitions", AuthenticationInformation.from_dict
            ),
            agent_definitions=_get_object_map(data, "agent_definitions", AgentTarget.from_dict),
            target_definitions=_get_object_map(data, "target_definitions", AgentTarget.from_dict),
            extension_definitions=_get_object_map(
                data, "extension_definitions", ExtensionDefinition.from_dict
            ),
            playbook_variables=Variables.from_dict(data.get("playbook_variables")),
            playbook_extensions=_get_extensions(data, "playbook_extensions"),
            **values,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object form, leaving out empty optional fields."""
        result: dict[str, Any] = {
            "id": self.id,
            "type": self.type,
            "spec_version": self.spec_version,
            "name": self.name,
            "created_by": self.created_by,
            "workflow_start": self.workflow_start,
            "workflow": {key: step.to_dict() for key, step in self.workflow.items()},
        }
        for key in self._TIMES:
            result[key] = _format_time(getattr(self, key))
        for key in self._LISTS:
            _put(result, key, list(getattr(self, key)))
        _put(result, "description", self.description)
        _put(result, "priority", self.priority)
        _put(result, "severity", self.severity)
        _put(result, "impact", self.impact)
        _put(result, "external_references", _refs_to_list(self.external_references))
        _put(result, "workflow_exception", self.workflow_exception)
        for key in (
            "data_marking_definitions",
            "authentication_info_definitions",
            "agent_definitions",
            "target_definitions",
            "extension_definitions",
        ):
            _put(result, key, {k: v.to_dict() for k, v in getattr(self, key).items()})
        _put(result, "playbook_variables", Variables(self.playbook_variables).to_dict())
        _put(result, "playbook_extensions", dict(self.playbook_extensions))
        return result


# ---------------------------------------------------------------- initializers


def new_agent_targets(*args: AgentTarget) -> dict[str, AgentTarget]:
    """Key the given agents or targets by their id."""
    return {agent.id: agent for agent in args}


def new_authentication_info_definitions(
    *args: AuthenticationInformation,
) -> dict[str, AuthenticationInformation]:
    """Key the given authentication information by its id."""
    return {item.id: item for item in args}


def new_extension_definitions(*args: ExtensionDefinition) -> dict[str, ExtensionDefinition]:
    """Key the given extension definitions by their id."""
    return {item.id: item for item in args}


def new_data_markings(*args: DataMarking) -> dict[str, DataMarking]:
    """Key the given data markings by their id."""
    return {item.id: item for item in args}


def new_playbook() -> Playbook:
    """Return an empty playbook with all definition maps in place."""
    return Playbook()