"""Messages of the fin protocol and their JSON encoding."""

import json
import types
from dataclasses import dataclass, field, fields, is_dataclass
from datetime import datetime
from typing import Any, Mapping, Optional, TypeVar, Union, get_args, get_origin

from .cacao import (
    AgentTarget,
    AuthenticationInformation,
    ExternalReference,
    _format_time,
    _parse_time,
)
from .variables import Variables

MESSAGE_TYPE_ACK = "ack"
MESSAGE_TYPE_NACK = "nack"
MESSAGE_TYPE_REGISTER = "register"
MESSAGE_TYPE_UNREGISTER = "unregister"
MESSAGE_TYPE_COMMAND = "command"
MESSAGE_TYPE_RESULT = "result"
MESSAGE_TYPE_PAUSE = "pause"
MESSAGE_TYPE_RESUME = "resume"
MESSAGE_TYPE_STOP = "stop"

_M = TypeVar("_M")


def _f(name: str, *, default: Any = "", factory: Any = None, omitempty: bool = False) -> Any:
    meta = {"json": name, "omitempty": omitempty}
    if factory is not None:
        return field(default_factory=factory, metadata=meta)
    return field(default=default, metadata=meta)


@dataclass
class Ack:
    type: str = _f("type")
    message_id: str = _f("message_id")


@dataclass
class Nack:
    type: str = _f("type")
    message_id: str = _f("message_id")


@dataclass
class Security:
    version: str = _f("version")
    channel_security: str = _f("channel_security")


@dataclass
class Meta:
    timestamp: Optional[datetime] = _f("timestamp", default=None)
    sender_id: str = _f("sender_id")


@dataclass
class FinStep:
    """Example step shown to the executor in a capability."""

    type: str = _f("type")
    name: str = _f("name")
    description: str = _f("description")
    external_references: list[ExternalReference] = _f("external_references", factory=list)
    command: str = _f("command")
    target: str = _f("target")


@dataclass
class Capability:
    id: str = _f("capability_id")
    name: str = _f("name")
    version: str = _f("version")
    step: dict[str, FinStep] = _f("step", factory=dict, omitempty=True)
    agent: dict[str, AgentTarget] = _f("agent", factory=dict, omitempty=True)


@dataclass
class Register:
    type: str = _f("type")
    message_id: str = _f("message_id")
    fin_id: str = _f("fin_id")
    name: str = _f("fin_name")
    protocol_version: str = _f("protocol_version")
    security: Security = _f("security", factory=Security)
    capabilities: list[Capability] = _f("capabilities", factory=list)
    meta: Meta = _f("meta", factory=Meta)


@dataclass
class Unregister:
    type: str = _f("type")
    message_id: str = _f("message_id")
    id: str = _f("capability_id")
    fin_id: str = _f("fin_id")
    all: str = _f("all")


@dataclass
class Context:
    completed_on: Optional[datetime] = _f("completed_on", default=None)
    generated_on: Optional[datetime] = _f("generated_on", default=None)
    timeout: int = _f("timeout", default=0)
    delay: int = _f("delay", default=0)
    step_id: str = _f("step_id")
    playbook_id: str = _f("playbook_id")
    execution_id: str = _f("execution_id")


@dataclass
class CommandSubstructure:
    command: str = _f("command")
    authentication: AuthenticationInformation = _f(
        "authentication", factory=AuthenticationInformation
    )
    context: Context = _f("context", factory=Context)
    variables: Variables = _f("variables", factory=Variables)


@dataclass
class Command:
    type: str = _f("type")
    message_id: str = _f("message_id")
    command: CommandSubstructure = _f("command", factory=CommandSubstructure)
    meta: Meta = _f("meta", factory=Meta)


@dataclass
class ResultStructure:
    state: str = _f("state")
    context: Context = _f("context", factory=Context)
    variables: Variables = _f("variables", factory=Variables)


@dataclass
class Result:
    type: str = _f("type")
    message_id: str = _f("message_id")
    result: ResultStructure = _f("result", factory=ResultStructure)
    meta: Meta = _f("meta", factory=Meta)


@dataclass
class Control:
    type: str = _f("type")
    message_id: str = _f("message_id")
    capability_id: str = _f("capability_id")


@dataclass
class FinStatus:
    type: str = _f("type")
    message_id: str = _f("message_id")
    capability_id: str = _f("capability_id")
    progress: str = _f("progress")


@dataclass
class Message:
    """The fields every message starts with."""

    type: str = _f("type")
    message_id: str = _f("message_id")


def new_command() -> Command:
    """Return a command message with its type set and a one-second timeout."""
    command = Command(type=MESSAGE_TYPE_COMMAND)
    command.command.context.timeout = 1
    return command


def new_ack(message_id: str) -> Ack:
    """Return an acknowledgement of the given message."""
    return Ack(type=MESSAGE_TYPE_ACK, message_id=message_id)


def new_nack(message_id: str) -> Nack:
    """Return a negative acknowledgement of the given message."""
    return Nack(type=MESSAGE_TYPE_NACK, message_id=message_id)


def decode(data: Union[bytes, str], message_type: type) -> Any:
    """Decode a JSON message into an instance of message_type; raise ValueError if invalid."""
    if not _is_message_type(message_type):
        raise TypeError(f"{message_type!r} is not a fin message type")
    raw = json.loads(data)
    try:
        return _decode_object(message_type, raw)
    except TypeError as exc:
        raise ValueError(str(exc)) from exc


def encode(message: Any) -> bytes:
    """Encode a message as compact JSON bytes."""
    if not _is_message_type(type(message)):
        raise TypeError(f"{type(message).__name__} is not a fin message")
    return json.dumps(
        _encode_object(message), separators=(",", ":"), ensure_ascii=False
    ).encode("utf-8")


# ---------------------------------------------------------------- conversion


def _is_message_type(tp: Any) -> bool:
    return (
        isinstance(tp, type)
        and is_dataclass(tp)
        and all("json" in f.metadata for f in fields(tp))
    )


def _strip_optional(hint: Any) -> Any:
    if get_origin(hint) in (Union, types.UnionType):
        args = [arg for arg in get_args(hint) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return hint


def _encode_value(value: Any) -> Any:
    if _is_message_type(type(value)):
        return _encode_object(value)
    if isinstance(value, datetime):
        return _format_time(value)
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, Mapping):
        return {str(key): _encode_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_encode_value(item) for item in value]
    return value


def _encode_object(obj: Any) -> dict:
    result: dict = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        if f.metadata["omitempty"] and not value:
            continue
        if value is None and _strip_optional(f.type) is datetime:
            result[f.metadata["json"]] = _format_time(None)
        else:
            result[f.metadata["json"]] = _encode_value(value)
    return result


def _decode_scalar(hint: type, data: Any) -> Any:
    if data is None:
        return hint()
    if hint is int:
        valid = isinstance(data, int) and not isinstance(data, bool)
    else:
        valid = isinstance(data, hint)
    if not valid:
        raise TypeError(f"expected {hint.__name__}, got {type(data).__name__}")
    return data


def _decode_value(hint: Any, data: Any) -> Any:
    hint = _strip_optional(hint)
    if hint is datetime:
        if data is None:
            return None
        if not isinstance(data, str):
            raise TypeError("timestamp must be a string")
        return _parse_time(data)
    if hint in (str, int, bool):
        return _decode_scalar(hint, data)
    if _is_message_type(hint):
        return _decode_object(hint, data)
    origin = get_origin(hint)
    if origin is list:
        if data is None:
            return []
        if not isinstance(data, list):
            raise TypeError("expected a JSON array")
        (item_hint,) = get_args(hint)
        return [_decode_value(item_hint, item) for item in data]
    if origin is dict:
        if data is None:
            return {}
        if not isinstance(data, Mapping):
            raise TypeError("expected a JSON object")
        value_hint = get_args(hint)[1]
        return {key: _decode_value(value_hint, item) for key, item in data.items()}
    if hasattr(hint, "from_dict"):
        if data is None:
            return hint()
        return hint.from_dict(data)
    return data


def _decode_object(cls: type, data: Any) -> Any:
    if data is None:
        return cls()
    if not isinstance(data, Mapping):
        raise TypeError(f"{cls.__name__} must be a JSON object")
    values = {
        f.name: _decode_value(f.type, data[f.metadata["json"]])
        for f in fields(cls)
        if f.metadata["json"] in data
    }
    return cls(**values)