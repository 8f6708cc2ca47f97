import json
from datetime import datetime, timezone

import pytest

from soarca.cacao import AgentTarget
from soarca.fin import (
    MESSAGE_TYPE_ACK,
    MESSAGE_TYPE_COMMAND,
    MESSAGE_TYPE_NACK,
    MESSAGE_TYPE_RESULT,
    Ack,
    Capability,
    Command,
    FinStep,
    Message,
    Meta,
    Register,
    Result,
    Security,
    Unregister,
    decode,
    encode,
    new_ack,
    new_command,
    new_nack,
)
from soarca.variables import Variable, new_variables


def test_fin_command_creation():
    command = new_command()
    assert command.type == MESSAGE_TYPE_COMMAND
    assert command.command.context.timeout == 1
    assert command.command.context.generated_on is None

    assert command.message_id == ""
    assert command.meta.sender_id == ""
    assert command.meta.timestamp is None
    assert command.command.context.completed_on is None
    assert command.command.context.delay == 0
    assert command.command.context.step_id == ""
    assert command.command.context.execution_id == ""
    assert command.command.context.playbook_id == ""


def test_new_ack_and_nack():
    assert new_ack("0001") == Ack(type=MESSAGE_TYPE_ACK, message_id="0001")
    nack = new_nack("0002")
    assert nack.type == MESSAGE_TYPE_NACK
    assert nack.message_id == "0002"


def test_encode_ack_wire_bytes():
    assert encode(new_ack("0001")) == b'{"type":"ack","message_id":"0001"}'


def test_decode_ack_as_generic_message():
    message = decode(encode(new_ack("0001")), Message)
    assert message.type == "ack"
    assert message.message_id == "0001"


def test_result_variables_round_trip():
    result = Result(type=MESSAGE_TYPE_RESULT)
    result.result.variables = new_variables(Variable(name="test"))
    decoded = decode(encode(result), Result)
    assert decoded.result.variables == new_variables(Variable(name="test"))
    assert decoded.type == MESSAGE_TYPE_RESULT


def test_command_zero_times_encoded_and_decoded():
    payload = json.loads(encode(new_command()))
    assert payload["command"]["context"]["generated_on"] == "0001-01-01T00:00:00Z"
    assert payload["meta"]["timestamp"] == "0001-01-01T00:00:00Z"
    decoded = decode(encode(new_command()), Command)
    assert decoded == new_command()


def test_meta_timestamp_round_trip():
    stamp = datetime(2014, 11, 12, 11, 45, 26, 371000, tzinfo=timezone.utc)
    command = new_command()
    command.meta = Meta(timestamp=stamp, sender_id="soarca")
    payload = json.loads(encode(command))
    assert payload["meta"]["timestamp"] == "2014-11-12T11:45:26.371Z"
    assert decode(encode(command), Command).meta.timestamp == stamp


def test_capability_omits_empty_step_and_agent():
    payload = json.loads(encode(Capability(id="cap-1", name="ssh", version="1.0")))
    assert payload == {"capability_id": "cap-1", "name": "ssh", "version": "1.0"}


def test_register_round_trip():
    capability = Capability(
        id="cap-1",
        name="ssh",
        version="1.0",
        step={"s1": FinStep(type="action", name="step", command="ls", target="t")},
        agent={"a1": AgentTarget(type="soarca", name="soarca-ssh")},
    )
    register = Register(
        type="register",
        message_id="m1",
        fin_id="fin--1",
        name="Fin",
        protocol_version="1.0",
        security=Security(version="1", channel_security="plaintext"),
        capabilities=[capability],
    )
    payload = json.loads(encode(register))
    assert payload["fin_name"] == "Fin"
    assert decode(encode(register), Register) == register


def test_unregister_json_keys():
    payload = json.loads(encode(Unregister(type="unregister", id="cap", fin_id="f", all="true")))
    assert payload["capability_id"] == "cap"
    assert payload["all"] == "true"


def test_decode_ignores_unknown_and_missing_fields():
    ack = decode(b'{"type":"ack","extra":1}', Ack)
    assert ack == Ack(type="ack", message_id="")


def test_decode_invalid_json():
    with pytest.raises(ValueError):
        decode(b"{not json", Ack)


def test_decode_wrong_field_type():
    with pytest.raises(ValueError):
        decode(b'{"type":"command","command":{"context":{"timeout":"one"}}}', Command)


def test_encode_rejects_non_message():
    with pytest.raises(TypeError):
        encode({"type": "ack"})