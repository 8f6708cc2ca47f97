from datetime import datetime, timezone

import pytest

from soarca.cacao import (
    AgentTarget,
    AuthenticationInformation,
    Command,
    DataMarking,
    ExtensionDefinition,
    NetAddressType,
    Playbook,
    Step,
    new_agent_targets,
    new_authentication_info_definitions,
    new_data_markings,
    new_extension_definitions,
    new_playbook,
)
from soarca.variables import Variable


def _sample_playbook():
    return {
        "id": "playbook--77c4c428-6304-4950-93ff-83c5fd4cb67a",
        "type": "playbook",
        "spec_version": "cacao-2.0",
        "name": "Investigation playbook",
        "description": "This is an example investigation playbook",
        "created_by": "identity--96abab60-238a-44ff-8962-5806aa60cbce",
        "created": "2024-01-01T09:00:00.000Z",
        "modified": "2024-01-01T09:00:00.000Z",
        "priority": 100,
        "labels": ["label1"],
        "workflow_start": "start--1",
        "playbook_variables": {
            "__var__": {"type": "string", "value": "testing", "external": True}
        },
        "workflow": {
            "start--1": {"type": "start", "on_completion": "action--test"},
            "action--test": {
                "type": "action",
                "name": "ssh-tests",
                "commands": [{"type": "ssh", "command": "ssh ls -la"}],
                "on_completion": "end--test",
                "agent": "agent1",
                "targets": ["target1"],
                "step_variables": {"__x__": {"type": "string", "value": "1"}},
                "cases": {"a": "end--test"},
            },
            "end--test": {"type": "end", "name": "end step"},
        },
        "agent_definitions": {"agent1": {"type": "soarca", "name": "soarca-ssh"}},
        "target_definitions": {
            "target1": {
                "type": "linux",
                "name": "sometarget",
                "authentication_info": "auth1",
                "contact": {"email": {"work": "admin@example.com"}},
                "address": {"ipv4": ["192.0.2.10"]},
            }
        },
        "authentication_info_definitions": {
            "auth1": {"type": "user-auth", "username": "user", "password": "password"}
        },
    }


def test_new_agent_targets_keys_by_id():
    first = AgentTarget(id="agent1", type="soarca", name="a")
    second = AgentTarget(id="agent2", type="soarca", name="b")
    result = new_agent_targets(first, second)
    assert result == {"agent1": first, "agent2": second}


def test_new_agent_targets_later_duplicate_wins():
    first = AgentTarget(id="agent1", name="a")
    second = AgentTarget(id="agent1", name="b")
    assert new_agent_targets(first, second)["agent1"].name == "b"


def test_other_initializers_key_by_id():
    auth = AuthenticationInformation(id="auth1", type="user-auth")
    ext = ExtensionDefinition(id="ext1", type="extension-definition")
    marking = DataMarking(id="marking1", type="marking-tlp")
    assert new_authentication_info_definitions(auth) == {"auth1": auth}
    assert new_extension_definitions(ext) == {"ext1": ext}
    assert new_data_markings(marking) == {"marking1": marking}
    assert new_agent_targets() == {}


def test_new_playbook_has_empty_maps():
    playbook = new_playbook()
    assert playbook.agent_definitions == {}
    assert playbook.target_definitions == {}
    assert playbook.playbook_variables == {}
    assert playbook.authentication_info_definitions == {}
    assert playbook.extension_definitions == {}
    assert playbook.data_marking_definitions == {}
    assert playbook.workflow == {}


def test_new_playbook_maps_are_not_shared():
    first = new_playbook()
    second = new_playbook()
    first.agent_definitions["a"] = AgentTarget(id="a")
    assert second.agent_definitions == {}


def test_playbook_from_dict_reads_fields():
    playbook = Playbook.from_dict(_sample_playbook())
    assert playbook.id == "playbook--77c4c428-6304-4950-93ff-83c5fd4cb67a"
    assert playbook.spec_version == "cacao-2.0"
    assert playbook.priority == 100
    assert playbook.created == datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
    step = playbook.workflow["action--test"]
    assert step.on_completion == "end--test"
    assert step.commands == [Command(type="ssh", command="ssh ls -la")]
    assert step.step_variables["__x__"].value == "1"
    assert step.cases == {"a": "end--test"}
    assert playbook.target_definitions["target1"].auth_info_identifier == "auth1"
    assert playbook.playbook_variables["__var__"].external is True


def test_playbook_from_dict_does_not_set_ids_from_keys():
    playbook = Playbook.from_dict(_sample_playbook())
    assert playbook.workflow["action--test"].id == ""
    assert playbook.agent_definitions["agent1"].id == ""


def test_playbook_round_trip():
    playbook = Playbook.from_dict(_sample_playbook())
    again = Playbook.from_dict(playbook.to_dict())
    assert again == playbook


def test_playbook_to_dict_trims_fraction():
    playbook = Playbook.from_dict(_sample_playbook())
    assert playbook.to_dict()["created"] == "2024-01-01T09:00:00Z"


def test_playbook_zero_times_written_as_zero_value():
    data = Playbook(id="p", type="playbook").to_dict()
    assert data["valid_from"] == "0001-01-01T00:00:00Z"
    assert data["valid_until"] == "0001-01-01T00:00:00Z"
    assert data["workflow"] == {}
    assert "description" not in data
    assert "agent_definitions" not in data


def test_zero_time_parses_to_none():
    playbook = Playbook.from_dict({"valid_from": "0001-01-01T00:00:00Z"})
    assert playbook.valid_from is None


def test_time_offset_preserved():
    text = "2024-01-01T10:00:00+01:00"
    playbook = Playbook.from_dict({"modified": text})
    assert playbook.to_dict()["modified"] == text
    assert playbook.modified == datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


def test_invalid_time_raises():
    with pytest.raises(ValueError):
        Playbook.from_dict({"created": "yesterday"})


def test_wrong_field_type_raises():
    with pytest.raises(TypeError):
        Playbook.from_dict({"name": 5})
    with pytest.raises(TypeError):
        Step.from_dict({"type": "action", "delay": "soon"})
    with pytest.raises(TypeError):
        Step.from_dict({"type": "action", "targets": "target1"})


def test_non_object_raises():
    with pytest.raises(TypeError):
        Playbook.from_dict(["not", "an", "object"])
    with pytest.raises(TypeError):
        Playbook.from_dict({"workflow": {"s": "not a step"}})


def test_step_to_dict_omits_empty_fields():
    assert Step(type="end").to_dict() == {"type": "end"}


def test_step_round_trip_with_variables():
    step = Step(
        type="action",
        id="action--test",
        delay=5,
        commands=[Command(type="ssh", command="ssh ls -la")],
        next_steps=["end--test"],
    )
    step.step_variables.insert(Variable(type="string", name="__x__", value="1"))
    assert Step.from_dict(step.to_dict()) == step


def test_command_to_dict_keeps_required_fields():
    assert Command(type="manual").to_dict() == {"type": "manual", "command": ""}


def test_command_round_trip_with_headers():
    command = Command(
        type="http-api",
        command="GET /api HTTP/1.1",
        headers={"Authorization": ["Bearer token"]},
        content_b64="aGVsbG8=",
    )
    assert Command.from_dict(command.to_dict()) == command


def test_authentication_info_always_writes_kms():
    data = AuthenticationInformation(type="user-auth").to_dict()
    assert data == {"type": "user-auth", "kms": False}


def test_authentication_info_round_trip():
    password = "password"
    auth = AuthenticationInformation(
        id="auth1", type="user-auth", username="user", password=password
    )
    assert AuthenticationInformation.from_dict(auth.to_dict()) == auth


def test_agent_target_address_enum_keys_serialise_as_values():
    target = AgentTarget(
        type="linux", name="t", address={NetAddressType.IPV4: ["192.0.2.1"]}
    )
    assert target.to_dict()["address"] == {"ipv4": ["192.0.2.1"]}


def test_agent_target_always_writes_location_and_contact():
    data = AgentTarget(type="soarca", name="soarca-ssh").to_dict()
    assert data["location"] == {}
    assert data["contact"] == {}
    assert "id" not in data


def test_agent_target_round_trip():
    target = AgentTarget.from_dict(_sample_playbook()["target_definitions"]["target1"])
    assert target.contact.email == {"work": "admin@example.com"}
    assert AgentTarget.from_dict(target.to_dict()) == target


def test_data_marking_and_extension_round_trip():
    data = {
        "type": "playbook",
        "created": "2024-01-01T09:00:00Z",
        "data_marking_definitions": {
            "marking-tlp--1": {
                "type": "marking-tlp",
                "id": "marking-tlp--1",
                "created_by": "identity--1",
                "created": "2024-01-01T09:00:00Z",
                "tlpv2_level": "TLP:GREEN",
            }
        },
        "extension_definitions": {
            "extension-definition--1": {
                "type": "extension-definition",
                "name": "ext",
                "created_by": "identity--1",
                "schema": "schema",
                "version": "1.0",
            }
        },
        "playbook_extensions": {"extension-definition--1": {"key": "value"}},
    }
    playbook = Playbook.from_dict(data)
    marking = playbook.data_marking_definitions["marking-tlp--1"]
    assert marking.tlpv2_level == "TLP:GREEN"
    assert playbook.playbook_extensions == {"extension-definition--1": {"key": "value"}}
    assert Playbook.from_dict(playbook.to_dict()) == playbook