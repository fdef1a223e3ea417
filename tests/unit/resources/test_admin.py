import pytest

from drogue_client.resources.admin import MemberEntry, Members, Role, Roles, TransferOwnership


def test_role_parse():
    assert Role.parse("admin") is Role.ADMIN
    assert Role.parse("Manager") is Role.MANAGER
    assert Role.parse("publisher") is Role.PUBLISHER
    with pytest.raises(ValueError, match="Invalid role 'ADMIN'"):
        Role.parse("ADMIN")
    with pytest.raises(ValueError, match="Invalid role 'owner'"):
        Role.parse("owner")


def test_role_display_name():
    assert str(Role.ADMIN) == "Administrator"
    assert Role.SUBSCRIBER.display_name == "Subscriber"


def test_role_implies():
    for role in Role:
        assert Role.ADMIN.implies(role)
        assert role.implies(role)
    assert Role.MANAGER.implies(Role.READER)
    assert not Role.MANAGER.implies(Role.ADMIN)
    assert not Role.MANAGER.implies(Role.PUBLISHER)
    assert not Role.READER.implies(Role.MANAGER)
    assert not Role.PUBLISHER.implies(Role.SUBSCRIBER)


def test_roles_contains():
    roles = Roles([Role.MANAGER, Role.PUBLISHER])
    assert roles.contains(Role.READER)
    assert roles.contains(Role.PUBLISHER)
    assert not roles.contains(Role.SUBSCRIBER)
    assert not Roles().contains(Role.READER)
    readers = Roles([Role.READER])
    assert readers.contains(Role.READER)
    assert not readers.contains(Role.MANAGER)
    assert not readers.contains(Role.ADMIN)
    assert len(roles) == 2


def test_members():
    members = Members.model_validate(
        {"resourceVersion": "5", "members": {"foo": {"roles": ["admin"]}, "bar": {"roles": ["reader", "publisher"]}}}
    )
    assert members.resource_version == "5"
    assert members.members["foo"].roles.contains(Role.MANAGER)
    assert list(members.members["bar"].roles) == [Role.READER, Role.PUBLISHER]

    members.members["baz"] = MemberEntry(roles=Roles([Role.SUBSCRIBER]))
    data = members.to_json()
    assert data["resourceVersion"] == "5"
    assert data["members"]["baz"] == {"roles": ["subscriber"]}


def test_transfer_ownership():
    assert TransferOwnership(new_user="bob").to_json() == {"newUser": "bob"}
    assert TransferOwnership.model_validate({"newUser": "bob"}).new_user == "bob"
