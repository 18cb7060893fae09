"""Swapping providers does not change which branch an action takes.

Each scenario runs the action twice: once against a recording stub configured
to answer as storage in that state would, once against a real provider put
into that state. Both runs must produce the same result.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import pytest

from capable.adapters.recording_stub import RecordingStub
from capable.domain.utils import evolve
from capable.service_layer import commands
from capable.service_layer.actions import deactivate_user, promote_user, register_user
from capable.service_layer.results import Failure, Success


@dataclass(frozen=True)
class Scenario:
    """One storage state, described both ways."""

    action: Callable[..., Any]
    command: Callable[[int], commands.Command]
    seed: Callable[[Any], int]
    configure_stub: Callable[[RecordingStub, Any], None]


def _existing(store) -> int:
    return store.create_user("taken@example.com")


def _existing_with_profile(store) -> int:
    user_id = store.create_user("taken@example.com")
    store.save_profile(user_id, "taken")
    return user_id


def _nothing(store) -> int:  # pylint: disable=unused-argument
    return 424242


def _existing_admin(store) -> int:
    user_id = store.create_user("admin@example.com")
    store.save_user(evolve(store.get_user(user_id), admin=True))
    return user_id


def _existing_inactive(store) -> int:
    user_id = store.create_user("gone@example.com")
    store.save_user(evolve(store.get_user(user_id), active=False))
    return user_id


SCENARIOS = {
    "register-fresh": Scenario(
        register_user,
        lambda _: commands.RegisterUser("new@example.com", "newbie"),
        _existing_with_profile,
        lambda stub, _: (stub.create_user.returns(2), stub.save_profile.returns(True)),
    ),
    "register-duplicate-email": Scenario(
        register_user,
        lambda _: commands.RegisterUser("taken@example.com", "other"),
        _existing,
        lambda stub, _: stub.create_user.returns(None),
    ),
    "register-duplicate-nickname": Scenario(
        register_user,
        lambda _: commands.RegisterUser("new@example.com", "taken"),
        _existing_with_profile,
        lambda stub, _: (stub.create_user.returns(2), stub.save_profile.returns(False)),
    ),
    "promote-unknown": Scenario(
        promote_user,
        commands.PromoteUser,
        _nothing,
        lambda stub, _: stub.get_user.returns(None),
    ),
    "promote-member": Scenario(
        promote_user,
        commands.PromoteUser,
        _existing,
        lambda stub, user: (stub.get_user.returns(user), stub.save_user.returns(None)),
    ),
    "promote-admin": Scenario(
        promote_user,
        commands.PromoteUser,
        _existing_admin,
        lambda stub, user: stub.get_user.returns(user),
    ),
    "deactivate-active": Scenario(
        deactivate_user,
        commands.DeactivateUser,
        _existing,
        lambda stub, user: (stub.get_user.returns(user), stub.save_user.returns(None)),
    ),
    "deactivate-inactive": Scenario(
        deactivate_user,
        commands.DeactivateUser,
        _existing_inactive,
        lambda stub, user: stub.get_user.returns(user),
    ),
}


def _branch(result) -> str:
    match result:
        case Success():
            return "success"
        case Failure(reason=reason):
            return f"failure:{reason}"
    raise AssertionError(f"not an action result: {result!r}")


@pytest.mark.parametrize("name", list(SCENARIOS))
def test_stub_and_provider_take_the_same_branch(user_store, name):
    """Same state, same command: same outcome from stub and real provider."""
    scenario = SCENARIOS[name]
    target_id = scenario.seed(user_store)
    cmd = scenario.command(target_id)

    stub = RecordingStub.for_action(scenario.action)
    scenario.configure_stub(stub, user_store.get_user(target_id))

    from_stub = scenario.action(cmd, stub)
    from_provider = scenario.action(cmd, user_store)

    assert _branch(from_provider) == _branch(from_stub)
    if isinstance(from_stub, Success) and not isinstance(from_stub.value, int):
        assert from_provider.value == from_stub.value
        assert user_store.get_user(target_id) == from_stub.value
