"""Domain Types — verifies identity types, enums, and id parsing.

Tests:
    - NewType wrappers exist and are callable
    - Enums have expected members and serialize to string
    - parse_todo_id accepts UUID shapes only
"""

from uuid import uuid4

from todo_api.config import Settings
from todo_api.core.domain_types import (
    CompletionState, EpochMillis, TodoId, TokenAccess, TokenClaims, UserId,
    parse_todo_id,
)


def test_identity_types_wrap_uuid():
    uid = uuid4()
    assert UserId(uid) == uid
    assert TodoId(uid) == uid
    assert EpochMillis(333) == 333


def test_token_access_auth_value():
    assert TokenAccess.AUTH.value == "auth"
    assert TokenAccess.AUTH == "auth"


def test_completion_state_has_two_states():
    assert set(CompletionState) == {
        CompletionState.PENDING, CompletionState.COMPLETED,
    }


def test_token_claims_are_immutable_and_comparable():
    uid = UserId(uuid4())
    assert TokenClaims(uid, "auth") == TokenClaims(uid, "auth")


def test_parse_todo_id_accepts_uuid_string():
    uid = uuid4()
    assert parse_todo_id(str(uid)) == uid
    assert parse_todo_id(uid.hex) == uid


def test_parse_todo_id_rejects_malformed():
    assert parse_todo_id("13") is None
    assert parse_todo_id("not-a-valid-id") is None
    assert parse_todo_id("") is None


def test_settings_default_token_access_is_auth():
    assert Settings().token_access == TokenAccess.AUTH.value
