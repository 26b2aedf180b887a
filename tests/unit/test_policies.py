from __future__ import annotations

import pytest

from board_service.application.dto.message import MessageDraft
from board_service.application.exceptions import ForbiddenError, UnauthorizedError, ValidationError
from board_service.application.policies.content import normalize_body, normalize_draft, normalize_poll
from board_service.application.policies.permissions import assert_admin, assert_author
from board_service.domain.value_objects.enums import MessageKind
from tests.conftest import make_message


def test_assert_admin_returns_principal(admin_principal):
    assert assert_admin(admin_principal) is admin_principal


@pytest.mark.parametrize("principal_name", ["user_principal", None])
def test_assert_admin_rejects(principal_name, request):
    principal = request.getfixturevalue(principal_name) if principal_name else None
    with pytest.raises(ForbiddenError):
        assert_admin(principal)


def test_assert_author(admin_principal, other_admin):
    msg = make_message(author_id=admin_principal.subject_id)

    assert_author(admin_principal, msg)
    with pytest.raises(UnauthorizedError):
        assert_author(other_admin, msg)


def test_normalize_draft_drops_name_without_attachment():
    draft = normalize_draft(MessageDraft(body=" hi ", attachment_name="stray.txt"))

    assert draft.body == "hi"
    assert draft.attachment_name is None


def test_normalize_draft_poll_kind_needs_body():
    with pytest.raises(ValidationError):
        normalize_draft(MessageDraft(kind=MessageKind.POLL, body=""))


def test_normalize_draft_treats_empty_ref_as_missing():
    with pytest.raises(ValidationError):
        normalize_draft(MessageDraft(kind=MessageKind.IMAGE, attachment_ref=""))


def test_normalize_body():
    assert normalize_body("  text ") == "text"
    with pytest.raises(ValidationError):
        normalize_body(None)


def test_normalize_poll_strips():
    assert normalize_poll(" Q ", [" a", "b "]) == ("Q", ["a", "b"])
    with pytest.raises(ValidationError):
        normalize_poll("Q", None)
