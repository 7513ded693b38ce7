"""Tests for the access control rules on task lists and todos."""

import pytest

from src.services.access import AccessControl
from src.services.errors import AuthenticationError, AuthorizationError, NotFoundError
from src.services.identity import ANONYMOUS, Authenticated


@pytest.fixture
def access(repository):
    return AccessControl(repository)


@pytest.fixture
def ann(repository):
    return repository.create_user(email="ann@example.com", password_hash="x", name="Ann")


@pytest.fixture
def bob(repository):
    return repository.create_user(email="bob@example.com", password_hash="x", name="Bob")


@pytest.fixture
def as_ann(ann):
    return Authenticated(user=ann)


@pytest.fixture
def as_bob(bob):
    return Authenticated(user=bob)


@pytest.fixture
def groceries(access, as_ann):
    return access.create_task_list(as_ann, "Groceries")


class TestAnonymous:
    """Anonymous callers can't do anything here."""

    def test_require_user(self, access):
        with pytest.raises(AuthenticationError):
            access.require_user(ANONYMOUS)

    def test_all_operations(self, access, groceries):
        operations = [
            lambda: access.my_task_lists(ANONYMOUS),
            lambda: access.create_task_list(ANONYMOUS, "X"),
            lambda: access.get_task_list(ANONYMOUS, groceries.id),
            lambda: access.update_task_list(ANONYMOUS, groceries.id, "X"),
            lambda: access.delete_task_list(ANONYMOUS, groceries.id),
            lambda: access.add_user_to_task_list(ANONYMOUS, groceries.id, 1),
            lambda: access.create_todo(ANONYMOUS, groceries.id, "X"),
            lambda: access.list_todos(ANONYMOUS, groceries.id),
        ]
        for operation in operations:
            with pytest.raises(AuthenticationError):
                operation()

    def test_unknown_list_still_needs_authentication(self, access):
        with pytest.raises(AuthenticationError):
            access.get_task_list(ANONYMOUS, 9999)


class TestCollaboratorRules:
    """Membership gates every list-scoped operation."""

    def test_creator_is_sole_collaborator(self, access, repository, groceries, ann):
        assert repository.collaborator_ids(groceries.id) == [ann.id]

    def test_non_collaborator_denied(self, access, groceries, as_ann, as_bob, bob):
        todo = access.create_todo(as_ann, groceries.id, "A")
        operations = [
            lambda: access.get_task_list(as_bob, groceries.id),
            lambda: access.update_task_list(as_bob, groceries.id, "X"),
            lambda: access.delete_task_list(as_bob, groceries.id),
            lambda: access.add_user_to_task_list(as_bob, groceries.id, bob.id),
            lambda: access.create_todo(as_bob, groceries.id, "X"),
            lambda: access.list_todos(as_bob, groceries.id),
            lambda: access.update_todo(as_bob, todo.id, is_completed=True),
            lambda: access.delete_todo(as_bob, todo.id),
        ]
        for operation in operations:
            with pytest.raises(AuthorizationError):
                operation()

    def test_unknown_list_is_not_found(self, access, as_ann):
        with pytest.raises(NotFoundError):
            access.update_task_list(as_ann, 9999, "X")

    def test_unknown_todo_is_not_found(self, access, as_ann):
        with pytest.raises(NotFoundError):
            access.update_todo(as_ann, 9999, is_completed=True)

    def test_invited_user_gets_full_access(self, access, groceries, as_ann, as_bob, bob):
        access.add_user_to_task_list(as_ann, groceries.id, bob.id)

        assert access.get_task_list(as_bob, groceries.id).id == groceries.id
        assert [t.id for t in access.my_task_lists(as_bob)] == [groceries.id]
        todo = access.create_todo(as_bob, groceries.id, "Milk")
        assert access.update_todo(as_bob, todo.id, is_completed=True).is_completed is True
        assert access.update_task_list(as_bob, groceries.id, "Weekly").title == "Weekly"

    def test_add_collaborator_twice_is_noop(self, access, repository, groceries, as_ann, ann, bob):
        access.add_user_to_task_list(as_ann, groceries.id, bob.id)
        result = access.add_user_to_task_list(as_ann, groceries.id, bob.id)

        assert result.id == groceries.id
        assert repository.collaborator_ids(groceries.id) == [ann.id, bob.id]

    def test_add_unknown_user_is_not_found(self, access, repository, groceries, as_ann, ann):
        with pytest.raises(NotFoundError):
            access.add_user_to_task_list(as_ann, groceries.id, 9999)
        assert repository.collaborator_ids(groceries.id) == [ann.id]

    def test_delete_then_fetch_is_not_found(self, access, groceries, as_ann):
        list_id = groceries.id
        assert access.delete_task_list(as_ann, list_id) is True
        with pytest.raises(NotFoundError):
            access.get_task_list(as_ann, list_id)
