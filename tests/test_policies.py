"""
Row-level policies, exercised straight through the crud layer.
"""
from datetime import date

import pytest

from conftest import ALICE, BOB
from edu_counselor.chat_service import crud as chat_crud
from edu_counselor.models import College, Scholarship
from edu_counselor.profile_service import crud as profile_crud
from edu_counselor.quest_service import crud as quest_crud
from edu_counselor.saved_item_service import crud as saved_crud
from edu_counselor.scholarship_service.crud import get_scholarship, list_scholarships
from edu_counselor.shared.errors import AuthorizationDenied, NotFound
from edu_counselor.shared.policies import check_write, policy_for, visible
from edu_counselor.shared.triggers import handle_new_user


def _scholarship(title, is_active=True, deadline=date(2030, 1, 1), category="merit"):
    return Scholarship(
        title=title,
        description=f"{title} description",
        amount=10000,
        eligibility_criteria="anyone",
        deadline=deadline,
        category=category,
        is_active=is_active,
    )


class TestOwnerOnly:
    def test_profile_is_invisible_to_other_principal(self, db):
        handle_new_user(db, ALICE, {"full_name": "Alice"})

        assert profile_crud.get_profile(db, ALICE, ALICE).full_name == "Alice"
        with pytest.raises(NotFound):
            profile_crud.get_profile(db, BOB, ALICE)
        with pytest.raises(NotFound):
            profile_crud.update_profile(db, BOB, ALICE, {"full_name": "Mallory"})

        db.expire_all()
        assert profile_crud.get_profile(db, ALICE, ALICE).full_name == "Alice"

    def test_conversation_and_messages_are_owner_only(self, db):
        conv = chat_crud.create_conversation(db, ALICE, {"title": "Colleges"})
        chat_crud.add_message(db, ALICE, conv.id, "Which IIT is best?", True)

        assert chat_crud.list_conversations(db, BOB) == []
        assert chat_crud.list_messages(db, BOB, conv.id) == []
        with pytest.raises(NotFound):
            chat_crud.get_conversation(db, BOB, conv.id)
        with pytest.raises(NotFound):
            chat_crud.update_conversation(db, BOB, conv.id, {"title": "hijacked"})
        with pytest.raises(NotFound):
            chat_crud.delete_conversation(db, BOB, conv.id)

        assert [m.content for m in chat_crud.list_messages(db, ALICE, conv.id)] == ["Which IIT is best?"]

    def test_progress_is_owner_only(self, db):
        quest_crud.create_progress(db, ALICE, {"quest_type": "profile", "points": 50})

        assert quest_crud.list_progress(db, BOB) == []
        with pytest.raises(NotFound):
            quest_crud.get_progress(db, BOB, "profile")
        with pytest.raises(NotFound):
            quest_crud.update_progress(db, BOB, "profile", {"status": "completed"})

    def test_saved_items_are_owner_only(self, db):
        item = saved_crud.save_item(db, ALICE, {"item_type": "college", "item_id": BOB})

        assert saved_crud.list_saved(db, BOB) == []
        with pytest.raises(NotFound):
            saved_crud.delete_saved(db, BOB, item.id)
        assert len(saved_crud.list_saved(db, ALICE)) == 1

    def test_insert_for_someone_else_is_denied(self, db):
        with pytest.raises(AuthorizationDenied):
            chat_crud.create_conversation(db, ALICE, {"user_id": BOB, "title": "spoof"})
        with pytest.raises(AuthorizationDenied):
            quest_crud.create_progress(db, ALICE, {"user_id": BOB, "quest_type": "profile"})
        with pytest.raises(AuthorizationDenied):
            saved_crud.save_item(db, ALICE, {"user_id": BOB, "item_type": "career", "item_id": ALICE})
        with pytest.raises(AuthorizationDenied):
            profile_crud.create_profile(db, ALICE, {"id": BOB})

    def test_update_cannot_hand_row_to_someone_else(self, db):
        conv = chat_crud.create_conversation(db, ALICE, {"title": "mine"})
        with pytest.raises(AuthorizationDenied):
            chat_crud.update_conversation(db, ALICE, conv.id, {"user_id": BOB})

    def test_anonymous_principal_is_denied(self, db):
        with pytest.raises(AuthorizationDenied):
            visible(db, College, None)


class TestChatMessages:
    def test_message_into_foreign_conversation_is_denied(self, db):
        conv = chat_crud.create_conversation(db, ALICE, {})

        with pytest.raises(AuthorizationDenied):
            chat_crud.add_message(db, BOB, conv.id, "hello", True)

        assert chat_crud.list_messages(db, ALICE, conv.id) == []

    def test_message_into_missing_conversation_is_denied(self, db):
        with pytest.raises(AuthorizationDenied):
            chat_crud.add_message(db, ALICE, BOB, "hello", True)

    def test_messages_have_no_update_or_delete_policy(self):
        from edu_counselor.models import ChatMessage

        assert policy_for(ChatMessage, "update") is None
        assert policy_for(ChatMessage, "delete") is None

    def test_deleting_conversation_removes_messages(self, db):
        conv = chat_crud.create_conversation(db, ALICE, {})
        chat_crud.add_message(db, ALICE, conv.id, "hi", True)
        chat_crud.add_message(db, ALICE, conv.id, "hello!", False)

        chat_crud.delete_conversation(db, ALICE, conv.id)

        from edu_counselor.models import ChatMessage

        assert db.query(ChatMessage).count() == 0


class TestReferenceData:
    def test_only_active_scholarships_are_visible(self, db):
        active = _scholarship("Open")
        closed = _scholarship("Withdrawn", is_active=False)
        db.add_all([active, closed])
        db.commit()

        titles = [s.title for s in list_scholarships(db, ALICE)]
        assert titles == ["Open"]
        with pytest.raises(NotFound):
            get_scholarship(db, ALICE, closed.id)

    def test_scholarship_filters(self, db):
        db.add_all([
            _scholarship("Past", deadline=date(2020, 1, 1)),
            _scholarship("Later", deadline=date(2031, 1, 1), category="need-based"),
            _scholarship("Sooner", deadline=date(2030, 6, 1)),
        ])
        db.commit()

        assert [s.title for s in list_scholarships(db, ALICE)] == ["Past", "Sooner", "Later"]
        assert [s.title for s in list_scholarships(db, ALICE, upcoming_only=True, today=date(2025, 1, 1))] == [
            "Sooner",
            "Later",
        ]
        assert [s.title for s in list_scholarships(db, ALICE, category="need-based")] == ["Later"]

    def test_reference_tables_are_read_only(self, db):
        college = College(name="X", type="arts", location="Pune", state="Maharashtra")
        with pytest.raises(AuthorizationDenied):
            check_write(db, college, ALICE, "insert")
        with pytest.raises(AuthorizationDenied):
            visible(db, College, ALICE, "delete")
