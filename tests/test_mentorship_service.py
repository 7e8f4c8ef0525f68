import pytest
from sqlalchemy import update

from alumniconnect.exceptions import (
    ConflictError,
    DuplicateRequestError,
    InvalidStatusTransitionError,
    NotFoundError,
    ValidationError,
)
from alumniconnect.models import Conversation, MentorshipRequest, MentorshipStatus, UserRole
from alumniconnect.services import MentorshipService


@pytest.fixture
def service(db):
    return MentorshipService(db)


def count_conversations(db):
    return db.query(Conversation).count()


def test_submit_creates_pending_request(service, student, mentor):
    request = service.submit_request(student.id, mentor.id, "career advice")

    assert request.id is not None
    assert request.status == MentorshipStatus.PENDING.value
    assert request.message == "career advice"
    assert request.student_id == student.id
    assert request.mentor_id == mentor.id
    assert request.created_at is not None
    assert request.updated_at is not None


def test_blank_message_is_stored_as_none(service, student, mentor):
    request = service.submit_request(student.id, mentor.id, "   ")
    assert request.message is None


def test_submit_with_unknown_users_is_not_found(service, student, mentor):
    with pytest.raises(NotFoundError):
        service.submit_request(student.id, 9999, "hi")
    with pytest.raises(NotFoundError):
        service.submit_request(9999, mentor.id, "hi")


def test_submit_with_wrong_roles_is_not_found(service, make_user, student, mentor):
    other_student = make_user(UserRole.STUDENT)
    other_mentor = make_user(UserRole.ALUMNI)
    with pytest.raises(NotFoundError, match="Mentor not found"):
        service.submit_request(student.id, other_student.id)
    with pytest.raises(NotFoundError, match="Student not found"):
        service.submit_request(other_mentor.id, mentor.id)


def test_submit_to_self_is_rejected(service, student):
    with pytest.raises(ValidationError):
        service.submit_request(student.id, student.id)


def test_second_pending_request_for_pair_conflicts(service, student, mentor):
    service.submit_request(student.id, mentor.id, "first")

    with pytest.raises(DuplicateRequestError) as excinfo:
        service.submit_request(student.id, mentor.id, "second")

    assert isinstance(excinfo.value, ConflictError)
    assert "already pending" in str(excinfo.value)


def test_pending_request_to_another_mentor_is_allowed(service, make_user, student, mentor):
    other_mentor = make_user(UserRole.ALUMNI)
    service.submit_request(student.id, mentor.id)
    request = service.submit_request(student.id, other_mentor.id)
    assert request.status == MentorshipStatus.PENDING.value


@pytest.mark.parametrize("decision", ["accepted", "declined"])
def test_new_request_allowed_once_previous_is_terminal(service, student, mentor, decision):
    first = service.submit_request(student.id, mentor.id)
    service.transition_request(first.id, decision)

    second = service.submit_request(student.id, mentor.id)

    assert second.id != first.id
    assert second.status == MentorshipStatus.PENDING.value


def test_pending_index_rejects_duplicates_that_skip_the_check(db, service, student, mentor, monkeypatch):
    service.submit_request(student.id, mentor.id)
    monkeypatch.setattr(service.validator, "check_no_pending_request", lambda *args: None)

    with pytest.raises(DuplicateRequestError):
        service.submit_request(student.id, mentor.id)

    assert db.query(MentorshipRequest).count() == 1


def test_accept_provisions_one_conversation(db, service, student, mentor):
    request = service.submit_request(student.id, mentor.id)

    accepted = service.transition_request(request.id, "accepted")

    assert accepted.status == MentorshipStatus.ACCEPTED.value
    conversations = db.query(Conversation).all()
    assert len(conversations) == 1
    assert {p.user_id for p in conversations[0].participants} == {student.id, mentor.id}
    assert conversations[0].mentorship_request_id == request.id


def test_decline_never_creates_conversation(db, service, student, mentor):
    request = service.submit_request(student.id, mentor.id)

    declined = service.transition_request(request.id, "declined")

    assert declined.status == MentorshipStatus.DECLINED.value
    assert count_conversations(db) == 0


@pytest.mark.parametrize("status", ["pending", "ACCEPTED", "rejected", ""])
def test_transition_to_unsupported_status_is_validation_error(service, student, mentor, status):
    request = service.submit_request(student.id, mentor.id)

    with pytest.raises(ValidationError):
        service.transition_request(request.id, status)


def test_transition_unknown_request_is_not_found(service):
    with pytest.raises(NotFoundError):
        service.transition_request(424242, "accepted")


@pytest.mark.parametrize("first,second", [
    ("accepted", "declined"),
    ("declined", "accepted"),
    ("accepted", "accepted"),
    ("declined", "declined"),
])
def test_terminal_requests_never_move_again(db, service, student, mentor, first, second):
    request = service.submit_request(student.id, mentor.id)
    service.transition_request(request.id, first)

    with pytest.raises(InvalidStatusTransitionError) as excinfo:
        service.transition_request(request.id, second)

    assert excinfo.value.current_status == first
    assert first in str(excinfo.value)
    db.expire_all()
    assert db.get(MentorshipRequest, request.id).status == first
    assert count_conversations(db) == (1 if first == "accepted" else 0)


def test_repeated_acceptance_keeps_a_single_conversation(db, service, student, mentor):
    request = service.submit_request(student.id, mentor.id)
    service.transition_request(request.id, "accepted")

    with pytest.raises(ConflictError):
        service.transition_request(request.id, "accepted")

    assert count_conversations(db) == 1


def test_transition_losing_a_race_reports_stored_status(db, service, student, mentor, monkeypatch):
    request = service.submit_request(student.id, mentor.id)
    # Another caller declines between our read and our write
    db.execute(
        update(MentorshipRequest)
        .where(MentorshipRequest.id == request.id)
        .values(status=MentorshipStatus.DECLINED.value)
    )
    db.commit()
    monkeypatch.setattr(service.validator, "validate_request_status", lambda *args: None)

    with pytest.raises(InvalidStatusTransitionError) as excinfo:
        service.transition_request(request.id, "accepted")

    assert excinfo.value.current_status == "declined"
    assert count_conversations(db) == 0


def test_acceptance_reuses_existing_conversation_for_pair(db, service, student, mentor):
    first = service.submit_request(student.id, mentor.id)
    service.transition_request(first.id, "accepted")
    second = service.submit_request(student.id, mentor.id)
    service.transition_request(second.id, "accepted")

    conversations = db.query(Conversation).all()
    assert len(conversations) == 1
    assert conversations[0].mentorship_request_id == first.id


def test_list_for_student_is_newest_first(service, make_user, student):
    mentors = [make_user(UserRole.ALUMNI) for _ in range(3)]
    created = [service.submit_request(student.id, m.id) for m in mentors]

    listed = service.list_for_user(student.id, "student")

    assert [r.id for r in listed] == [r.id for r in reversed(created)]


def test_list_for_mentor_only_returns_received_requests(service, make_user, student, mentor):
    other_student = make_user(UserRole.STUDENT)
    other_mentor = make_user(UserRole.ALUMNI)
    mine_1 = service.submit_request(student.id, mentor.id)
    service.submit_request(student.id, other_mentor.id)
    mine_2 = service.submit_request(other_student.id, mentor.id)

    listed = service.list_for_user(mentor.id, "alumni")

    assert [r.id for r in listed] == [mine_2.id, mine_1.id]


def test_list_for_user_without_requests_is_empty(service, student):
    assert service.list_for_user(student.id, "student") == []


def test_list_with_unsupported_role_is_validation_error(service, student):
    with pytest.raises(ValidationError):
        service.list_for_user(student.id, "admin")
