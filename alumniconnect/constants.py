# alumniconnect/constants.py
class ErrorMessages:
    USER_NOT_FOUND = "User not found"
    STUDENT_NOT_FOUND = "Student not found"
    MENTOR_NOT_FOUND = "Mentor not found"
    REQUEST_NOT_FOUND = "Mentorship request not found"
    CONVERSATION_NOT_FOUND = "Conversation not found"
    DUPLICATE_PENDING_REQUEST = "A mentorship request to this mentor is already pending"
    DUPLICATE_USER = "A user with this username or email already exists"
    INVALID_STATUS = "Invalid status: must be one of {allowed}"
    INVALID_ROLE = "Invalid role: must be one of {allowed}"
    REQUEST_NOT_PENDING = "Mentorship request is already {current} and can no longer change"
    SELF_CONVERSATION = "A conversation needs two distinct participants"
    SELF_REQUEST = "A student cannot request mentorship from themselves"
    NOT_A_PARTICIPANT = "Sender is not a participant of this conversation"
    EMPTY_MESSAGE = "Message content must not be empty"
    DATABASE_UNAVAILABLE = "Database is temporarily unavailable, please retry later"

class BusinessRules:
    MIN_USERNAME_LENGTH = 3
    MAX_USERNAME_LENGTH = 50
    MAX_REQUEST_MESSAGE_LENGTH = 2000
    MAX_MESSAGE_LENGTH = 5000
