USERS_COLLECTION = "users"
MESSAGES_COLLECTION = "messages"
QUESTION_SETS_COLLECTION = "question_sets"
COURSE_OUTLINES_COLLECTION = "course_outlines"

# Natural sort keys used by the paginated listings
USER_ORDER_FIELD = "email_address"
QUESTION_SET_ORDER_FIELD = "technology_name"
COURSE_OUTLINE_ORDER_FIELD = "technology_name"
MESSAGE_ORDER_FIELD = "created_at"
TECHNOLOGY_NAME_FIELD = "technology_name"

ERROR_MESSAGES = {
    "document_not_found": "Document not found.",
    "firestore_unavailable": "Firestore service unavailable.",
    "invalid_format": "Invalid model format",
    "unexpected_error": "Unexpected error",
}
