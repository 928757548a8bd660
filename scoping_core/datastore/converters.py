"""
'datastore/converters.py': Entity <-> document mapping shared by the datastore backends.

Absent (None) fields are omitted from documents so that they remain absent after a round-trip.
"""
from typing import Dict, Any, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..entities import User, QuestionSet, CourseOutline, Message, Question
from ..exceptions import MissingRequiredFieldsError, DatastoreError

ModelT = TypeVar("ModelT", bound=BaseModel)


def question_to_map(question: Question) -> Dict[str, Any]:
    question_map: Dict[str, Any] = {}
    if question.category is not None:
        question_map["category"] = question.category
    if question.text is not None:
        question_map["text"] = question.text
    if question.options is not None:
        options_map: Dict[str, Any] = {"multi_answer": question.options.multi_answer}
        if question.options.possible_options is not None:
            options_map["possible_options"] = list(question.options.possible_options)
        question_map["options"] = options_map
    return question_map


def user_to_map(user: User) -> Dict[str, Any]:
    if user.name is None or user.email_address is None:
        raise MissingRequiredFieldsError("name and email_address are required")

    user_map = {
        "id": user.id,
        "name": user.name,
        "email_address": user.email_address,
        "corporate": user.corporate,
    }
    if user.company is not None:
        user_map["company"] = user.company
    return user_map


def question_set_to_map(question_set: QuestionSet) -> Dict[str, Any]:
    # The identifier is the document key, not a field
    question_set_map: Dict[str, Any] = {}
    if question_set.technology_name is not None:
        question_set_map["technology_name"] = question_set.technology_name
    if question_set.questions is not None:
        question_set_map["questions"] = [question_to_map(q) for q in question_set.questions]
    return question_set_map


def outline_to_map(outline: CourseOutline) -> Dict[str, Any]:
    fields = ("technology_name", "course_code", "course_name", "outline")
    return {name: getattr(outline, name) for name in fields if getattr(outline, name) is not None}


def _has_content(message: Message) -> bool:
    if message.message_text is not None:
        return True
    answer = message.answer
    if answer is None or answer.question is None:
        return False
    question = answer.question
    return question.category is not None or question.text is not None or answer.technology_name is not None


def message_to_map(message: Message) -> Dict[str, Any]:
    if message.user_id is None or not _has_content(message):
        raise MissingRequiredFieldsError("user_id and either message_text or an answered question are required")

    message_map: Dict[str, Any] = {
        "id": message.id,
        "user_id": message.user_id,
    }
    if message.message_text is not None:
        message_map["message_text"] = message.message_text

    if message.answer is not None:
        answer_map: Dict[str, Any] = {}
        if message.answer.technology_name is not None:
            answer_map["technology_name"] = message.answer.technology_name
        if message.answer.question is not None:
            answer_map["question"] = question_to_map(message.answer.question)
        if message.answer.answer is not None:
            answer_map["answer"] = message.answer.answer
        message_map["answer"] = answer_map

    if message.status is not None:
        message_map["status"] = message.status.value

    return message_map


def document_to_model(data: Optional[Dict[str, Any]], model: Type[ModelT], document_id: Optional[str] = None) -> ModelT:
    """
    Validate document data into a Pydantic model, using the document key as `id`.

    Raises:
        DatastoreError: If the data is empty or fails validation.
    """
    if not data:
        raise DatastoreError("Missing document data")

    try:
        parsed = model.model_validate(data)
    except ValidationError as e:
        raise DatastoreError("Invalid model format", cause=e)

    if document_id is not None and hasattr(parsed, "id"):
        parsed.id = document_id
    return parsed
