"""
'completion/prompts.py': System context and prompt construction for course recommendations.
"""
import logging
from typing import List, Optional

from ..entities import Message

PENDING_MESSAGE_TEXT = "Thank you for your message. Please wait for the AI Engine to generate a response."
FAILED_MESSAGE_TEXT = "Sorry, the AI Engine could not generate a response. Please submit your answers again."

RECOMMENDATION_CONTEXT = """As a training consultant, you recommend a training plan based on a customer's answers to a scoping questionnaire.

Plan catalogue:

    Foundational Track: Instructor-led fundamentals course for teams new to the technology, with hands-on labs and a practice assessment.
    Associate Track: Fundamentals plus an associate-level course and one certification exam voucher.
    Professional Track: Associate and professional-level courses, architecture workshop and two exam vouchers.
    Specialty Track: Deep-dive courses on a single domain such as security, data or machine learning, with an exam voucher.
    Corporate Enablement: Private delivery of any track for a whole team, with a skills assessment before and after training.

Match the customer's experience level, goals, team size and timeline to the most suitable plan.
Recommend concrete courses in a logical order and briefly justify each recommendation.
Do not ask for any additional feedback or elaboration from the customer."""


def build_prompt(messages: List[Message], logger: Optional[logging.Logger] = None) -> str:
    """
    Concatenate question/answer pairs in order.

    Messages lacking either a question text or an answer text are skipped.
    """
    logger = logger or logging.getLogger("scoping.completion")
    blocks = []
    for message in messages:
        question_text = message.question_text()
        answer_text = message.answer_text()
        if question_text and answer_text:
            blocks.append(f"Question: {question_text}\nAnswer: {answer_text}\n\n")
        else:
            logger.error(f"[build_prompt] Message with ID {message.id} lacks either a question or an answer or both.")
    return "".join(blocks)
