from typing import List

from aivsai.providers.base import ChatMessage

ANSWERER_SYSTEM_PROMPT = "You are a helpful AI assistant."

REVIEWER_SYSTEM_PROMPT = (
    "You are an expert technical reviewer. Your goal is to verify the accuracy and "
    "quality of answers provided by other AI models. You must output your review in {language}."
)

REVIEW_PROMPT = (
    'The user asked: "{question}"\n\n'
    'Another AI assistant provided the following answer:\n"{answer}"\n\n'
    "Please review this answer. Point out any errors, hallucinations, or missing information. "
    "If the code is provided, check for bugs. If the answer is perfect, verify it.\n\n"
    "IMPORTANT: Please provide your review entirely in {language}."
)


def answer_messages(question: str) -> List[ChatMessage]:
    return [ChatMessage.system(ANSWERER_SYSTEM_PROMPT), ChatMessage.user(question)]


def review_messages(question: str, answer: str, language: str) -> List[ChatMessage]:
    """Context for the reviewer: the question and the full answer, verbatim."""
    return [
        ChatMessage.system(REVIEWER_SYSTEM_PROMPT.format(language=language)),
        ChatMessage.user(REVIEW_PROMPT.format(question=question, answer=answer, language=language)),
    ]
