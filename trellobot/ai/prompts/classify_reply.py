"""
Classify Reply Prompt Template

Used to label a reply to a job application with exactly one category.
"""

from typing import Iterable, Tuple


def build_classify_reply_prompt(
    subject: str, snippet: str, categories: Iterable[str]
) -> Tuple[str, str]:
    """
    Build the system and user prompts for reply classification.

    Args:
        subject: Email subject line
        snippet: Gmail snippet of the email body
        categories: Allowed category tokens

    Returns:
        tuple: (system_prompt, user_prompt)
    """
    system_prompt = (
        "You are an expert email classifier for a job application tracker. "
        f"Classify the email into ONE of the following categories: {', '.join(categories)}. "
        "Respond ONLY with the single category name."
    )
    email_text = f"Subject: {subject}\nSnippet: {snippet}"
    user_prompt = f"Classify this email:\n---\n{email_text}\n---"
    return system_prompt, user_prompt
