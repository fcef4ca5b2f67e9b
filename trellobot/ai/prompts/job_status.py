"""
Job Status Prompt Template

Used with a web-browsing model to decide whether a posting is still live.
"""

from typing import Tuple

JOB_STATUS_SYSTEM_PROMPT = """You are a job status verifier. Your task is to check the provided URL and determine if the job posting is "ACTIVE" or "DELETED".
A job is "DELETED" if the page is a 404, says "job not found", "position filled", "no longer available", or redirects to a generic careers page.
A job is "ACTIVE" if the posting is still visible and seems to be accepting applications.
Respond ONLY with the single word 'ACTIVE' or 'DELETED'."""


def build_job_status_prompt(url: str) -> Tuple[str, str]:
    """
    Build the system and user prompts for a job liveness check.

    Returns:
        tuple: (system_prompt, user_prompt)
    """
    return JOB_STATUS_SYSTEM_PROMPT, f"Please check this URL and report its status: {url}"
