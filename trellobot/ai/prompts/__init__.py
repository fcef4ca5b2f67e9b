"""
Shared AI Prompt Templates

Prompts are shared by every AI provider so the expected answer format
does not depend on the backend.
"""

from .classify_reply import build_classify_reply_prompt
from .job_status import build_job_status_prompt, JOB_STATUS_SYSTEM_PROMPT

__all__ = [
    "build_classify_reply_prompt",
    "build_job_status_prompt",
    "JOB_STATUS_SYSTEM_PROMPT",
]
