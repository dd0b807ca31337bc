"""
Prompt and reply templates.

Every user-facing reply and the code-generation request are Jinja2
templates under templates/, rendered through render().
"""

from dfu_assistant.prompts.loader import render
from dfu_assistant.prompts.templates import Template

__all__ = [
    "Template",
    "render",
]
