"""
Jinja2 template loader for wizard replies and oracle prompts.

Loads .jinja2 templates from the templates directory (shipped as package
data) and renders them with provided context variables.
"""

from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .templates import Template

TEMPLATES_DIR = Path(__file__).parent / "templates"


def _validate_templates():
    """Validate all template constants have corresponding files. Fails fast at import."""
    for name in dir(Template):
        if not name.startswith("_"):
            template_name = getattr(Template, name)
            path = TEMPLATES_DIR / f"{template_name}.jinja2"
            if not path.exists():
                raise FileNotFoundError(f"Template missing: {path}")


_validate_templates()


@lru_cache(maxsize=1)
def _get_environment() -> Environment:
    """Create and cache the Jinja2 environment. Output is markdown, so no escaping."""
    return Environment(
        loader=FileSystemLoader(TEMPLATES_DIR),
        autoescape=select_autoescape(default=False),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def render(template_name: str, **context) -> str:
    """
    Load and render a Jinja2 template.

    Args:
        template_name: One of the Template constants
        **context: Variables to pass to the template

    Returns:
        Rendered markdown string
    """
    env = _get_environment()
    template = env.get_template(f"{template_name}.jinja2")
    return template.render(**context)
