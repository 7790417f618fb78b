"""Template rendering utilities."""

import logging
from typing import Any
from jinja2 import Environment, BaseLoader, StrictUndefined, TemplateError


logger = logging.getLogger(__name__)


class StringTemplateLoader(BaseLoader):
    """Template loader for string templates."""
    
    def __init__(self, template_string: str):
        self.template_string = template_string
        
    def get_source(self, environment, template):
        return self.template_string, None, lambda: True


def render_template(template_str: str, **context: Any) -> str:
    """Render a Jinja2 template string with given context.

    Values are passed as context only, so text such as ``{{.Name}}`` inside a
    value is emitted literally and never evaluated.
    """
    try:
        env = Environment(
            loader=StringTemplateLoader(template_str),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        template = env.get_template("")
        return template.render(**context)
        
    except TemplateError as e:
        logger.error(f"Template rendering error: {e}")
        raise
