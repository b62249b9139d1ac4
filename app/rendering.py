import logging
from typing import Any
from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError, select_autoescape
from app.errors import TemplateRenderError

logger = logging.getLogger(__name__)

HELLO_WORLD_TEMPLATE = "partials/helloworld.html"
HELLO_WORLD_GREETING_TEMPLATE = "partials/hello_world_greeting.html"
GOODBYE_WORLD_TEMPLATE = "partials/goodbyeworld.html"


class FragmentRenderer:
    """Renders the HTML partials shipped in app/templates."""

    def __init__(self, env: Environment | None = None):
        # StrictUndefined turns a missing variable into a render error instead of an empty string
        self.env = env or Environment(
            loader=PackageLoader("app", "templates"),
            autoescape=select_autoescape(["html"]),
            undefined=StrictUndefined,
        )

    def render(self, template_name: str, context: dict[str, Any] | None = None) -> str:
        try:
            template = self.env.get_template(template_name)
            return template.render(context or {})
        except TemplateError as e:
            logger.error(f"Failed to render {template_name}: {e}")
            raise TemplateRenderError(template_name, str(e)) from e
