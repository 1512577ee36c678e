"""
SimpleNote: Page Renderer
=========================

What:  Loads the single HTML page template with Jinja2 and renders it.
How:   The template is parsed once, at construction. Rendering binds no data;
       the page's own JavaScript talks to /api/notes.
When:  Built by `create_app()`, so a missing or broken template stops the
       process before it serves anything.
"""

import logging
from pathlib import Path

import jinja2

from simplenote.exceptions import StartupError

logger = logging.getLogger(__name__)


class PageRenderer:
    """Holds the parsed index template for the lifetime of the app."""

    def __init__(self, template_dir: str, template_name: str = "index.html"):
        self.template_dir = Path(template_dir)
        self.template_name = template_name
        self.env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(self.template_dir)),
            autoescape=True,
            # Serve the file byte-for-byte, final newline included
            keep_trailing_newline=True,
        )
        try:
            self.template = self.env.get_template(template_name)
        except jinja2.TemplateNotFound as e:
            logger.error("Page template %s not found in %s", template_name, self.template_dir)
            raise StartupError(
                message=f"Page template '{template_name}' is missing",
                context={"template_dir": str(self.template_dir)},
            ) from e
        except jinja2.TemplateSyntaxError as e:
            logger.error("Page template %s failed to parse: %s (line %s)", template_name, e.message, e.lineno)
            raise StartupError(
                message=f"Page template '{template_name}' could not be parsed",
                context={"line": e.lineno, "error": e.message},
            ) from e

        logger.info("Loaded page template %s", self.template_dir / template_name)

    def render(self) -> str:
        return self.template.render()
