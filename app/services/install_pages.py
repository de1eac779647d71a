"""HTML pages shown to the merchant at the end of an install."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from app.schemas.shopify import split_scopes

# Jinja2 template environment
TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates" / "install"
_jinja_env = Environment(loader=FileSystemLoader(str(TEMPLATE_DIR)), autoescape=True)

# Popup windows close themselves after this delay
AUTO_CLOSE_DELAY_MS = 5000


def render_success_page(shop: str, scope: str) -> str:
    """Render the installation confirmation page for ``shop``."""
    template = _jinja_env.get_template("success.html")
    return template.render(
        shop=shop,
        scope=scope,
        scopes=split_scopes(scope),
        auto_close_ms=AUTO_CLOSE_DELAY_MS,
    )


def render_error_page(message: str) -> str:
    """Render the generic failure page showing only ``message``."""
    template = _jinja_env.get_template("error.html")
    return template.render(message=message)
