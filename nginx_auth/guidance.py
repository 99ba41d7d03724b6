"""Nginx configuration guidance printed after setup."""

from __future__ import annotations

from typing import TYPE_CHECKING

from jinja2 import Environment, StrictUndefined

from nginx_auth.utils.output import print_block

if TYPE_CHECKING:
    from nginx_auth.config import Config

RULE = "-" * 60

GUIDANCE_TEMPLATE = """\
{{ rule }}
Add the following directives to your Nginx configuration,
inside the server or location block that serves your site
(e.g. in /etc/nginx/sites-available/your_site):

    auth_basic "{{ realm }}";
    auth_basic_user_file {{ htpasswd_file }};

Example:

server {
    listen 80;
    server_name your_domain_or_IP;
    root {{ doc_root }};
    index index.php index.html;

    location / {
        auth_basic "{{ realm }}";
        auth_basic_user_file {{ htpasswd_file }};
        try_files $uri $uri/ /index.php;
    }
}
{{ rule }}

Your Nginx document root is: {{ doc_root }}
Your .htpasswd file is set to: {{ htpasswd_file }}
"""


def _make_env() -> Environment:
    """Create the Jinja2 environment for the guidance text."""
    return Environment(
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


_env = _make_env()


def render_guidance(config: Config) -> str:
    """Render the configuration snippet for *config*."""
    template = _env.from_string(GUIDANCE_TEMPLATE)
    return template.render(
        rule=RULE,
        realm=config.realm,
        doc_root=str(config.doc_root),
        htpasswd_file=str(config.htpasswd_file),
    )


def print_guidance(config: Config) -> None:
    """Print the configuration snippet to stdout."""
    print_block(render_guidance(config))
