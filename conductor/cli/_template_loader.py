"""
Private Jinja2 Template Loader for Conductor CLI

Jinja2 environment used for code generation. Only validated identifiers
are ever rendered into templates.
"""

from pathlib import Path
from jinja2 import Environment, FileSystemLoader, StrictUndefined

TEMPLATES_DIR = Path(__file__).parent / "templates"

jinja_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=True,
    auto_reload=False,
    undefined=StrictUndefined,  # Fail loudly on undefined variables
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)

__all__ = ['jinja_env', 'TEMPLATES_DIR']
