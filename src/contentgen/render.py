from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

from jinja2 import ChainableUndefined, Environment, FileSystemLoader

from contentgen.errors import TemplateNotFound


def get_template_env(search_dir: str | Path | None = None) -> Environment:
    """
    Jinja environment for rendering resolved contexts.
    Safe defaults, no StrictUndefined explosions.
    """
    loader = FileSystemLoader(str(search_dir)) if search_dir is not None else None
    return Environment(
        loader=loader,
        undefined=ChainableUndefined,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def render_string(text: str, context: Dict[str, Any]) -> str:
    return get_template_env().from_string(text).render(**context)


def render_file(template_path: str | Path, context: Dict[str, Any]) -> str:
    template_path = Path(template_path)
    if not template_path.is_file():
        raise TemplateNotFound(template_path)

    # the template's own directory is searched for {% include %} targets
    env = get_template_env(template_path.parent)
    return env.get_template(template_path.name).render(**context)
