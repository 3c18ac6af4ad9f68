"""
Template renderer for story titles, descriptions and pull request comments.
Templates are Jinja2 strings rendered against a context such as {'payload': <event>, 'story': <story dict>};
dotted lookups resolve dict keys, and missing values (at any depth) render as empty strings.

Mustache tags are accepted as well and translated to Jinja2 before rendering:
{{{name}}} and {{&name}} print the value, {{#name}}...{{/name}} renders its body when name is truthy,
{{^name}}...{{/name}} when it is falsy, and {{! comments }} are dropped. Names inside a section still
resolve against the top-level context.
"""

import re
from typing import Any, Dict, Optional
from jinja2 import ChainableUndefined, Environment, TemplateError

from errors import ConfigurationError

# None (e.g. an empty PR body) renders as an empty string rather than 'None'
_env = Environment(
    autoescape=False,
    keep_trailing_newline=True,
    undefined=ChainableUndefined,
    finalize=lambda value: '' if value is None else value,
)

_MUSTACHE_TAG = re.compile(r"\{\{\{\s*([^{}]+?)\s*\}\}\}|\{\{([#^/&!])\s*([^{}]*?)\s*\}\}")


def _mustache_to_jinja(match) -> str:
    if match.group(1) is not None:
        return '{{ ' + match.group(1) + ' }}'
    sigil, name = match.group(2), match.group(3)
    if sigil == '&':
        return '{{ ' + name + ' }}'
    if sigil == '#':
        return '{% if ' + name + ' %}'
    if sigil == '^':
        return '{% if not ' + name + ' %}'
    if sigil == '/':
        return '{% endif %}'
    return ''


def to_jinja(template: str) -> str:
    """Rewrite Mustache tags in template as their Jinja2 equivalents; plain Jinja2 passes through."""
    return _MUSTACHE_TAG.sub(_mustache_to_jinja, template)


def render(template: Optional[str], context: Dict[str, Any]) -> str:
    """Render template with context. Any template error is reported as a configuration error."""
    if not template:
        return ''
    try:
        return _env.from_string(to_jinja(template)).render(**context)
    except TemplateError as exc:
        raise ConfigurationError(f"invalid template {template!r}: {exc}") from exc


def render_story_fields(title_template: str, description_template: str, payload: Dict[str, Any]) -> Dict[str, str]:
    """Render the story name and description for a pull request event."""
    context = {'payload': payload}
    return {
        'name': render(title_template, context),
        'description': render(description_template, context),
    }


def render_comment(comment_template: str, payload: Dict[str, Any], story: Dict[str, Any]) -> str:
    """Render the pull request comment announcing a newly created story."""
    return render(comment_template, {'payload': payload, 'story': story})


__all__ = ["render", "render_story_fields", "render_comment", "to_jinja"]
