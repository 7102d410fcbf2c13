#!/usr/bin/env python3
"""Rendering of resolution results for the command line.

Results are plain dictionaries so the same data can be printed as text
(Jinja2 templates), JSON or YAML.

Example:
    >>> data = target_to_dict(ExportTarget("./dist/index.js"))
    >>> print(render({".": data}, "text", template=RESOLVE_TEMPLATE))
    .
      default: ./dist/index.js
      ...
"""

import json
from typing import Any, Dict, Iterable, Optional, Union

import jinja2
import yaml

from exportmap.manifest.absolute import AbsoluteExportTarget
from exportmap.manifest.workspace import WorkspacePackage
from exportmap.resolution.target import ExportTarget

OUTPUT_FORMATS = ("text", "json", "yaml")

RESOLVE_TEMPLATE = """\
{% for subpath, result in results.items() %}
{{ subpath }}
{% if result is none %}
  (no match)
{% else %}
{% for field in ["default", "import", "require", "types"] %}
  {{ field }}: {{ result[field] if result[field] is not none else "-" }}
{% endfor %}
{% for conditions, path in result.get("conditions", {}).items() %}
  [{{ conditions }}]: {{ path if path is not none else "-" }}
{% endfor %}
{% endif %}
{% endfor %}
"""

WORKSPACES_TEMPLATE = """\
{% for item in results %}
{{ "%-8s"|format(item.kind) }} {{ item.name }}  {{ item.path }}
{% else %}
(no workspaces)
{% endfor %}
"""

_environment = jinja2.Environment(
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=False,
    undefined=jinja2.StrictUndefined,
)


def target_to_dict(
    target: Union[ExportTarget, AbsoluteExportTarget],
    conditions: Optional[Iterable[Iterable[str]]] = None,
) -> Dict[str, Any]:
    """Flatten a resolved target into a dictionary.

    Args:
        target: Relative or absolute export target
        conditions: Extra condition lists to resolve; each is reported
            under its comma-joined names

    Returns:
        Dictionary with default/import/require/types and, when extra
        condition lists were given, a "conditions" mapping
    """
    data: Dict[str, Any] = dict(target.as_dict())
    if conditions:
        data["conditions"] = {
            ",".join(names): target.resolve(names) for names in (list(c) for c in conditions)
        }
    return data


def workspace_to_dict(package: WorkspacePackage) -> Dict[str, str]:
    return {"name": package.name, "kind": package.kind.name.lower(), "path": package.path}


def render(data: Any, output_format: str = "text", template: str = RESOLVE_TEMPLATE) -> str:
    """Render report data.

    Args:
        data: Report data (dicts and lists of plain values)
        output_format: One of "text", "json", "yaml"
        template: Jinja2 template used for text output

    Returns:
        Rendered report

    Raises:
        ValueError: If the format is unknown
    """
    if output_format == "json":
        return json.dumps(data, indent=2)
    if output_format == "yaml":
        return yaml.safe_dump(data, sort_keys=False, default_flow_style=False).rstrip("\n")
    if output_format == "text":
        return _environment.from_string(template).render(results=data).rstrip("\n")

    raise ValueError(f"Unknown output format: {output_format}. Must be one of {OUTPUT_FORMATS}")
