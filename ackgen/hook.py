"""Custom hook code injected into generated resource manager code paths.

Supported hook points include the ``pre_build_request``, ``post_build_request``,
``post_request``, ``pre_set_output`` and ``post_set_output`` variants of the
``sdk_read_one``, ``sdk_read_many``, ``sdk_get_attributes``, ``sdk_create``,
``sdk_update`` and ``sdk_delete`` operations, along with ``delta_pre_compare``
and ``delta_post_compare``.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

import jinja2

from .resource import Resource


class HookError(Exception):
    """Raised when a resource's hook configuration cannot be turned into code."""


def _context(variables: Any) -> dict[str, Any]:
    if variables is None:
        return {}
    if isinstance(variables, Mapping):
        return dict(variables)
    if hasattr(variables, "__dict__"):
        return dict(vars(variables))
    raise TypeError(
        f"template variables must be a mapping or an object, got {type(variables).__name__}"
    )


def resource_hook_code(
    template_base_paths: Iterable[str | os.PathLike],
    resource: Resource,
    hook_id: str,
    variables: Any = None,
    filters: Mapping[str, Callable[..., Any]] | None = None,
) -> str:
    """Return the custom code configured for a resource at a hook point.

    Inline code is returned as is. A template path is looked up in each base
    path in turn and the first one found is rendered with the given variables
    and extra template filters. An empty string is returned when no hook is
    configured.
    """
    resource_name = resource.name
    if not resource_name or not hook_id:
        return ""
    cfg = resource.config
    if cfg is None:
        return ""
    rc = cfg.resource_config(resource_name)
    if rc is None:
        return ""
    hook = rc.hooks.get(hook_id)
    if hook is None:
        return ""
    if hook.code is not None:
        return hook.code
    if hook.template_path is None:
        raise HookError(
            f"resource {resource_name} hook config for {hook_id} is invalid. "
            "Need either code or template_path"
        )

    prefix = f"resource {resource_name} hook config for {hook_id} is invalid"
    for base_path in template_base_paths:
        tpl_path = Path(base_path) / hook.template_path
        if not tpl_path.exists():
            continue
        try:
            contents = tpl_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise HookError(f"{prefix}: error reading {tpl_path}: {exc}") from exc

        env = jinja2.Environment(
            keep_trailing_newline=True,
            undefined=jinja2.StrictUndefined,
            autoescape=False,
        )
        if filters:
            env.filters.update(filters)
            env.globals.update(filters)
        try:
            template = env.from_string(contents)
        except jinja2.TemplateSyntaxError as exc:
            raise HookError(f"{prefix}: error parsing {tpl_path}: {exc}") from exc
        try:
            return template.render(_context(variables))
        except jinja2.TemplateError as exc:
            raise HookError(f"{prefix}: error executing {tpl_path}: {exc}") from exc

    raise HookError(f"{prefix}: template_path {hook.template_path} not found")