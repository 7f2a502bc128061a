"""View factory – builds views from the ``views:`` section of a YAML config.

Each entry names a view ``type``; the remaining keys are checked against that
view's option model before the view is constructed::

    views:
      - type: console
        fmt: text
        ranking_rows: 10

``CallbackView`` wraps a Python callable, so it cannot be declared in YAML;
pass callables to :meth:`Dashboard.add_view` instead.
"""

from __future__ import annotations

import importlib
import logging
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from tep_monitor.sensor_models import NUM_SENSORS
from tep_monitor.views.base import View

__all__ = ["ConsoleViewOptions", "create_view", "register_view"]

logger = logging.getLogger("tep_monitor.views.factory")


class ConsoleViewOptions(BaseModel):
    """Options a YAML ``console`` entry may set."""

    model_config = ConfigDict(extra="forbid")

    fmt: Literal["text", "json"] = "text"
    ranking_rows: int = Field(default=15, ge=1, le=NUM_SENSORS)
    log_rows: int = Field(default=20, ge=0)


# type name → (module_path, class_name, options model or None for free-form)
_VIEW_REGISTRY: dict[str, tuple[str, str, type[BaseModel] | None]] = {
    "console": ("tep_monitor.views.console", "ConsoleView", ConsoleViewOptions),
}

# Views that need Python objects and so have no YAML form
_CODE_ONLY_VIEWS = {"callback": "CallbackView"}


def create_view(config: dict[str, Any]) -> View:
    """Build a view from one ``views:`` entry.

    Raises:
        ValueError: if ``type`` is missing, unknown or code-only, or if the
            options fail validation (pydantic's ``ValidationError`` is a
            ``ValueError``).
    """
    options = dict(config)
    view_type = options.pop("type", None)
    if view_type is None:
        raise ValueError("View config must include a 'type' key")
    view_type = str(view_type).lower().strip()

    if view_type in _CODE_ONLY_VIEWS:
        raise ValueError(
            f"View type '{view_type}' wraps a Python callable and cannot be built from config; "
            f"use Dashboard.add_view({_CODE_ONLY_VIEWS[view_type]}(...)) instead"
        )
    if view_type not in _VIEW_REGISTRY:
        raise ValueError(f"Unknown view type '{view_type}'.  Available: {sorted(_VIEW_REGISTRY)}")

    module_path, class_name, options_model = _VIEW_REGISTRY[view_type]
    if options_model is not None:
        options = options_model.model_validate(options).model_dump()

    view_cls = getattr(importlib.import_module(module_path), class_name)
    logger.debug("Creating %s view with options %s", view_type, options)
    return view_cls(**options)


def register_view(
    name: str,
    module_path: str,
    class_name: str,
    options_model: type[BaseModel] | None = None,
) -> None:
    """Make a custom view available to ``views:`` entries of type *name*.

    When *options_model* is given, entries are validated against it before
    the view is constructed; otherwise the options are passed through as-is.
    """
    key = name.lower().strip()
    if key in _CODE_ONLY_VIEWS:
        raise ValueError(f"View type '{key}' is reserved")
    _VIEW_REGISTRY[key] = (module_path, class_name, options_model)
