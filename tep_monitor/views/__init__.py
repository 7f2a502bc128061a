"""Pluggable views for the TEP dashboard.

Import any view you need directly from this package::

    from tep_monitor.views import CallbackView, ConsoleView
"""

from __future__ import annotations

from tep_monitor.views.base import View
from tep_monitor.views.callback import CallbackView
from tep_monitor.views.console import ConsoleView
from tep_monitor.views.factory import create_view, register_view

__all__ = [
    "CallbackView",
    "ConsoleView",
    "View",
    "create_view",
    "register_view",
]
