"""Operator-facing rendering of run reports."""

from routerforge.monitor.renderer import ReportRenderer

__all__ = ["ReportRenderer"]
