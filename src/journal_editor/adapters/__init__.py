"""Adapters that connect an editing session to host front-ends."""

from .controller import HostHooks, KeyHostAdapter

__all__ = ["HostHooks", "KeyHostAdapter"]
