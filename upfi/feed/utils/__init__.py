"""Utility functions."""

from .observers import Observer, ObserverSet

__all__ = ["Observer", "ObserverSet"]
