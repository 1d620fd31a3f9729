"""Threaded dining philosophers simulation with a starvation watcher."""

__version__ = "0.1.0"