"""
Infrastructure layer for gyros.

Contains abstractions for external systems:
- CommandRunner: External process execution with captured output

These provide clean interfaces that can be mocked for testing.
"""

from .command_runner import CommandRunner, decode_output

__all__ = [
    'CommandRunner',
    'decode_output',
]
