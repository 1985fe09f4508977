"""
CLI Command Handlers Facade.

Re-exports the handlers from `hookgen.cli.handlers` so the dispatcher has a
single import point.
"""

from hookgen.cli.handlers.expand import handle_expand
from hookgen.cli.handlers.inspect import handle_inspect

__all__ = [
  "handle_expand",
  "handle_inspect",
]
