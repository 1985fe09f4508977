from .expand import handle_expand
from .inspect import handle_inspect

__all__ = [
  "handle_expand",
  "handle_inspect",
]
