"""
Declaration Scanner.

Walks an ordered member list and buckets the members selected for forwarding
into instance/static properties and functions. Order within each bucket is the
declaration order.

Selection is delegated to a `ModifierMatcher`:

- `ExactModifierMatcher` compares modifier names against enumerated sets
  (``private``/``fileprivate`` qualify; ``static``/``class`` are type-level).
- `SubstringModifierMatcher` reproduces containment matching, where any
  modifier whose name contains ``"private"`` qualifies and any containing
  ``"static"`` is type-level.
"""

import logging
from typing import Iterable, List, Optional, Sequence

from hookgen.compiler.model import (
  ClassificationResult,
  Function,
  Member,
  Property,
  SkippedMember,
  UnsupportedMember,
)
from hookgen.config import RuntimeConfig

logger = logging.getLogger(__name__)

NOT_PRIVATE = "not declared private"


class ModifierMatcher:
  """Abstract base for modifier tests."""

  def is_qualifying(self, modifiers: Sequence[str]) -> bool:
    raise NotImplementedError

  def is_static(self, modifiers: Sequence[str]) -> bool:
    raise NotImplementedError


class ExactModifierMatcher(ModifierMatcher):
  """
  Matches whole modifier names against enumerated sets.
  """

  def __init__(
    self,
    qualifying: Iterable[str] = ("private", "fileprivate"),
    static: Iterable[str] = ("static", "class"),
  ) -> None:
    self.qualifying = frozenset(qualifying)
    self.static = frozenset(static)

  def is_qualifying(self, modifiers: Sequence[str]) -> bool:
    return any(m in self.qualifying for m in modifiers)

  def is_static(self, modifiers: Sequence[str]) -> bool:
    return any(m in self.static for m in modifiers)


class SubstringModifierMatcher(ModifierMatcher):
  """
  Matches when a modifier name contains a keyword.

  Note that ``fileprivate`` contains ``private`` and so qualifies too.
  """

  def __init__(self, qualifying_keyword: str = "private", static_keyword: str = "static") -> None:
    self.qualifying_keyword = qualifying_keyword
    self.static_keyword = static_keyword

  def is_qualifying(self, modifiers: Sequence[str]) -> bool:
    return any(self.qualifying_keyword in m for m in modifiers)

  def is_static(self, modifiers: Sequence[str]) -> bool:
    return any(self.static_keyword in m for m in modifiers)


def matcher_from_config(config: RuntimeConfig) -> ModifierMatcher:
  """
  Builds the matcher selected by ``config.modifier_matching``.
  """
  if config.modifier_matching == "substring":
    return SubstringModifierMatcher()
  return ExactModifierMatcher(config.qualifying_modifiers, config.static_modifiers)


class DeclarationScanner:
  """
  Classifies members by kind, visibility and static-ness.
  """

  def __init__(self, matcher: Optional[ModifierMatcher] = None) -> None:
    self.matcher = matcher or ExactModifierMatcher()

  def scan(self, members: List[Member]) -> ClassificationResult:
    """
    Classifies the member list.

    Every member ends up in exactly one bucket or in `skipped`. Nothing is raised.

    Args:
        members: Ordered member declarations.

    Returns:
        ClassificationResult: The four ordered buckets plus skipped records.
    """
    result = ClassificationResult()

    for member in members:
      qualifying = self.matcher.is_qualifying(member.modifiers)

      if isinstance(member, UnsupportedMember):
        result.skipped.append(SkippedMember(member, member.reason, qualifying))
        continue

      if not qualifying:
        result.skipped.append(SkippedMember(member, NOT_PRIVATE))
        continue

      is_static = self.matcher.is_static(member.modifiers)
      if isinstance(member, Property):
        bucket = result.static_properties if is_static else result.instance_properties
      elif isinstance(member, Function):
        bucket = result.static_functions if is_static else result.instance_functions
      else:
        result.skipped.append(SkippedMember(member, "unknown member kind", qualifying))
        continue

      bucket.append(member)

    logger.debug(
      "Classified %d members: %d forwarded, %d skipped",
      len(members),
      result.total,
      len(result.skipped),
    )
    return result
