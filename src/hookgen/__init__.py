"""
hookgen Package.

A source generator for Swift test hooks. A type annotated with ``@Testable``
gets a ``#if DEBUG`` extension exposing its private members through a
``testHooks`` proxy.

Usage
-----

Simple String Expansion
^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import hookgen
    code = "@Testable\\nclass Counter {\\n    private var count: Int = 0\\n}"
    print(hookgen.expand(code))

Advanced Usage (Engine)
^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from hookgen import ExpansionEngine, RuntimeConfig

    config = RuntimeConfig(strict_mode=True)
    res = ExpansionEngine(config).run(source)

    if res.success:
        print(res.code)
    else:
        for diag in res.errors:
            print(diag)
"""

from typing import Optional

from hookgen.config import RuntimeConfig
from hookgen.core.engine import ExpansionEngine, ExpansionResult, expand_declaration

__version__ = "0.1.0"


def expand(code: str, config: Optional[RuntimeConfig] = None) -> str:
  """
  Expands every ``@Testable`` type in a Swift source string.

  Args:
      code (str): Swift source text.
      config (RuntimeConfig, optional): Expansion options. Defaults apply if omitted.

  Returns:
      str: The source with the attributes removed and the generated extensions appended.

  Raises:
      ValueError: If the source does not parse or an expansion fails.
  """
  result = ExpansionEngine(config).run(code)

  if not result.success:
    error_msg = "\n".join(str(d) for d in result.errors)
    raise ValueError(f"Expansion failed:\n{error_msg}")

  return result.code


__all__ = [
  "ExpansionEngine",
  "ExpansionResult",
  "RuntimeConfig",
  "expand",
  "expand_declaration",
  "__version__",
]
