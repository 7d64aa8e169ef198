"""Transpiler protocol — converts between the unified protocol and a vendor format.

A concrete transpiler renders a unified conversation into the vendor's
request fragment and maps a vendor response back into a unified result.
"""

from typing import Any, Protocol

from azure_anthropic.core.models import GenerateResult, UnifiedMessage


class Transpiler(Protocol):
    """Protocol for vendor-specific message format transpilers."""

    def to_provider(self, prompt: list[UnifiedMessage]) -> dict[str, Any]:
        """Convert a unified conversation to the vendor's request fragment.

        Returns the ``messages`` list plus any top-level fields the vendor
        keeps outside it (such as ``system``).
        """
        ...

    def from_provider(self, response: Any) -> GenerateResult:
        """Convert a vendor's complete response into a unified result."""
        ...
