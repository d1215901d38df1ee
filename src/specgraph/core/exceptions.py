"""
Exceptions raised at the edges of specgraph.

The graph core degrades instead of raising: malformed edges are dropped,
empty graphs lay out to nothing, and an unknown focus yields no depths.
These exceptions are for the loaders and the CLI.
"""


class SpecGraphError(Exception):
    """Base class for all specgraph errors."""


class PayloadError(SpecGraphError):
    """
    Raised when a graph payload cannot be read or validated.

    Attributes:
        source: Where the payload came from (usually a file path).
        message: Human-readable error message.
    """

    def __init__(self, source: str, message: str):
        self.source = source
        self.message = message
        super().__init__(f"Payload '{source}': {message}")


class NodeNotFoundError(SpecGraphError):
    """
    Raised when a user-supplied reference matches no spec.

    Attributes:
        reference: The id, number or name that failed to resolve.
    """

    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(f"Spec not found: {reference}")


class UnknownLayoutError(SpecGraphError):
    """Raised when a layout strategy name is not registered."""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        super().__init__(
            f"Unknown layout '{name}' (available: {', '.join(available)})"
        )
