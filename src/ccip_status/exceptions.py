"""Error taxonomy for the CCIP message status client.

Remote call failures (connectivity, malformed responses, contract reverts)
are not wrapped; they propagate as the underlying web3 exceptions.
"""


class MessageStatusError(Exception):
    """Base class for errors raised by the status client."""


class UsageError(MessageStatusError):
    """Raised when the command line does not carry exactly three arguments."""


class ConfigurationError(MessageStatusError, ValueError):
    """Raised when a chain is missing from the static configuration."""


class LaneNotSupportedError(MessageStatusError):
    """Raised when the source router rejects the destination selector."""

    def __init__(self, source_chain: str, destination_chain: str) -> None:
        self.source_chain = source_chain
        self.destination_chain = destination_chain
        super().__init__(f"Lane {source_chain}->{destination_chain} is not supported")


class UnknownMessageStateError(MessageStatusError):
    """Raised for an execution state code outside the known set."""

    def __init__(self, code: int) -> None:
        self.code = code
        super().__init__(f"Unknown message execution state: {code}")
