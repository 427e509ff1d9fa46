# ABOUTME: Exception hierarchy for identity graph registry errors.
# ABOUTME: Every precondition violation raised by a registry or graph operation lives here.


class IdentityGraphError(Exception):
    """Base exception for all identity graph errors.

    All custom exceptions inherit from this class so the CLI can
    handle every rejected operation in one place.
    """

    pass


class InvalidInput(IdentityGraphError):
    """Raised when a required text field or the skills list is empty."""

    pass


class AlreadyRegistered(IdentityGraphError):
    """Raised when registering an identity that already has a profile.

    Attributes:
        identity: The identity that is already registered.
    """

    def __init__(self, identity: str) -> None:
        super().__init__(f"Identity '{identity}' is already registered")
        self.identity = identity


class NotRegistered(IdentityGraphError):
    """Raised when the caller or target of an operation has no profile.

    Attributes:
        identity: The identity lacking a profile.
    """

    def __init__(self, identity: str) -> None:
        super().__init__(f"Identity '{identity}' is not registered")
        self.identity = identity


class InvalidTarget(IdentityGraphError):
    """Raised when a connection target is the null identity or the caller itself."""

    pass


class AlreadyConnected(IdentityGraphError):
    """Raised when the unordered pair already has an active connection.

    Attributes:
        identity_a: First identity of the pair, as given by the caller.
        identity_b: Second identity of the pair, as given by the caller.
    """

    def __init__(self, identity_a: str, identity_b: str) -> None:
        super().__init__(f"'{identity_a}' and '{identity_b}' are already connected")
        self.identity_a = identity_a
        self.identity_b = identity_b
