class ConfigurationError(Exception):
    """Raised while building the command registry; aborts startup."""

    pass


class DuplicateCommandError(ConfigurationError):
    """Raised when two manifests declare the same command name."""

    def __init__(self, command: str):
        self.command = command
        super().__init__(f"Command /{command} is declared more than once")


class AmbiguousDefaultError(ConfigurationError):
    """Raised when a command declares two variants eligible as the same default."""

    def __init__(self, command: str, first: str, second: str, kind: str):
        self.command = command
        self.first = first
        self.second = second
        self.kind = kind
        super().__init__(
            f"Command /{command} declares two {kind} default variants: {first!r} and {second!r}"
        )
