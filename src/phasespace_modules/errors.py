from __future__ import annotations


class PhaseSpaceError(Exception):
    """Base class for every error raised while building or running modules."""


class ConfigurationError(PhaseSpaceError, ValueError):
    pass


class MissingParameter(ConfigurationError, KeyError):
    def __init__(self, name: str, module: str | None = None) -> None:
        self.name = name
        self.module = module
        where = f" for module '{module}'" if module else ""
        super().__init__(f"Missing parameter '{name}'{where}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class TypeMismatch(ConfigurationError, TypeError):
    def __init__(self, what: str, expected: type, actual: type) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Type mismatch for {what}: expected {expected.__name__}, got {actual.__name__}")


class InvalidInputTag(ConfigurationError):
    pass


class UnknownModule(ConfigurationError):
    pass


class DuplicateModule(ConfigurationError):
    pass


class PoolError(PhaseSpaceError):
    pass


class DuplicateOutput(PoolError):
    pass


class UnresolvedReference(PoolError, LookupError):
    pass


class InvalidIndex(PoolError):
    pass
