"""Exceptions raised by the try lifecycle and argument compiler."""


class TryError(Exception):
    """Base exception for all query-tries errors."""


class NotFoundError(TryError):
    """Referenced case or try does not exist."""


class CaseNotFoundError(NotFoundError):
    """No case with the given id."""

    def __init__(self, case_id: object) -> None:
        super().__init__(f"Case not found: {case_id}")
        self.case_id = case_id


class TryNotFoundError(NotFoundError):
    """No try with the given number under the case."""

    def __init__(self, case_id: object, try_no: int) -> None:
        super().__init__(f"Try {try_no} not found in case {case_id}")
        self.case_id = case_id
        self.try_no = try_no


class InvalidTryFieldsError(TryError):
    """Submitted try fields failed validation."""


class InvalidCuratorVariableError(TryError, ValueError):
    """Curator variable name cannot be used as a placeholder."""


class UnknownSearchEngineError(TryError, ValueError):
    """No dialect is registered for the search engine tag."""
