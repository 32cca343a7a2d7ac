"""Pathfinder error classes.

Data errors abort before any search runs; query errors are raised at the
boundary, once the graph is built and before a search starts.
"""


class PathfinderError(Exception):
    """Base error for pathfinder operations."""

    pass


class DatasetError(PathfinderError):
    """The pool dataset is missing, unreadable, or not shaped as expected."""

    pass


class QueryError(PathfinderError):
    """The query is incomplete or out of range."""

    pass


class TokenNotFoundError(QueryError):
    """A query token is not a vertex of the built graph."""

    def __init__(self, token: str, role: str) -> None:
        self.token = token
        self.role = role
        label = "TokenIn" if role == "token_in" else "TokenOut"
        super().__init__(f"{label} not found in graph: {token}")
