#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/legacymd/resolver.py
"""User identity resolution capability injected into the parser.

The codec never looks up users itself. Callers pass an object implementing
``UserResolver``; when it returns None (or raises ``LookupError``) the parser
falls back to the literal names carried by the entity descriptor.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Protocol, Union, runtime_checkable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserInfo:
    """Identity of a platform user.

    Parameters
    ----------
    user_id : int
        Numeric user identifier
    screen_name : str or None, default = None
        Handle of the user
    pretty_name : str or None, default = None
        Display name of the user
    email : str or None, default = None
        Email address of the user

    """

    user_id: int
    screen_name: Optional[str] = None
    pretty_name: Optional[str] = None
    email: Optional[str] = None


@runtime_checkable
class UserResolver(Protocol):
    """Lookup capability mapping a user id to its identity."""

    def resolve(self, user_id: int) -> Optional[UserInfo]:
        """Return the identity of ``user_id`` or None when unknown."""
        ...


class StaticUserResolver:
    """Resolver backed by an in-memory mapping.

    Parameters
    ----------
    users : mapping of int to UserInfo, or iterable of UserInfo
        Known users

    Examples
    --------
        >>> resolver = StaticUserResolver([UserInfo(42, "jane", "Jane Doe")])
        >>> resolver.resolve(42).pretty_name
        'Jane Doe'
        >>> resolver.resolve(7) is None
        True

    """

    def __init__(self, users: Union[Mapping[int, UserInfo], Iterable[UserInfo], None] = None):
        """Initialize the resolver with a set of known users."""
        if users is None:
            self._users: dict[int, UserInfo] = {}
        elif isinstance(users, Mapping):
            self._users = dict(users)
        else:
            self._users = {user.user_id: user for user in users}

    def add(self, user: UserInfo) -> None:
        """Register or replace a user."""
        self._users[user.user_id] = user

    def resolve(self, user_id: int) -> Optional[UserInfo]:
        """Return the registered identity of ``user_id`` or None."""
        user = self._users.get(user_id)
        if user is None:
            logger.debug(f"User {user_id} not found in static resolver")
        return user

    def __len__(self) -> int:
        return len(self._users)
