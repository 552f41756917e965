"""Identity registry — one username per principal, one principal per username.

Bindings are permanent: nothing updates or clears them once set.
"""

import logging

from habitledger.errors import InvalidCaller, InvalidUsername, UsernameAlreadySet, UsernameTaken
from habitledger.events import UsernameSet, emit
from habitledger.store import Store

log = logging.getLogger(__name__)

USERNAME_OF = "username_of"     # principal -> username
PRINCIPAL_OF = "principal_of"   # username -> principal


def check_caller(caller: str | None) -> str:
    """Reject the empty/None sentinel principal."""
    if not caller:
        raise InvalidCaller(caller)
    return caller


def register_username(store: Store, caller: str, name: str) -> None:
    check_caller(caller)
    if not name:
        raise InvalidUsername(name)

    with store.transaction():
        current = username_of(store, caller)
        if current is not None:
            log.warning("Rejected username %r for %s: already registered as %r", name, caller, current)
            raise UsernameAlreadySet(caller, current)

        owner = principal_of(store, name)
        if owner is not None:
            log.warning("Rejected username %r for %s: taken", name, caller)
            raise UsernameTaken(name, owner)

        store.put(USERNAME_OF, caller, name)
        store.put(PRINCIPAL_OF, name, caller)
        emit(store, UsernameSet(principal=caller, username=name))
    log.info("Username %r bound to %s", name, caller)


def username_of(store: Store, principal: str | None) -> str | None:
    if not principal:
        return None
    return store.get(USERNAME_OF, principal)


def principal_of(store: Store, username: str | None) -> str | None:
    if not username:
        return None
    return store.get(PRINCIPAL_OF, username)
