"""Domain layer for peopleledger application.

Services are imported lazily: the database package imports
``peopleledger.domain.entities``, and the services import the database
package, so eager imports here would be circular.
"""

_SERVICES = {
    "CredentialService": "peopleledger.domain.credentials",
    "PersonService": "peopleledger.domain.person",
    "AccountService": "peopleledger.domain.account",
    "TransactionService": "peopleledger.domain.transaction",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
