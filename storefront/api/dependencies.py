"""
Request-scoped accessors for the components wired into the app at startup.

`create_app` stores one CatalogStore, ChangeNotifier and AdminAuth on
`app.state`; routes receive them through `Depends` so tests can build an app
around fresh instances.
"""

from fastapi import Request

from storefront.auth.admin import AdminAuth
from storefront.catalog.store import CatalogStore
from storefront.notifier.broadcaster import ChangeNotifier


def get_store(request: Request) -> CatalogStore:
    return request.app.state.store


def get_notifier(request: Request) -> ChangeNotifier:
    return request.app.state.notifier


def get_admin_auth(request: Request) -> AdminAuth:
    return request.app.state.admin_auth
