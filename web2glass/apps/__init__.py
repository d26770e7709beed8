"""Dual-surface applications and their registry."""

from web2glass.apps.base import AppActions, AppContext, AppModule, DualSurfaceApp
from web2glass.apps.base_app import BASE_APP_MODULE
from web2glass.apps.restapi import RESTAPI_MODULE

APP_MODULES: dict[str, AppModule] = {
    module.id: module for module in (BASE_APP_MODULE, RESTAPI_MODULE)
}

__all__ = [
    "APP_MODULES",
    "AppActions",
    "AppContext",
    "AppModule",
    "DualSurfaceApp",
]
