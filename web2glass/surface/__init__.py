"""Surface abstraction layer for the local panel and the glasses bridge."""

from web2glass.surface.backend import BridgeHandle, BridgeListener, LocalDisplay
from web2glass.surface.factory import bridgeAcquire_create
from web2glass.surface.remote import BridgeSurface, MockSurface, RemoteSurface, RenderResult

__all__ = [
    "BridgeHandle",
    "BridgeListener",
    "BridgeSurface",
    "LocalDisplay",
    "MockSurface",
    "RemoteSurface",
    "RenderResult",
    "bridgeAcquire_create",
]
