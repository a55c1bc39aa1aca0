from .catalog_source import CatalogSourcePort
from .credentials import CredentialsPort, require_token
from .link_resolver import LinkResolverPort
from .transport import FetchResponse, FetchTransportPort

__all__ = [
    "CatalogSourcePort",
    "CredentialsPort",
    "FetchResponse",
    "FetchTransportPort",
    "LinkResolverPort",
    "require_token",
]
