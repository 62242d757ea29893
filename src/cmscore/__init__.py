"""CMS data-client bootstrap."""

from .client import DataClient, assemble_client, create_client
from .cms import CMS, Location, ProviderState, RenderState
from .connectors import Connector, ConnectorSpec, MemoryConnector, ResolvedConnectors, resolve_connectors
from .empty_data import create_empty_data
from .errors import ClientConfigError, CmsError, EntityNotFound, RecordNotFound, SchemaError, UnknownComponent
from .image_service import ImgurService, distribute_image_configs
from .provider import Provider
from .routes import get_routes, parse_query
from .schema_normalize import normalize_schema

__all__ = [
    "CMS",
    "ClientConfigError",
    "CmsError",
    "Connector",
    "ConnectorSpec",
    "DataClient",
    "EntityNotFound",
    "ImgurService",
    "Location",
    "MemoryConnector",
    "Provider",
    "ProviderState",
    "RecordNotFound",
    "RenderState",
    "ResolvedConnectors",
    "SchemaError",
    "UnknownComponent",
    "assemble_client",
    "create_client",
    "create_empty_data",
    "distribute_image_configs",
    "get_routes",
    "normalize_schema",
    "parse_query",
    "resolve_connectors",
]
