"""Top-level orchestrator: bootstrap once, derive render state per location."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from .client import DataClient, ResolverMap, assemble_client
from .config import Settings
from .connectors import resolve_connectors
from .image_service import ImgurService, distribute_image_configs
from .intl import Catalogs, IntlConfig, resolve_intl
from .provider import ChangeCallback, Provider
from .registry import DEFAULT_LAYOUTS, Registry, merge_registry
from .routes import get_routes, parse_query
from .schema_normalize import normalize_schema


logger = logging.getLogger("cms.bootstrap")


class ProviderState(enum.Enum):
    MOUNTED = "mounted"
    UNMOUNTED = "unmounted"


@dataclass(frozen=True)
class Location:
    pathname: str = "/"
    search: str = ""


@dataclass(frozen=True)
class RenderState:
    client: DataClient
    routes: List[str]
    params: Dict[str, Any]
    root_key: str
    base_url: str
    intl: IntlConfig
    image_service_configs: Dict[str, Dict[str, Any]]
    layouts: Registry
    hocs: Registry
    toolbars: Registry
    component_tree: Dict[str, Any] = field(default_factory=dict)
    hide_buttons: bool = False


class CMS:
    def __init__(
        self,
        schema: Dict[str, Any],
        connector: Any = None,
        resolver: ResolverMap | None = None,
        image_service_configs: Dict[str, Dict[str, Any]] | None = None,
        base_url: str | None = None,
        component_tree: Dict[str, Any] | None = None,
        layouts: Mapping[str, Any] | None = None,
        hocs: Mapping[str, Any] | None = None,
        toolbars: Mapping[str, Any] | None = None,
        intl: Dict[str, Any] | None = None,
        plugin_messages: Catalogs | None = None,
        hoc_messages: Catalogs | None = None,
        data_did_change: ChangeCallback | None = None,
        after_deploy: ChangeCallback | None = None,
        hide_buttons: bool = False,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or Settings.from_env()
        self.raw_schema = schema
        self.schema = normalize_schema(schema)
        self.resolved_connectors = resolve_connectors(connector)
        self.client = assemble_client(self.schema, self.resolved_connectors, resolvers=resolver, raw_schema=schema)

        service = ImgurService(self.settings.imgur_client_id, self.settings.imgur_mashape_key)
        self.image_service_configs = distribute_image_configs(
            schema.keys(), service.get_service_config, image_service_configs
        )

        self.base_url = base_url or self.settings.base_url
        self.component_tree = dict(component_tree or {})
        self.layouts = merge_registry("layout", DEFAULT_LAYOUTS, layouts)
        self.hocs = merge_registry("hoc", None, hocs)
        self.toolbars = merge_registry("toolbar", None, toolbars)
        self.intl = intl
        self.plugin_messages = plugin_messages
        self.hoc_messages = hoc_messages
        self.data_did_change = data_did_change
        self.after_deploy = after_deploy
        self.hide_buttons = hide_buttons
        self._provider: Provider | None = None
        logger.info("cms_bootstrap entities=%s base_url=%s", len(self.schema), self.base_url)

    @property
    def provider(self) -> Provider | None:
        return self._provider

    @property
    def provider_state(self) -> ProviderState:
        return ProviderState.MOUNTED if self._provider is not None else ProviderState.UNMOUNTED

    def render(self, location: Location) -> RenderState:
        routes = get_routes(location.pathname, self.base_url)
        return RenderState(
            client=self.client,
            routes=routes,
            params=parse_query(location.search),
            root_key=routes[0],
            base_url=self.base_url,
            intl=resolve_intl(self.intl, self.plugin_messages, self.hoc_messages),
            image_service_configs=self.image_service_configs,
            layouts=self.layouts,
            hocs=self.hocs,
            toolbars=self.toolbars,
            component_tree=self.component_tree,
            hide_buttons=self.hide_buttons,
        )

    def mount(self, provider: Provider | None = None, root_key: str | None = None) -> Provider:
        if provider is None:
            provider = Provider(
                self.client,
                schema=self.schema,
                root_key=root_key,
                data_did_change=self.data_did_change,
                after_deploy=self.after_deploy,
            )
        self._provider = provider
        return provider

    def unmount(self) -> None:
        self._provider = None

    async def deploy(self, key: str, record_id: str | None = None) -> None:
        provider = self._provider
        if provider is None:
            # callers cannot tell this apart from a completed deploy
            logger.info("provider_unmounted op=deploy key=%s record_id=%s", key, record_id)
            return None
        await provider.deploy(key, record_id)

    async def reset(self, key: str, record_id: str | None = None) -> None:
        provider = self._provider
        if provider is None:
            logger.info("provider_unmounted op=reset key=%s record_id=%s", key, record_id)
            return None
        await provider.reset(key, record_id)
