"""Azure service icons (draw.io ``mxgraph.azure`` shapes)."""
from types import MappingProxyType

_AZURE_ICON = "aspect=fixed;html=1;align=center;shadow=0;dashed=0;spacingTop=3;shape=mxgraph.azure.{icon};"


def _icon(name: str) -> str:
    return _AZURE_ICON.format(icon=name)


AZURE_SHAPES = MappingProxyType({
    "azure.vm": _icon("virtual_machine"),
    "azure.app-service": _icon("app_service"),
    "azure.sql-database": _icon("sql_database"),
    "azure.storage": _icon("storage"),
    "azure.functions": _icon("function_apps"),
    "azure.cosmos-db": _icon("cosmos_db"),
    "azure.key-vault": _icon("key_vaults"),
    "azure.aks": _icon("kubernetes"),
    "azure.load-balancer": _icon("load_balancer_generic"),
    "azure.vnet": _icon("virtual_network"),
    "azure.api-management": _icon("api_management"),
    "azure.service-bus": _icon("service_bus"),
    "azure.event-hub": _icon("event_hubs"),
    "azure.container-registry": _icon("container_registries"),
    "azure.active-directory": _icon("active_directory"),
    "azure.monitor": _icon("azure_monitor"),
    "azure.cdn": _icon("content_delivery_network"),
    "azure.redis-cache": _icon("cache_redis"),
    "azure.devops": _icon("devops"),
    "azure.logic-apps": _icon("logic_apps"),
})
