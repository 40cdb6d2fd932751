"""Google Cloud service icons (draw.io ``mxgraph.gcp2`` shapes)."""
from types import MappingProxyType


def _icon(name: str) -> str:
    return f"shape=mxgraph.gcp2.{name};html=1;whiteSpace=wrap;"


GCP_SHAPES = MappingProxyType({
    "gcp.compute-engine": _icon("compute_engine"),
    "gcp.cloud-functions": _icon("cloud_functions"),
    "gcp.cloud-run": _icon("cloud_run"),
    "gcp.gke": _icon("google_kubernetes_engine"),
    "gcp.cloud-storage": _icon("cloud_storage"),
    "gcp.bigquery": _icon("bigquery"),
    "gcp.cloud-sql": _icon("cloud_sql"),
    "gcp.firestore": _icon("cloud_firestore"),
    "gcp.pub-sub": _icon("cloud_pubsub"),
    "gcp.cloud-cdn": _icon("cloud_cdn"),
    "gcp.load-balancing": _icon("cloud_load_balancing"),
    "gcp.vpc": _icon("virtual_private_cloud"),
    "gcp.cloud-dns": _icon("cloud_dns"),
    "gcp.iam": _icon("cloud_iam"),
    "gcp.cloud-build": _icon("cloud_build"),
    "gcp.cloud-logging": _icon("cloud_logging"),
    "gcp.cloud-monitoring": _icon("cloud_monitoring"),
    "gcp.api-gateway": _icon("api_gateway"),
    "gcp.dataflow": _icon("cloud_dataflow"),
    "gcp.vertex-ai": _icon("ai_platform"),
})
