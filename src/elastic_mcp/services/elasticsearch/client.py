"""
Elasticsearch backend adapter.

Thin async call-through to the cluster's catalog, mapping and search APIs.
Responses are returned as plain Python structures; no caching or retries
happen here.
"""

from pathlib import Path
from typing import Any

from elasticsearch import AsyncElasticsearch

from elastic_mcp.core.interfaces import IDocumentStore
from elastic_mcp.utils.config import ElasticMCPSettings
from elastic_mcp.utils.errors import BackendError
from elastic_mcp.utils.logging import setup_logging

logger = setup_logging(__name__)


def _readable_ca_cert(path: Path) -> Path | None:
    try:
        path.read_bytes()
    except OSError as e:
        logger.error(f"Failed to read certificate file: {e}")
        return None
    return path


def build_client(settings: ElasticMCPSettings) -> AsyncElasticsearch:
    """Create the async Elasticsearch client described by the settings.

    The API key takes precedence over username and password. A CA
    certificate that cannot be read is reported and left out.
    """
    options: dict[str, Any] = {}

    if settings.api_key:
        options["api_key"] = settings.api_key
    elif settings.username and settings.password:
        options["basic_auth"] = (settings.username, settings.password)

    ca_cert = settings.get_ca_cert_path()
    if ca_cert is not None and _readable_ca_cert(ca_cert) is not None:
        options["ca_certs"] = str(ca_cert)

    logger.info(f"Creating Elasticsearch client for {settings.url} (auth={settings.auth_mode}, custom_ca={'ca_certs' in options})")
    return AsyncElasticsearch(settings.url, **options)


class ElasticsearchDocumentStore(IDocumentStore):
    """``IDocumentStore`` backed by ``AsyncElasticsearch``."""

    def __init__(self, client: AsyncElasticsearch):
        self.client = client

    @classmethod
    def from_settings(cls, settings: ElasticMCPSettings) -> "ElasticsearchDocumentStore":
        return cls(build_client(settings))

    async def list_indices(self) -> list[dict[str, Any]]:
        response = await self.client.cat.indices(format="json")
        body = response.body
        if not isinstance(body, list):
            raise BackendError(f"Unexpected index catalog response: expected a list, got {type(body).__name__}")
        return body

    async def get_mapping(self, index: str) -> dict[str, Any]:
        response = await self.client.indices.get_mapping(index=index)
        body = response.body
        if not isinstance(body, dict):
            raise BackendError(f"Unexpected mapping response for index {index}")
        return body

    async def search(self, index: str, body: dict[str, Any]) -> dict[str, Any]:
        logger.debug(f"Searching index {index} with body keys {sorted(body)}")
        response = await self.client.search(index=index, body=body)
        result = response.body
        if not isinstance(result, dict):
            raise BackendError(f"Unexpected search response for index {index}")
        return result

    async def close(self) -> None:
        await self.client.close()
