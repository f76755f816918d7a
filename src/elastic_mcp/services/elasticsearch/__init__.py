from .client import ElasticsearchDocumentStore, build_client

__all__ = ["ElasticsearchDocumentStore", "build_client"]
