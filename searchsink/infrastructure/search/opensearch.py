# ==============================================================================
# OpenSearch Bulk Client Implementation
# ==============================================================================
"""
OpenSearch implementation of the BulkClient capability.

Provides:
- OpenSearchClientConfig: connection configuration, opens the client per worker
- OpenSearchBulkClient: executes one bulk request and reports per-item failures
- opensearch_client: convenience factory for a connection configuration
- check_opensearch_connection: reachability check with light retry

Transport failures are translated at this boundary:
connection errors and timeouts become StoreConnectionError, while an error
status for the whole request or a body that cannot be serialized becomes
BulkWriteError.
"""

import logging
from typing import Any, Optional

from opensearchpy import OpenSearch
from opensearchpy.exceptions import ConnectionError as OSConnectionError
from opensearchpy.exceptions import SerializationError, TransportError
from pydantic import BaseModel, Field

from searchsink.base.capabilities import BulkClient, ClientConfig
from searchsink.core.exceptions import BulkWriteError, StoreConnectionError
from searchsink.core.models import BulkBuffer, BulkResult, WriteOptions
from searchsink.utils.config import Settings, get_settings
from searchsink.utils.retry import retry_light

logger = logging.getLogger(__name__)


class OpenSearchClientConfig(BaseModel, ClientConfig):
    """
    Connection configuration for OpenSearch.

    A plain value, so it can be built independently in every worker.
    """

    model_config = {"frozen": True}

    hosts: list[dict] = Field(..., min_length=1, description="Host/port dicts")
    user: Optional[str] = None
    password: Optional[str] = None
    use_ssl: bool = False
    verify_certs: bool = True
    timeout: int = Field(default=30, ge=1, description="Request timeout in seconds")

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "OpenSearchClientConfig":
        """
        Build a configuration from application settings.

        Args:
            settings: Application settings. If None, uses get_settings().
        """
        os_settings = (settings or get_settings()).opensearch
        return cls(
            hosts=os_settings.hosts,
            user=os_settings.user,
            password=os_settings.password,
            use_ssl=os_settings.use_ssl,
            verify_certs=os_settings.verify_certs,
            timeout=os_settings.timeout,
        )

    def client_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for the opensearch-py client."""
        kwargs: dict[str, Any] = {
            "hosts": self.hosts,
            "use_ssl": self.use_ssl,
            "verify_certs": self.verify_certs,
            "ssl_show_warn": False,
            "timeout": self.timeout,
        }
        if self.user is not None and self.password is not None:
            kwargs["http_auth"] = (self.user, self.password)
        return kwargs

    def connect(self) -> "OpenSearchBulkClient":
        """Open an OpenSearch client for one worker."""
        client = OpenSearch(**self.client_kwargs())
        logger.debug("OpenSearch client opened (hosts=%s)", self.hosts)
        return OpenSearchBulkClient(client)


class OpenSearchBulkClient(BulkClient):
    """
    Executes bulk requests against OpenSearch.

    Owned by exactly one BulkContext; not shared between workers.
    """

    def __init__(self, client: OpenSearch):
        """
        Initialize with an opened client.

        Args:
            client: opensearch-py client, closed by close()
        """
        self._client: OpenSearch | None = client

    @property
    def client(self) -> OpenSearch | None:
        """Get the OpenSearch client."""
        return self._client

    def bulk(self, buffer: BulkBuffer, options: WriteOptions) -> BulkResult:
        """
        Send the buffer as one bulk request.

        Args:
            buffer: Pending requests in dispatch order
            options: Headers and extra query parameters

        Returns:
            BulkResult parsed from the bulk response

        Raises:
            StoreConnectionError: OpenSearch was unreachable or timed out
            BulkWriteError: OpenSearch rejected the whole request, or the body
                            could not be serialized
        """
        if self._client is None:
            raise StoreConnectionError("OpenSearch client is closed")

        params = {**buffer.params(), **options.params}
        try:
            response = self._client.bulk(
                body=buffer.to_body(),
                params=params or None,
                headers=dict(options.headers) or None,
            )
        except OSConnectionError as e:
            # Includes ConnectionTimeout
            raise StoreConnectionError(f"OpenSearch unreachable: {e}") from e
        except TransportError as e:
            status = e.status_code if isinstance(e.status_code, int) else None
            raise BulkWriteError(
                f"bulk request rejected (status {e.status_code}): {e.error}", status=status
            ) from e
        except SerializationError as e:
            raise BulkWriteError(f"bulk body could not be serialized: {e}") from e

        result = BulkResult.from_response(response)
        if result.has_failures:
            logger.debug("Bulk response had %d failed items", len(result.failures))
        return result

    def close(self) -> None:
        """Close connection and release resources."""
        if self._client:
            try:
                self._client.close()
                logger.debug("OpenSearch client closed")
            finally:
                self._client = None


def opensearch_client(
    host: str,
    port: int = 9200,
    user: Optional[str] = None,
    password: Optional[str] = None,
    use_ssl: bool = False,
    verify_certs: bool = True,
) -> OpenSearchClientConfig:
    """
    Build a connection configuration for a single OpenSearch node.

    Example:
        builder.client_fn(lambda: opensearch_client("localhost", 9200, "admin", "secret"))
    """
    return OpenSearchClientConfig(
        hosts=[{"host": host, "port": port}],
        user=user,
        password=password,
        use_ssl=use_ssl,
        verify_certs=verify_certs,
    )


def check_opensearch_connection(settings: Settings | None = None) -> bool:
    """
    Check if OpenSearch is reachable.

    Args:
        settings: Application settings. If None, uses get_settings().

    Returns:
        True if connection successful, False otherwise
    """
    config = OpenSearchClientConfig.from_settings(settings).model_copy(update={"timeout": 5})

    @retry_light((OSConnectionError,), logger)
    def _ping() -> dict:
        client = OpenSearch(**config.client_kwargs())
        try:
            return client.info()
        finally:
            client.close()

    try:
        info = _ping()
    except TransportError as e:
        logger.warning("OpenSearch is not reachable: %s", e)
        return False

    logger.info("OpenSearch reachable (cluster=%s)", info.get("cluster_name", "unknown"))
    return True
