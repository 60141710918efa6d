"""HTTP exposition endpoint using FastAPI."""
from itertools import chain
from typing import List, Optional
import io
import logging
import time

from fastapi import FastAPI, HTTPException, Query, Response
from prometheus_client import REGISTRY, CollectorRegistry

from promproto.config import Config
from promproto.floats import ExpositionFormatError
from promproto.formatter import CONTENT_TYPE, ProtobufFormatter
from promproto.registry import collect_families
from promproto.self_metrics import SelfMetrics

logger = logging.getLogger(__name__)


class ExpositionAPI:
    """FastAPI app serving a registry in the delimited protobuf format."""

    def __init__(self, config: Config, registry: CollectorRegistry = REGISTRY):
        """
        Initialize the exposition API.

        Args:
            config: Root configuration
            registry: Registry whose metrics are exposed
        """
        self.config = config
        self.registry = registry
        self.app = FastAPI(title="Protobuf Metrics Exposition")

        self.self_metrics: Optional[SelfMetrics] = None
        if config.self_metrics.enabled:
            self.self_metrics = SelfMetrics(prefix=config.self_metrics.prefix)

        self._setup_routes()

    def _setup_routes(self):
        """Setup API routes."""

        @self.app.get("/healthz")
        async def healthz():
            """Health check endpoint."""
            return {"status": "healthy", "timestamp": time.time()}

        async def metrics(names: Optional[List[str]] = Query(default=None, alias="name[]")):
            """Serve the registry, optionally restricted to ``name[]`` values."""
            return Response(content=self.render(names), media_type=CONTENT_TYPE)

        self.app.add_api_route(self.config.server.path, metrics, methods=["GET", "POST"])

    def render(self, names: Optional[List[str]] = None) -> bytes:
        """Encode the registry (and self metrics) into delimited protobuf."""
        start = time.time()
        families = collect_families(self.registry, names)
        if self.self_metrics:
            families = chain(families, collect_families(self.self_metrics.registry, names))

        output = io.BytesIO()
        formatter = ProtobufFormatter(
            families,
            framing=self.config.format.framing,
            const_labels=self.config.format.const_labels,
        )
        try:
            records = formatter.write(output)
        except ExpositionFormatError as e:
            logger.error(f"Failed to encode metrics: {e}")
            if self.self_metrics:
                self.self_metrics.record_format_error()
            raise HTTPException(status_code=500, detail=str(e))

        duration = time.time() - start
        if self.self_metrics:
            self.self_metrics.record_scrape(records, duration)
        logger.debug(f"Encoded {records} records in {duration:.3f}s")
        return output.getvalue()

    def run(self):
        """Run the API server."""
        import uvicorn
        uvicorn.run(
            self.app,
            host=self.config.server.host,
            port=self.config.server.port,
            log_level=self.config.global_.log_level.lower()
        )
