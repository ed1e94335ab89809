import logging
import flipt
from opentelemetry import trace
from flipt.evaluation import EvaluationRequest

from config import settings

logger = logging.getLogger(__name__)


class FliptService:
    """Service for interacting with Flipt feature flags."""

    def __init__(self, enabled: bool = True):
        self.client = None
        self.tracer = trace.get_tracer(__name__)
        if enabled:
            self._initialize_client()
        else:
            logger.info("Flipt disabled, feature flags will use their defaults")

    def _initialize_client(self):
        """Initialize Flipt client."""
        try:
            self.client = flipt.FliptClient(
                url=settings.flipt_url,
            )
            logger.info(f"Flipt client initialized: {settings.flipt_url}")
        except Exception as e:
            logger.error(f"Failed to initialize Flipt client: {e}")
            self.client = None

    def evaluate_boolean(
        self,
        flag_key: str,
        entity_id: str,
        context: dict = None,
        default: bool = False
    ) -> bool:
        """Evaluate a boolean flag."""
        with self.tracer.start_as_current_span("feature_flag.evaluation") as span:
            span.set_attribute("feature_flag.key", flag_key)
            span.set_attribute("feature_flag.type", "boolean")

            if not self.client:
                logger.debug(f"Flipt client not available, returning default for {flag_key}")
                return default

            try:
                result = self.client.evaluation.boolean(EvaluationRequest(
                    namespace_key=settings.flipt_namespace,
                    flag_key=flag_key,
                    entity_id=entity_id,
                    context=context or {}
                ))
                enabled = result.enabled
                span.set_attribute("feature_flag.result.value", enabled)
                logger.debug(f"Flag '{flag_key}' evaluated to {enabled} (reason: {result.reason})")
                return enabled
            except Exception as e:
                logger.error(f"Error evaluating boolean flag '{flag_key}': {e}")
                span.set_attribute("error", True)
                span.set_attribute("error.message", str(e))
                return default

    def is_request_analytics_enabled(self, entity_id: str, context: dict = None) -> bool:
        """Check if per-request analytics logging is enabled."""
        return self.evaluate_boolean(
            flag_key="request-analytics",
            entity_id=entity_id,
            context=context,
            default=True
        )

    def is_sample_data_enabled(self, entity_id: str = "startup") -> bool:
        """Check if sample bookings should be seeded on startup."""
        return self.evaluate_boolean(
            flag_key="seed-sample-bookings",
            entity_id=entity_id,
            default=True
        )


# Global Flipt service instance
flipt_service = FliptService(enabled=settings.flipt_enabled)
