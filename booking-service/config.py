from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Service settings
    service_name: str = "booking-service"
    service_version: str = "1.0.0"
    log_level: str = "INFO"

    # Seed the store with sample bookings on startup
    seed_sample_bookings: bool = True

    # Flipt settings
    flipt_enabled: bool = True
    flipt_url: str = "http://flipt:8080"
    flipt_namespace: str = "default"

    # OpenTelemetry settings
    otel_enabled: bool = True
    otel_exporter_otlp_endpoint: str = "http://jaeger:4318"
    otel_exporter_otlp_metrics_endpoint: str = "http://prometheus:9090/api/v1/otlp"
    otel_exporter_otlp_metrics_headers: str = ""
    otel_service_name: str = "booking-service"

    # CORS settings
    cors_origins: list[str] = ["http://localhost:4000", "http://localhost:8080", "http://webapp"]

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
