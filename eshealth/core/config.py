from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

from eshealth.models.health import HealthCheckRegistration, HealthStatus
from eshealth.models.options import ElasticsearchOptions, resolve_auth


class Settings(BaseSettings):
    PORT: int = 8000
    API_BASE_PATH: str = "/"
    LOG_LEVEL: str = "info"

    ES_URI: str = "http://localhost:9200"
    ES_REQUEST_TIMEOUT: Optional[float] = None  # seconds; client default when unset
    ES_USE_CLUSTER_HEALTH_API: bool = False

    # At most one auth mode applies: basic, then certificate, then API key
    ES_AUTH_BASIC: bool = False
    ES_USERNAME: str | None = None
    ES_PASSWORD: str | None = None
    ES_AUTH_CERTIFICATE: bool = False
    ES_CLIENT_CERT: str | None = None
    ES_CLIENT_KEY: str | None = None
    ES_AUTH_API_KEY: bool = False
    ES_API_KEY: str | None = None

    ES_VERIFY_CERTS: Optional[bool] = None
    ES_CA_CERTS: str | None = None
    ES_SSL_ASSERT_FINGERPRINT: str | None = None

    HEALTH_CHECK_NAME: str = "elasticsearch"
    HEALTH_FAILURE_STATUS: HealthStatus = HealthStatus.UNHEALTHY
    HEALTH_CHECK_TIMEOUT: Optional[float] = None

    # Allow .env file to override defaults
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    def elasticsearch_options(self) -> ElasticsearchOptions:
        auth = resolve_auth(
            basic=self.ES_AUTH_BASIC,
            username=self.ES_USERNAME,
            password=self.ES_PASSWORD,
            certificate=self.ES_AUTH_CERTIFICATE,
            client_cert=self.ES_CLIENT_CERT,
            client_key=self.ES_CLIENT_KEY,
            api_key_enabled=self.ES_AUTH_API_KEY,
            api_key=self.ES_API_KEY,
        )
        return ElasticsearchOptions(
            uri=self.ES_URI,
            request_timeout=self.ES_REQUEST_TIMEOUT,
            auth=auth,
            verify_certs=self.ES_VERIFY_CERTS,
            ca_certs=self.ES_CA_CERTS,
            ssl_assert_fingerprint=self.ES_SSL_ASSERT_FINGERPRINT,
            use_cluster_health_api=self.ES_USE_CLUSTER_HEALTH_API,
        )

    def registration(self) -> HealthCheckRegistration:
        return HealthCheckRegistration(
            name=self.HEALTH_CHECK_NAME,
            failure_status=self.HEALTH_FAILURE_STATUS,
            timeout=self.HEALTH_CHECK_TIMEOUT,
        )


settings = Settings()
