import ssl
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class NoAuth(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["none"] = "none"


class BasicAuth(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["basic"] = "basic"
    username: str = Field(..., min_length=1)
    password: str


class CertificateAuth(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["certificate"] = "certificate"
    client_cert: str = Field(..., min_length=1, description="Path to a PEM client certificate")
    client_key: Optional[str] = Field(default=None, description="Path to the key, when not bundled in client_cert")


class ApiKeyAuth(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["api_key"] = "api_key"
    api_key: str = Field(..., min_length=1)


Auth = Annotated[Union[NoAuth, BasicAuth, CertificateAuth, ApiKeyAuth], Field(discriminator="kind")]


def resolve_auth(
    *,
    basic: bool = False,
    username: Optional[str] = None,
    password: Optional[str] = None,
    certificate: bool = False,
    client_cert: Optional[str] = None,
    client_key: Optional[str] = None,
    api_key_enabled: bool = False,
    api_key: Optional[str] = None,
) -> Auth:
    """
    Pick one auth mode from flags plus possibly-null credentials.

    First match wins, in order: basic, certificate, API key. A mode whose
    credentials are missing is skipped.
    """
    if basic and username is not None and password is not None:
        return BasicAuth(username=username, password=password)
    if certificate and client_cert is not None:
        return CertificateAuth(client_cert=client_cert, client_key=client_key)
    if api_key_enabled and api_key is not None:
        return ApiKeyAuth(api_key=api_key)
    return NoAuth()


class ElasticsearchOptions(BaseModel):
    """
    Immutable description of one Elasticsearch target.

    `ssl_context`, `verify_certs`, `ca_certs` and `ssl_assert_fingerprint`
    override server certificate validation; each is handed to the client
    only when set.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    uri: str = Field(..., min_length=1)
    request_timeout: Optional[float] = Field(default=None, gt=0)
    auth: Auth = Field(default_factory=NoAuth)
    ssl_context: Optional[ssl.SSLContext] = None
    verify_certs: Optional[bool] = None
    ca_certs: Optional[str] = None
    ssl_assert_fingerprint: Optional[str] = None
    use_cluster_health_api: bool = False
