from typing import Any, Dict

from elasticsearch import AsyncElasticsearch

from eshealth.models.options import ApiKeyAuth, BasicAuth, CertificateAuth, ElasticsearchOptions


def build_client(options: ElasticsearchOptions) -> AsyncElasticsearch:
    auth_kwargs: Dict[str, Any] = {}
    auth = options.auth
    if isinstance(auth, BasicAuth):
        auth_kwargs["basic_auth"] = (auth.username, auth.password)
    elif isinstance(auth, CertificateAuth):
        auth_kwargs["client_cert"] = auth.client_cert
        if auth.client_key:
            auth_kwargs["client_key"] = auth.client_key
    elif isinstance(auth, ApiKeyAuth):
        auth_kwargs["api_key"] = auth.api_key

    tls_kwargs: Dict[str, Any] = {}
    if options.ssl_context is not None:
        tls_kwargs["ssl_context"] = options.ssl_context
    if options.verify_certs is not None:
        tls_kwargs["verify_certs"] = options.verify_certs
    if options.ca_certs:
        tls_kwargs["ca_certs"] = options.ca_certs
    if options.ssl_assert_fingerprint:
        tls_kwargs["ssl_assert_fingerprint"] = options.ssl_assert_fingerprint

    common_kwargs: Dict[str, Any] = dict(
        # one attempt per probe; the caller decides when to check again
        max_retries=0,
        retry_on_timeout=False,
        **auth_kwargs,
        **tls_kwargs,
    )
    if options.request_timeout is not None:
        common_kwargs["request_timeout"] = options.request_timeout

    return AsyncElasticsearch(options.uri, **common_kwargs)
