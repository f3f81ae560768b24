"""
AWS Signature Version 4 - Standalone Implementation

This package signs requests to AWS JSON APIs such as Amazon ECS with
Signature Version 4. It has no dependency on botocore or any HTTP client:
callers hand over headers, body, timestamp and credential and get back the
Authorization header value.
"""

from .credentials import Credential
from .endpoints import EcsAction, Region, Service, endpoint_host
from .errors import InvalidTimestampFormat, MissingCredentials, MissingHeader, SigningError
from .sigv4 import (
    ALGORITHM,
    REQUIRED_HEADERS,
    Headers,
    SigV4Signer,
    build_authorization_header,
    build_canonical_request,
    build_credential_scope,
    build_string_to_sign,
    compute_signature,
    derive_signing_key,
    format_timestamp,
    hash_payload,
    sign,
)

__version__ = "0.1.0"
__all__ = [
    "ALGORITHM",
    "REQUIRED_HEADERS",
    "Credential",
    "EcsAction",
    "Headers",
    "InvalidTimestampFormat",
    "MissingCredentials",
    "MissingHeader",
    "Region",
    "Service",
    "SigV4Signer",
    "SigningError",
    "build_authorization_header",
    "build_canonical_request",
    "build_credential_scope",
    "build_string_to_sign",
    "compute_signature",
    "derive_signing_key",
    "endpoint_host",
    "format_timestamp",
    "hash_payload",
    "sign",
]
