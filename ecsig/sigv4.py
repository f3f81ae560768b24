"""
AWS Signature Version 4 signing for JSON APIs.

Each stage of the signing process is a plain function so it can be checked
against the vectors in the AWS documentation:
https://docs.aws.amazon.com/IAM/latest/UserGuide/create-signed-request.html

``sign`` runs the whole pipeline for one request; ``SigV4Signer`` builds the
header set an ECS-style JSON call needs and signs it.
"""

import hashlib
import hmac
import logging
import re
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union
from urllib.parse import quote, unquote

from .credentials import Credential
from .endpoints import EcsAction, Region, Service, endpoint_host, scope_name
from .errors import InvalidTimestampFormat, MissingCredentials, MissingHeader

logger = logging.getLogger(__name__)

ALGORITHM = 'AWS4-HMAC-SHA256'
TERMINATOR = 'aws4_request'
JSON_CONTENT_TYPE = 'application/x-amz-json-1.1'
TIMESTAMP_FORMAT = '%Y%m%dT%H%M%SZ'
EMPTY_SHA256 = 'e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855'

# Headers every request to the ECS JSON API family must sign.
REQUIRED_HEADERS = (
    'content-length',
    'content-type',
    'host',
    'x-amz-date',
    'x-amz-target',
)

_UNRESERVED = '-_.~'
_TIMESTAMP_RE = re.compile(r'[0-9]{8}T[0-9]{6}Z')

Headers = Dict[str, str]
HeaderSet = Union[Mapping[str, str], Iterable[Tuple[str, str]]]
Body = Union[str, bytes]
Target = Union[str, EcsAction]


def _to_bytes(data: Optional[Body]) -> bytes:
    if data is None:
        return b''
    if isinstance(data, str):
        return data.encode('utf-8')
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    raise TypeError(f'Request body must be str or bytes, not {type(data).__name__}')


def hash_payload(data: Optional[Body]) -> str:
    """Lowercase hex SHA-256 of ``data``; strings are hashed as UTF-8."""
    return hashlib.sha256(_to_bytes(data)).hexdigest()


def hmac_sha256(key: bytes, msg: str) -> bytes:
    return hmac.new(key, msg.encode('utf-8'), hashlib.sha256).digest()


def format_timestamp(when: Optional[datetime] = None) -> str:
    """Render ``when`` (default: now) as ``YYYYMMDDTHHMMSSZ``.

    Naive datetimes are taken to be UTC already.
    """
    if when is None:
        when = datetime.now(timezone.utc)
    elif when.tzinfo is not None:
        when = when.astimezone(timezone.utc)
    return when.strftime(TIMESTAMP_FORMAT)


def validate_timestamp(timestamp: str) -> str:
    if not isinstance(timestamp, str) or not _TIMESTAMP_RE.fullmatch(timestamp):
        raise InvalidTimestampFormat(timestamp)
    try:
        datetime.strptime(timestamp, TIMESTAMP_FORMAT)
    except ValueError:
        raise InvalidTimestampFormat(timestamp) from None
    return timestamp


# ---------------------------------------------------------------------------
# Canonical request
# ---------------------------------------------------------------------------


def _collapse(value: str) -> str:
    # Trimall: strip the ends, squeeze inner whitespace runs to one space
    return ' '.join(value.split())


def _normalize_headers(headers: HeaderSet) -> Headers:
    items = headers.items() if isinstance(headers, Mapping) else headers
    merged: Dict[str, List[str]] = {}
    for name, value in items:
        # a header without a value is not sent, so it is not signed either
        if value is None:
            continue
        if not isinstance(value, str):
            raise TypeError(f'Value of header {name!r} must be str, not {type(value).__name__}')
        merged.setdefault(name.strip().lower(), []).append(_collapse(value))
    return {name: ','.join(values) for name, values in merged.items()}


def canonical_headers(headers: HeaderSet) -> Tuple[str, str]:
    """
    Return the canonical header block and the signed header list.

    The block holds one ``name:value\\n`` line per header, sorted by the
    lowercase name. The signed header list is the same names joined by ``;``.
    """
    normalized = _normalize_headers(headers)
    names = sorted(normalized)
    block = ''.join(f'{name}:{normalized[name]}\n' for name in names)
    return block, ';'.join(names)


def canonical_uri(path: str) -> str:
    return quote(path or '/', safe='/')


def canonical_query_string(query: str) -> str:
    """Sort query pairs by key then value and URI-encode both sides."""
    if not query:
        return ''
    pairs = []
    for pair in query.split('&'):
        if not pair:
            continue
        key, _, value = pair.partition('=')
        pairs.append((
            quote(unquote(key), safe=_UNRESERVED),
            quote(unquote(value), safe=_UNRESERVED),
        ))
    return '&'.join(f'{key}={value}' for key, value in sorted(pairs))


def build_canonical_request(
        method: str,
        path: str,
        query: str,
        headers: HeaderSet,
        body: Optional[Body],
        required_headers: Iterable[str] = REQUIRED_HEADERS
) -> Tuple[str, str]:
    """
    Build the canonical request and the signed header list.

    Every header in ``headers`` is signed. Each name in ``required_headers``
    must be present, otherwise ``MissingHeader`` is raised.

        CanonicalRequest =
            HTTPRequestMethod + '\\n' +
            CanonicalURI + '\\n' +
            CanonicalQueryString + '\\n' +
            CanonicalHeaders + '\\n' +
            SignedHeaders + '\\n' +
            HexEncode(Hash(RequestPayload))
    """
    normalized = _normalize_headers(headers)
    for name in required_headers:
        if name.lower() not in normalized:
            raise MissingHeader(name)

    header_block, signed_headers = canonical_headers(normalized)
    canonical_request = '\n'.join((
        method.upper(),
        canonical_uri(path),
        canonical_query_string(query),
        header_block,
        signed_headers,
        hash_payload(body),
    ))
    return canonical_request, signed_headers


# ---------------------------------------------------------------------------
# String to sign, signing key and signature
# ---------------------------------------------------------------------------


def build_credential_scope(
        timestamp: str,
        region: Union[str, Region],
        service: Union[str, Service]
) -> str:
    validate_timestamp(timestamp)
    return '/'.join((timestamp[:8], scope_name(region), scope_name(service), TERMINATOR))


def build_string_to_sign(timestamp: str, credential_scope: str, canonical_request: str) -> str:
    return '\n'.join((ALGORITHM, timestamp, credential_scope, hash_payload(canonical_request)))


def derive_signing_key(
        secret_key: Optional[str],
        date: str,
        region: Union[str, Region],
        service: Union[str, Service]
) -> bytes:
    """
    Derive the 32-byte signing key. ``date`` may be a full timestamp; only
    its YYYYMMDD prefix is used.

        kDate = HMAC("AWS4" + kSecret, Date)
        kRegion = HMAC(kDate, Region)
        kService = HMAC(kRegion, Service)
        kSigning = HMAC(kService, "aws4_request")
    """
    if not secret_key:
        raise MissingCredentials('AWS secret key is missing or empty')
    k_date = hmac_sha256(('AWS4' + secret_key).encode('utf-8'), date[:8])
    k_region = hmac_sha256(k_date, scope_name(region))
    k_service = hmac_sha256(k_region, scope_name(service))
    return hmac_sha256(k_service, TERMINATOR)


def compute_signature(signing_key: bytes, string_to_sign: str) -> str:
    return hmac.new(signing_key, string_to_sign.encode('utf-8'), hashlib.sha256).hexdigest()


def build_authorization_header(
        access_key_id: str,
        credential_scope: str,
        signed_headers: str,
        signature: str
) -> str:
    return (
        f'{ALGORITHM} Credential={access_key_id}/{credential_scope}, '
        f'SignedHeaders={signed_headers}, Signature={signature}'
    )


def sign(
        method: str,
        path: str,
        query: str,
        headers: HeaderSet,
        body: Optional[Body],
        timestamp: str,
        region: Union[str, Region],
        service: Union[str, Service],
        credential: Optional[Credential],
        required_headers: Iterable[str] = REQUIRED_HEADERS
) -> str:
    """
    Sign one request and return the value of its Authorization header.

    Credentials and the timestamp are checked before anything is hashed, so
    a failure never leaves a partial signature behind.
    """
    if credential is None or not credential.is_complete:
        raise MissingCredentials()
    credential_scope = build_credential_scope(timestamp, region, service)

    canonical_request, signed_headers = build_canonical_request(
        method, path, query, headers, body, required_headers
    )
    logger.debug('CanonicalRequest:\n%s', canonical_request)
    string_to_sign = build_string_to_sign(timestamp, credential_scope, canonical_request)
    logger.debug('StringToSign:\n%s', string_to_sign)

    signing_key = derive_signing_key(credential.secret_key, timestamp, region, service)
    signature = compute_signature(signing_key, string_to_sign)
    del signing_key
    logger.debug('Signature:\n%s', signature)

    return build_authorization_header(
        credential.access_key_id, credential_scope, signed_headers, signature
    )


class SigV4Signer:
    """Signs JSON API calls (POST to ``/``) for one credential, region and service."""

    def __init__(
            self,
            credential: Credential,
            region: Union[str, Region],
            service: Union[str, Service] = Service.ECS
    ) -> None:
        self.credential = credential
        self.region = scope_name(region)
        self.service = scope_name(service)

    @property
    def host(self) -> str:
        return endpoint_host(self.service, self.region)

    def build_headers(self, target: Optional[Target], body: Optional[Body], timestamp: Optional[str] = None) -> Headers:
        """Return the unsigned header set for a call to ``target``."""
        headers = {
            'Host': self.host,
            'Content-Type': JSON_CONTENT_TYPE,
            'Content-Length': str(len(_to_bytes(body))),
            'X-Amz-Date': timestamp or format_timestamp(),
        }
        if target is not None:
            headers['X-Amz-Target'] = target.target if isinstance(target, EcsAction) else target
        if self.credential is not None and self.credential.session_token:
            headers['X-Amz-Security-Token'] = self.credential.session_token
        return headers

    def create_headers(self, target: Optional[Target], body: Optional[Body], timestamp: Optional[str] = None) -> Headers:
        """Return the header set for a call to ``target`` including ``Authorization``."""
        headers = self.build_headers(target, body, timestamp)
        headers['Authorization'] = sign(
            'POST',
            '/',
            '',
            headers,
            body,
            headers['X-Amz-Date'],
            self.region,
            self.service,
            self.credential,
        )
        logger.debug('Signed %s request for %s', headers['X-Amz-Target'], self.host)
        return headers
