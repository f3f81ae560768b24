"""
Bootstrap helpers that source signing inputs from the process environment.

The signing functions never read the environment themselves; a caller builds
a ``Credential`` here once and passes it into every signing call.
"""

import logging
import os
from typing import Mapping, Optional

from .credentials import Credential
from .endpoints import Region
from .errors import MissingCredentials

logger = logging.getLogger(__name__)

ACCESS_KEY_ID_VAR = 'AWS_ACCESS_KEY_ID'
SECRET_KEY_VAR = 'AWS_SECRET_ACCESS_KEY'
SESSION_TOKEN_VAR = 'AWS_SESSION_TOKEN'
REGION_VARS = ('AWS_REGION', 'AWS_DEFAULT_REGION')


def load_credential(environ: Optional[Mapping[str, str]] = None) -> Credential:
    env = os.environ if environ is None else environ
    access_key_id = env.get(ACCESS_KEY_ID_VAR, '')
    secret_key = env.get(SECRET_KEY_VAR, '')
    missing = [
        name for name, value in ((ACCESS_KEY_ID_VAR, access_key_id), (SECRET_KEY_VAR, secret_key))
        if not value.strip()
    ]
    if missing:
        raise MissingCredentials(f"Environment variable(s) not set: {', '.join(missing)}")

    token = env.get(SESSION_TOKEN_VAR)
    if not token or not token.strip():
        token = None
    logger.debug('Loaded credential from the environment')
    return Credential(access_key_id, secret_key, token)


def load_region(
        environ: Optional[Mapping[str, str]] = None,
        default: Region = Region.US_EAST_1
) -> Region:
    """Return the region named by AWS_REGION or AWS_DEFAULT_REGION, else ``default``.

    Raises ValueError for a region the signer does not know.
    """
    env = os.environ if environ is None else environ
    for var in REGION_VARS:
        name = env.get(var, '').strip()
        if name:
            try:
                return Region(name)
            except ValueError:
                raise ValueError(f"Unsupported region {name!r} in {var}") from None
    return default
