from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Credential:
    """An access key pair supplied by the caller for each signing operation.

    The secret key and session token never show up in ``repr`` so a
    credential can be logged by accident without leaking them.
    """

    access_key_id: str
    secret_key: str = field(repr=False)
    session_token: Optional[str] = field(default=None, repr=False)

    @property
    def is_complete(self) -> bool:
        return bool(self.access_key_id) and bool(self.secret_key)
