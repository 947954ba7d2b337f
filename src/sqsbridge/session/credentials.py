"""
Module: session/credentials.py
Description: Static credential provider built from a key/secret pair.
"""

from typing import Optional

from botocore.credentials import CredentialProvider, Credentials
from botocore.exceptions import NoCredentialsError, PartialCredentialsError


class StaticCredentialProvider(CredentialProvider):
    """
    Credential provider for a fixed access key and secret.

    The credentials are built on the first load() and cached on the
    provider, later calls return the same object.
    """

    METHOD = "static"
    CANONICAL_NAME = "Static"

    def __init__(self, key: str, secret: str, token: Optional[str] = None):
        super().__init__()
        self.key = key
        self.secret = secret
        self.token = token
        self._credentials: Optional[Credentials] = None

    def load(self) -> Credentials:
        """
        Return the cached credentials, building them on first use.

        Raises:
            NoCredentialsError: If neither key nor secret is set
            PartialCredentialsError: If only one of key and secret is set
        """
        if self._credentials is not None:
            return self._credentials

        if not self.key and not self.secret:
            raise NoCredentialsError()
        if not self.key:
            raise PartialCredentialsError(provider=self.METHOD, cred_var="key")
        if not self.secret:
            raise PartialCredentialsError(provider=self.METHOD, cred_var="secret")

        self._credentials = Credentials(
            access_key=self.key,
            secret_key=self.secret,
            token=self.token,
            method=self.METHOD,
        )
        return self._credentials
