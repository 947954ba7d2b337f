"""
Module: session/configurator.py
Description: Resolves a Config into an authenticated AWS client configuration.

The default path validates the key/secret pair eagerly, applies a bounded
standard retry policy, binds the session to the configured region and
optionally rebases the service endpoint for emulators. Callers can replace
the whole path by setting Config.aws_config_provider.

Key Components:
- ClientConfigurator: Default bootstrap with injectable collaborators
- ResolvedClientConfig: Immutable result, hands out boto3 clients
- resolve(): Module level shortcut using the default collaborators

Dependencies: boto3, botocore, aioboto3
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import aioboto3
import boto3
from botocore.config import Config as BotoConfig
from botocore.credentials import CredentialProvider, Credentials, ReadOnlyCredentials
from botocore.utils import validate_region_name

from sqsbridge.errors import InvalidCredentialsError
from sqsbridge.models.config import Config
from sqsbridge.session.credentials import StaticCredentialProvider
from sqsbridge.session.retry import DEFAULT_MAX_ATTEMPTS, RetryPolicy
from sqsbridge.utils.logger import get_logger

logger = get_logger(__name__)

# Response bodies longer than this are cut in response logs
MAX_LOGGED_BODY = 2048


@dataclass(frozen=True)
class ResolvedClientConfig:
    """
    Ready to use AWS client configuration.

    Attributes:
        session: boto3 session bound to the region and credentials
        region: Region the session is bound to
        credentials: Frozen credentials, None when supplied by a custom provider
        retry_policy: Retry policy applied to every client
        boto_config: botocore client config carrying the retry settings
        endpoint_url: Endpoint override, None keeps the regional endpoint

    boto3 sessions are not thread safe, client creation is serialized so
    one resolved config can be shared by request threads.
    """

    session: boto3.Session
    region: str
    credentials: Optional[ReadOnlyCredentials]
    retry_policy: RetryPolicy
    boto_config: BotoConfig
    endpoint_url: Optional[str] = None
    _client_lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    @property
    def max_attempts(self) -> int:
        return self.retry_policy.max_attempts

    def client(self, service_name: str) -> Any:
        """Create a boto3 client for service_name with the resolved settings."""
        with self._client_lock:
            return self.session.client(
                service_name,
                endpoint_url=self.endpoint_url,
                config=self.boto_config,
            )

    def sqs(self) -> Any:
        return self.client("sqs")

    def sns(self) -> Any:
        return self.client("sns")

    def async_session(self) -> aioboto3.Session:
        """
        aioboto3 session with the same credentials and region.

        Clients created from it need endpoint_url and config passed
        explicitly, e.g. session.client("sqs", endpoint_url=resolved.endpoint_url,
        config=resolved.boto_config).
        """
        if self.credentials is None:
            return aioboto3.Session(region_name=self.region or None)

        return aioboto3.Session(
            aws_access_key_id=self.credentials.access_key,
            aws_secret_access_key=self.credentials.secret_key,
            aws_session_token=self.credentials.token,
            region_name=self.region or None,
        )


# Custom session setup, set as Config.aws_config_provider
SessionProviderFunc = Callable[[Config], ResolvedClientConfig]


def _response_logger(log: Any) -> Callable[..., None]:
    """Build an after-call hook that logs every AWS response."""

    def log_response(http_response=None, model=None, **kwargs) -> None:
        body = b""
        status_code = None
        if http_response is not None:
            status_code = http_response.status_code
            body = http_response.content or b""

        log.info(
            "AWS response",
            operation=getattr(model, "name", None),
            status_code=status_code,
            body=body[:MAX_LOGGED_BODY].decode("utf-8", errors="replace"),
        )

    return log_response


class ClientConfigurator:
    """
    Builds ResolvedClientConfig instances from Config values.

    Attributes:
        credential_provider_factory: Builds a credential provider from (key, secret)
        session_factory: Builds the boto3 session
        default_attempts: Attempts used when Config.retry_count is not positive

    Example:
        >>> configurator = ClientConfigurator()
        >>> resolved = configurator.resolve(Config(key="k", secret="s", region="us-west-1"))
        >>> sqs = resolved.sqs()
    """

    def __init__(
        self,
        credential_provider_factory: Callable[[str, str], CredentialProvider] = StaticCredentialProvider,
        session_factory: Callable[..., boto3.Session] = boto3.Session,
        default_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        self.credential_provider_factory = credential_provider_factory
        self.session_factory = session_factory
        self.default_attempts = default_attempts

    def resolve(self, config: Config, *, timeout: Optional[float] = None) -> ResolvedClientConfig:
        """
        Resolve config into an authenticated client configuration.

        A custom Config.aws_config_provider is called with a copy of config
        and its result or exception is passed through unchanged.

        Args:
            config: Client settings
            timeout: Seconds to wait for credential validation, None waits
                as long as the credential provider does. A provider call that
                outlives the timeout keeps running in its non-daemon worker
                thread, so a hung load() delays interpreter exit until it returns

        Returns:
            Resolved client configuration

        Raises:
            InvalidCredentialsError: If the credentials cannot be loaded
            botocore.exceptions.InvalidRegionError: If the region is malformed
        """
        if config.aws_config_provider is not None:
            return config.aws_config_provider(
                config.model_copy(update={"attributes": list(config.attributes)})
            )

        return self._default_config(config, timeout)

    def _default_config(self, config: Config, timeout: Optional[float]) -> ResolvedClientConfig:
        provider = self.credential_provider_factory(config.key, config.secret)
        credentials = self._load_credentials(provider, timeout)

        retry_policy = RetryPolicy(config.retry_count, default_attempts=self.default_attempts)

        if config.region:
            validate_region_name(config.region)

        frozen = credentials.get_frozen_credentials()
        session = self.session_factory(
            aws_access_key_id=frozen.access_key,
            aws_secret_access_key=frozen.secret_key,
            aws_session_token=frozen.token,
            region_name=config.region or None,
        )

        if config.log_responses:
            session.events.register(
                "after-call",
                _response_logger(config.logger or logger),
            )

        boto_config = BotoConfig(retries=retry_policy.boto_retries())

        # applied last so region based endpoint resolution cannot replace it
        endpoint_url = config.hostname or None

        return ResolvedClientConfig(
            session=session,
            region=session.region_name or "",
            credentials=frozen,
            retry_policy=retry_policy,
            boto_config=boto_config,
            endpoint_url=endpoint_url,
        )

    @staticmethod
    def _load_credentials(provider: CredentialProvider, timeout: Optional[float]) -> Credentials:
        try:
            if timeout is None:
                credentials = provider.load()
            else:
                executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="sqsbridge-credentials")
                try:
                    credentials = executor.submit(provider.load).result(timeout=timeout)
                finally:
                    executor.shutdown(wait=False)
        except Exception as e:
            raise InvalidCredentialsError().with_context(e) from e

        if credentials is None:
            raise InvalidCredentialsError(context="credential provider returned no credentials")

        return credentials


def resolve(config: Config, *, timeout: Optional[float] = None) -> ResolvedClientConfig:
    """Resolve config with the default ClientConfigurator."""
    return ClientConfigurator().resolve(config, timeout=timeout)
