"""
Module: test_configurator.py
Description: Unit tests for ClientConfigurator.

Covers the default key/secret bootstrap, credential validation failures,
endpoint overrides, response logging and custom session providers.
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import aioboto3
import pytest
from botocore.exceptions import InvalidRegionError, NoCredentialsError

from sqsbridge.errors import InvalidCredentialsError
from sqsbridge.models.config import Config, DataType
from sqsbridge.session.configurator import ClientConfigurator, ResolvedClientConfig, resolve
from sqsbridge.utils.logger import configure_logging


def _failing_provider_factory(error):
    provider = MagicMock()
    provider.load.side_effect = error
    return MagicMock(return_value=provider)


class TestDefaultPath:
    """Test cases for the key/secret bootstrap."""

    def test_resolve_defaults(self):
        resolved = resolve(Config(key="k", secret="s", region="us-west-1", retry_count=0))

        assert isinstance(resolved, ResolvedClientConfig)
        assert resolved.max_attempts == 10
        assert resolved.region == "us-west-1"
        assert resolved.session.region_name == "us-west-1"
        assert resolved.credentials.access_key == "k"
        assert resolved.credentials.secret_key == "s"

    @pytest.mark.parametrize("retry_count,expected", [(-3, 10), (0, 10), (1, 1), (7, 7)])
    def test_retry_count_clamp(self, retry_count, expected):
        resolved = resolve(Config(key="k", secret="s", region="eu-west-1", retry_count=retry_count))

        assert resolved.max_attempts == expected
        assert resolved.boto_config.retries == {"mode": "standard", "total_max_attempts": expected}

    def test_default_attempts_overridable(self):
        configurator = ClientConfigurator(default_attempts=3)

        resolved = configurator.resolve(Config(key="k", secret="s", region="eu-west-1"))

        assert resolved.max_attempts == 3

    def test_hostname_overrides_endpoint(self):
        resolved = resolve(Config(key="k", secret="s", region="us-west-1", hostname="http://localhost:4150"))

        assert resolved.endpoint_url == "http://localhost:4150"
        assert resolved.sqs().meta.endpoint_url == "http://localhost:4150"

    def test_empty_hostname_keeps_regional_endpoint(self):
        resolved = resolve(Config(key="k", secret="s", region="us-west-1"))

        assert resolved.endpoint_url is None
        assert "us-west-1" in resolved.sqs().meta.endpoint_url
        assert "us-west-1" in resolved.sns().meta.endpoint_url

    def test_clients_use_retry_config(self):
        resolved = resolve(Config(key="k", secret="s", region="us-west-1", retry_count=4))

        client = resolved.client("sqs")

        assert client.meta.config.retries["total_max_attempts"] == 4
        assert client.meta.config.retries["mode"] == "standard"

    def test_resolved_config_is_immutable(self):
        resolved = resolve(Config(key="k", secret="s", region="us-west-1"))

        with pytest.raises(AttributeError):
            resolved.region = "eu-west-1"

    def test_invalid_region_passes_through(self):
        with pytest.raises(InvalidRegionError):
            resolve(Config(key="k", secret="s", region="not a region!"))

    def test_async_session(self):
        resolved = resolve(Config(key="k", secret="s", region="us-west-1"))

        session = resolved.async_session()

        assert isinstance(session, aioboto3.Session)
        assert session.region_name == "us-west-1"


class TestCredentialValidation:
    """Test cases for eager credential validation."""

    def test_missing_credentials(self):
        with pytest.raises(InvalidCredentialsError) as exc_info:
            resolve(Config(region="us-west-1"))

        assert isinstance(exc_info.value.__cause__, NoCredentialsError)

    def test_failing_provider_stops_bootstrap(self):
        cause = RuntimeError("credential endpoint unavailable")
        session_factory = MagicMock()
        configurator = ClientConfigurator(
            credential_provider_factory=_failing_provider_factory(cause),
            session_factory=session_factory
        )

        with pytest.raises(InvalidCredentialsError) as exc_info:
            configurator.resolve(Config(key="k", secret="s", region="us-west-1"))

        assert exc_info.value.__cause__ is cause
        assert "credential endpoint unavailable" in str(exc_info.value)
        session_factory.assert_not_called()

    def test_provider_factory_receives_key_and_secret(self):
        factory = _failing_provider_factory(RuntimeError("boom"))

        with pytest.raises(InvalidCredentialsError):
            ClientConfigurator(credential_provider_factory=factory).resolve(
                Config(key="AKIDEXAMPLE", secret="secret", region="us-west-1")
            )

        factory.assert_called_once_with("AKIDEXAMPLE", "secret")

    def test_provider_returning_none(self):
        provider = MagicMock()
        provider.load.return_value = None
        configurator = ClientConfigurator(credential_provider_factory=MagicMock(return_value=provider))

        with pytest.raises(InvalidCredentialsError):
            configurator.resolve(Config(key="k", secret="s", region="us-west-1"))

    def test_timeout_raises_invalid_credentials(self):
        provider = MagicMock()
        provider.load.side_effect = lambda: time.sleep(0.5)
        session_factory = MagicMock()
        configurator = ClientConfigurator(
            credential_provider_factory=MagicMock(return_value=provider),
            session_factory=session_factory
        )

        with pytest.raises(InvalidCredentialsError) as exc_info:
            configurator.resolve(Config(key="k", secret="s", region="us-west-1"), timeout=0.05)

        assert isinstance(exc_info.value.__cause__, FutureTimeoutError)
        session_factory.assert_not_called()

    def test_timeout_not_reached(self):
        resolved = resolve(Config(key="k", secret="s", region="us-west-1"), timeout=5)

        assert resolved.credentials.access_key == "k"


class TestResponseLogging:
    """Test cases for the after-call response hook."""

    def _emit(self, resolved):
        resolved.session.events.emit(
            "after-call.sqs.SendMessage",
            http_response=SimpleNamespace(status_code=200, content=b"<ok/>"),
            parsed={},
            model=SimpleNamespace(name="SendMessage"),
            context={}
        )

    def test_responses_logged_with_custom_logger(self):
        log = MagicMock()
        resolved = resolve(Config(key="k", secret="s", region="us-west-1", logger=log))

        self._emit(resolved)

        log.info.assert_called_once_with(
            "AWS response",
            operation="SendMessage",
            status_code=200,
            body="<ok/>"
        )

    def test_response_logging_disabled(self):
        log = MagicMock()
        resolved = resolve(Config(key="k", secret="s", region="us-west-1", logger=log, log_responses=False))

        self._emit(resolved)

        log.info.assert_not_called()

    def test_default_logger_writes_responses(self, capsys):
        resolved = resolve(Config(key="k", secret="s", region="us-west-1"))

        self._emit(resolved)

        out = capsys.readouterr().out
        assert "AWS response" in out
        assert "SendMessage" in out

    def test_logging_level_change_applies_after_first_use(self, capsys):
        resolved = resolve(Config(key="k", secret="s", region="us-west-1"))
        self._emit(resolved)
        capsys.readouterr()

        configure_logging("WARNING")
        try:
            self._emit(resolved)
            assert capsys.readouterr().out == ""
        finally:
            configure_logging("INFO")

        self._emit(resolved)
        assert "AWS response" in capsys.readouterr().out


class TestCustomProvider:
    """Test cases for Config.aws_config_provider."""

    def test_provider_result_returned_unchanged(self):
        sentinel = object()
        provider = MagicMock(return_value=sentinel)
        config = Config(aws_config_provider=provider, region="us-west-1")

        assert resolve(config) is sentinel
        provider.assert_called_once()

    def test_provider_error_passes_through(self):
        error = InvalidCredentialsError(context="custom provider")
        config = Config(aws_config_provider=MagicMock(side_effect=error))

        with pytest.raises(InvalidCredentialsError) as exc_info:
            resolve(config)

        assert exc_info.value is error

    def test_default_path_skipped(self):
        factory = MagicMock()
        config = Config(aws_config_provider=MagicMock(return_value="resolved"))

        ClientConfigurator(credential_provider_factory=factory).resolve(config)

        factory.assert_not_called()

    def test_provider_receives_copy(self):
        config = Config(region="us-west-1", topic_prefix="dispatcher")
        config.add_attribute(DataType.STRING, "source", "api")

        def provider(c):
            assert c is not config
            assert c.region == "us-west-1"
            assert c.topic_prefix == "dispatcher"
            c.add_attribute(DataType.NUMBER, "leak", 1)
            c.region = "eu-west-1"
            return "resolved"

        config.aws_config_provider = provider

        assert resolve(config) == "resolved"
        assert config.region == "us-west-1"
        assert [a.title for a in config.attributes] == ["source"]


class TestAsyncSession:
    """Test cases for aioboto3 clients built from a resolved config."""

    @pytest.mark.asyncio
    async def test_async_client_uses_resolved_settings(self):
        resolved = resolve(Config(key="k", secret="s", region="us-west-1", hostname="http://localhost:4150"))

        async with resolved.async_session().client(
            "sqs",
            endpoint_url=resolved.endpoint_url,
            config=resolved.boto_config
        ) as sqs:
            assert sqs.meta.region_name == "us-west-1"
            assert sqs.meta.endpoint_url == "http://localhost:4150"


class TestConcurrentClients:
    """Test cases for sharing one resolved config across threads."""

    def test_clients_from_thread_pool(self):
        resolved = resolve(Config(key="k", secret="s", region="us-west-1", log_responses=False))

        with ThreadPoolExecutor(max_workers=8) as executor:
            clients = list(executor.map(lambda _: resolved.sqs(), range(16)))

        assert len(clients) == 16
        assert all(client.meta.region_name == "us-west-1" for client in clients)

    def test_client_creation_is_serialized(self):
        resolved = resolve(Config(key="k", secret="s", region="us-west-1", log_responses=False))
        counter_lock = threading.Lock()
        state = {"active": 0, "max_active": 0}

        def create_client(*args, **kwargs):
            with counter_lock:
                state["active"] += 1
                state["max_active"] = max(state["max_active"], state["active"])
            time.sleep(0.01)
            with counter_lock:
                state["active"] -= 1
            return MagicMock()

        with patch.object(resolved.session, "client", side_effect=create_client):
            with ThreadPoolExecutor(max_workers=8) as executor:
                list(executor.map(lambda _: resolved.client("sns"), range(16)))

        assert state["max_active"] == 1
