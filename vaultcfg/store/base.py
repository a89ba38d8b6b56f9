"""
Base classes for vaultcfg record stores.

This module defines the store boundary the resolution engine depends on
and the HTTP client foundation the Vault store is built on.

Design Principles:
1. Async-first: All I/O operations are async
2. Type-safe: Pydantic models for all records
3. Observable: Request/response logging hooks
4. Resilient: Built-in retry with exponential backoff

Retry Strategy:
    - Retryable errors: timeouts, network and protocol errors, 429, 5xx
    - Non-retryable: 4xx (except 429), auth errors
    - Backoff: exponential with jitter
"""

from __future__ import annotations

import asyncio
import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

import httpx

if TYPE_CHECKING:
    from .schemas import ConfigResource, SecretEngine

logger = logging.getLogger(__name__)


# =============================================================================
# Exceptions
# =============================================================================


class StoreError(Exception):
    """Base exception for store errors."""

    def __init__(
        self,
        message: str,
        store: str,
        *,
        status_code: int | None = None,
        response_body: str | None = None,
        errors: list[str] | None = None,
        retryable: bool = False,
    ):
        super().__init__(message)
        self.store = store
        self.status_code = status_code
        self.response_body = response_body
        self.errors = errors or []
        self.retryable = retryable

    @property
    def message(self) -> str:
        """
        Human readable error message.

        Vault reports failures as a list of strings; those win over the
        generic message when present.
        """
        if self.errors:
            return ". ".join(self.errors)
        return self.args[0]

    def __str__(self) -> str:
        parts = [f"[{self.store}] {self.message}"]
        if self.status_code:
            parts.append(f"(status={self.status_code})")
        return " ".join(parts)


class AuthenticationError(StoreError):
    """Raised when authentication fails (401/403)."""

    def __init__(self, message: str, store: str, **kwargs):
        super().__init__(message, store, retryable=False, **kwargs)


class RateLimitError(StoreError):
    """Raised when rate limit is exceeded (429)."""

    def __init__(
        self,
        message: str,
        store: str,
        *,
        retry_after: float | None = None,
        **kwargs,
    ):
        super().__init__(message, store, retryable=True, **kwargs)
        self.retry_after = retry_after


class NotFoundError(StoreError):
    """Raised when a record is not found (404)."""

    def __init__(self, message: str, store: str, **kwargs):
        super().__init__(message, store, retryable=False, **kwargs)


class ValidationError(StoreError):
    """Raised when the store rejects the request (400/422)."""

    def __init__(self, message: str, store: str, **kwargs):
        super().__init__(message, store, retryable=False, **kwargs)


# =============================================================================
# Store boundary
# =============================================================================


class RecordStore(Protocol):
    """
    The three store operations the resolution engine depends on.

    query_record and find_record hit the remote store and raise StoreError
    on failure. create_record is local construction only.
    """

    async def query_record(
        self, resource_class: str, *, backend: str, type: str
    ) -> ConfigResource:
        ...

    def create_record(
        self, resource_class: str, *, backend: str, type: str
    ) -> ConfigResource:
        ...

    async def find_record(self, resource_class: str, record_id: str) -> SecretEngine:
        ...


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True, slots=True)
class StoreConfig:
    """Configuration for an HTTP store client."""

    # Authentication
    token: str | None = None

    # Connection
    base_url: str = ""
    timeout: float = 30.0

    # Retries
    max_retries: int = 3
    retry_delay: float = 1.0

    # Observability
    log_requests: bool = False
    log_responses: bool = False


# =============================================================================
# Base Client
# =============================================================================


class StoreClient(ABC):
    """
    Abstract base class for HTTP backed stores.

    Provides common functionality:
    - HTTP client management
    - Authentication header injection
    - Error handling and mapping
    - Request/response logging

    Subclasses must implement:
    - name: Store identifier
    - _get_auth_headers(): Return authentication headers
    - _parse_errors(): Extract error strings from a failed response
    """

    def __init__(self, config: StoreConfig, *, transport: httpx.AsyncBaseTransport | None = None):
        """
        Initialize the store client.

        Args:
            config: Store configuration
            transport: Optional httpx transport (used by tests)
        """
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name for this store."""
        ...

    @abstractmethod
    def _get_auth_headers(self) -> dict[str, str]:
        """Return authentication headers for requests."""
        ...

    def _parse_errors(self, response: httpx.Response) -> list[str]:
        """Return the error strings carried by a failed response."""
        return []

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                timeout=self.config.timeout,
                transport=self._transport,
                headers={
                    "Accept": "application/json",
                    **self._get_auth_headers(),
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, path: str) -> httpx.Response:
        """
        Make an HTTP request with retry and exponential backoff.

        Raises:
            StoreError: On any non-retryable error or after max retries
        """
        last_error: StoreError | None = None

        for attempt in range(self.config.max_retries + 1):
            try:
                return await self._do_request(method, path)
            except StoreError as e:
                last_error = e

                if not e.retryable:
                    raise

                if attempt >= self.config.max_retries:
                    logger.warning(
                        f"[{self.name}] Max retries ({self.config.max_retries}) "
                        f"reached for {method} {path}"
                    )
                    raise

                backoff = self._calculate_backoff(attempt, e)
                logger.info(
                    f"[{self.name}] Retry {attempt + 1}/{self.config.max_retries} "
                    f"for {method} {path} after {backoff:.2f}s"
                )
                await asyncio.sleep(backoff)

        if last_error:
            raise last_error
        raise StoreError("Unknown error", self.name)

    def _calculate_backoff(self, attempt: int, error: StoreError) -> float:
        """Exponential backoff with ±25% jitter, capped at 60 seconds."""
        if isinstance(error, RateLimitError) and error.retry_after:
            return error.retry_after

        base_delay = self.config.retry_delay * (2**attempt)
        jitter = base_delay * 0.25 * (2 * random.random() - 1)
        return min(base_delay + jitter, 60.0)

    async def _do_request(self, method: str, path: str) -> httpx.Response:
        """Execute a single HTTP request."""
        client = await self._get_client()

        if self.config.log_requests:
            logger.debug(f"[{self.name}] {method} {path}")

        try:
            response = await client.request(method=method, url=path)
        except httpx.TimeoutException as e:
            raise StoreError(f"Request timeout: {e}", self.name, retryable=True) from e
        except httpx.NetworkError as e:
            raise StoreError(f"Network error: {e}", self.name, retryable=True) from e
        except httpx.RequestError as e:
            raise StoreError(f"Request error: {e}", self.name, retryable=True) from e

        if self.config.log_responses:
            logger.debug(
                f"[{self.name}] Response: status={response.status_code} "
                f"body={response.text[:500] if response.text else 'empty'}"
            )

        self._check_response(response)
        return response

    def _check_response(self, response: httpx.Response) -> None:
        """
        Check response for errors and raise appropriate exceptions.

        Raises:
            AuthenticationError: For 401/403
            RateLimitError: For 429
            NotFoundError: For 404
            ValidationError: For 400/422
            StoreError: For other errors
        """
        if response.is_success:
            return

        status = response.status_code
        body = response.text
        errors = self._parse_errors(response)

        if status == 401 or status == 403:
            raise AuthenticationError(
                f"Authentication failed: {body}",
                self.name,
                status_code=status,
                response_body=body,
                errors=errors,
            )

        if status == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                "Rate limit exceeded",
                self.name,
                status_code=status,
                response_body=body,
                errors=errors,
                retry_after=float(retry_after) if retry_after else None,
            )

        if status == 404:
            raise NotFoundError(
                f"Resource not found: {body}",
                self.name,
                status_code=status,
                response_body=body,
                errors=errors,
            )

        if status == 400 or status == 422:
            raise ValidationError(
                f"Validation error: {body}",
                self.name,
                status_code=status,
                response_body=body,
                errors=errors,
            )

        raise StoreError(
            f"Request failed: {body}",
            self.name,
            status_code=status,
            response_body=body,
            errors=errors,
            retryable=status >= 500,
        )

    async def __aenter__(self) -> StoreClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
