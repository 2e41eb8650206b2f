"""
SendSafely API credentials and the credential test.

The host stores credentials under the ``sendSafelyApi`` type with the
fields ``baseUrl``, ``apiKey`` and ``apiSecret``. Every SendSafely request
authenticates with the ``ss-api-key`` header.
"""

import asyncio
import logging
from typing import Any

import aiohttp
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
    ValidationError,
    field_validator,
)

from core.errors.exceptions import (
    CredentialsError,
    SdkError,
    classify_http_status,
)
from core.security.redaction import sanitize_error
from sendsafely_node.host import ExecutionHost

logger = logging.getLogger(__name__)

CREDENTIALS_NAME = "sendSafelyApi"
DEFAULT_BASE_URL = "https://app.sendsafely.com"
API_KEY_HEADER = "ss-api-key"
USER_ENDPOINT = "/api/v2.0/user/"

MISSING_CREDENTIALS_MESSAGE = "Missing required credentials: baseUrl, apiKey, or apiSecret"
REQUIRED_FIELDS = ("baseUrl", "apiKey", "apiSecret")

# (label) per status code; category comes from classify_http_status
_STATUS_LABELS: dict[int, str] = {
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not found",
    429: "Rate limited",
    500: "Server error",
    502: "Server error",
    503: "Server error",
    504: "Server error",
}


def _is_blank(value: Any) -> bool:
    return value is None or not str(value).strip()


def _describe(error: ValidationError) -> str:
    """One line per failed field, without the rejected input values."""
    return sanitize_error(
        "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in error.errors()
        )
    )


class SendSafelyCredentials(BaseModel):
    """Resolved SendSafely API credentials.

    Secrets are held as SecretStr so they never appear in repr or logs.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    base_url: str = Field(default=DEFAULT_BASE_URL, alias="baseUrl")
    api_key: SecretStr = Field(..., alias="apiKey")
    api_secret: SecretStr = Field(..., alias="apiSecret")

    @field_validator("base_url", mode="before")
    @classmethod
    def normalize_base_url(cls, v: Any) -> str:
        """Strip the trailing slash; an empty base URL is rejected."""
        if v is None or not str(v).strip():
            raise ValueError("baseUrl cannot be empty")
        v = str(v).strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"baseUrl must start with http:// or https://, got: {v!r}")
        return v

    @field_validator("api_key", "api_secret", mode="before")
    @classmethod
    def validate_non_empty(cls, v: Any, info) -> Any:
        """Ensure secrets are not empty or whitespace-only."""
        raw = v.get_secret_value() if isinstance(v, SecretStr) else v
        if not raw or not str(raw).strip():
            raise ValueError(f"{info.field_name} cannot be empty")
        return str(raw).strip()

    @property
    def auth_headers(self) -> dict[str, str]:
        return {API_KEY_HEADER: self.api_key.get_secret_value()}

    @classmethod
    def from_mapping(cls, data: dict[str, Any] | None) -> "SendSafelyCredentials":
        """
        Build credentials from the host's raw credential mapping.

        Raises:
            CredentialsError: If the mapping is missing, has an absent or blank
                field, or holds a value that fails validation
        """
        if data is None:
            raise CredentialsError(
                "No credentials returned! Configure the SendSafely API credentials for this action."
            )
        if any(_is_blank(data.get(name)) for name in REQUIRED_FIELDS):
            raise CredentialsError(MISSING_CREDENTIALS_MESSAGE)
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise CredentialsError(f"Invalid credentials: {_describe(e)}") from None


async def resolve_credentials(host: ExecutionHost) -> SendSafelyCredentials:
    """Fetch and validate the action's credentials from the host."""
    data = await host.get_credentials(CREDENTIALS_NAME)
    return SendSafelyCredentials.from_mapping(data)


def classify_credential_test_error(status: int, url: str) -> SdkError:
    """Classify a failed credential test response by HTTP status."""
    label = _STATUS_LABELS.get(status)
    if label is None:
        label = "Client error" if 400 <= status < 500 else "HTTP error"
    return SdkError(f"{label} ({status}): {url}", status_code=status)


async def verify_credentials(
    credentials: SendSafelyCredentials,
    timeout_seconds: int = 30,
    session: aiohttp.ClientSession | None = None,
) -> dict[str, Any]:
    """
    Test credentials against the SendSafely user endpoint.

    Args:
        credentials: Credentials to test
        timeout_seconds: Total request timeout
        session: Optional existing session (a private one is opened otherwise)

    Returns:
        The user record returned by SendSafely (empty dict for non-JSON bodies)

    Raises:
        SdkError: On a non-2xx response, timeout or connection failure
    """
    url = f"{credentials.base_url}{USER_ENDPOINT}"
    owns_session = session is None
    if session is None:
        session = aiohttp.ClientSession(headers={"Accept": "application/json"})

    logger.debug("Credential test starting", extra={"base_url": credentials.base_url})
    start_time = asyncio.get_running_loop().time()
    try:
        async with session.get(
            url,
            headers=credentials.auth_headers,
            timeout=aiohttp.ClientTimeout(total=timeout_seconds),
        ) as response:
            duration = asyncio.get_running_loop().time() - start_time
            if not 200 <= response.status < 300:
                error = classify_credential_test_error(response.status, url)
                logger.warning(
                    "Credential test failed",
                    extra={
                        "base_url": credentials.base_url,
                        "http_status": response.status,
                        "error_category": classify_http_status(response.status).value,
                        "duration_ms": round(duration * 1000, 2),
                    },
                )
                raise error

            try:
                data = await response.json(content_type=None)
            except ValueError:
                data = {}

            logger.info(
                "Credential test succeeded",
                extra={
                    "base_url": credentials.base_url,
                    "http_status": response.status,
                    "duration_ms": round(duration * 1000, 2),
                },
            )
            return data if isinstance(data, dict) else {}

    except TimeoutError as e:
        raise SdkError(f"Timeout after {timeout_seconds}s: {url}") from e

    except aiohttp.ClientError as e:
        logger.error(
            "Credential test connection error",
            extra={"base_url": credentials.base_url, "error_message": sanitize_error(e)},
        )
        raise SdkError(f"Connection error: {sanitize_error(e)}") from e

    finally:
        if owns_session:
            await session.close()


__all__ = [
    "API_KEY_HEADER",
    "CREDENTIALS_NAME",
    "DEFAULT_BASE_URL",
    "SendSafelyCredentials",
    "classify_credential_test_error",
    "resolve_credentials",
    "verify_credentials",
]
