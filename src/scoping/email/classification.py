"""
Classification of provider-reported delivery failures.

Structured fields (error ``name`` and HTTP status) are checked first; the
free-text markers are the fallback for providers or proxies that only
return a message.
"""

from scoping.email.interfaces import EmailOutcome, ErrorKind, ProviderErrorDetail
from scoping.shared.exceptions import ProviderError, SandboxRestriction

DOMAIN_NOT_VERIFIED_MARKER = "not verified"
SANDBOX_MARKERS = ("testing emails", "403")
CREDENTIAL_ERROR_NAMES = frozenset({"invalid_api_key", "missing_api_key"})
VALIDATION_ERROR_NAME = "validation_error"
DOMAINS_URL = "https://resend.com/domains"


def is_domain_not_verified(error: ProviderErrorDetail) -> bool:
    return DOMAIN_NOT_VERIFIED_MARKER in error.message.lower()


def is_credential_rejected(error: ProviderErrorDetail) -> bool:
    if error.name in CREDENTIAL_ERROR_NAMES:
        return True
    return error.name == VALIDATION_ERROR_NAME and "api key" in error.message.lower()


def has_sandbox_marker(message: str) -> bool:
    lowered = message.lower()
    return any(marker in lowered for marker in SANDBOX_MARKERS)


def is_sandbox_restriction(error: ProviderErrorDetail) -> bool:
    # A 403 that is not a domain problem is the sandbox recipient restriction.
    if error.status_code == 403 and not is_domain_not_verified(error):
        return True
    return has_sandbox_marker(error.message)


def is_sandbox_outcome(outcome: EmailOutcome) -> bool:
    """True when a failed outcome was caused by a sandbox-mode restriction."""
    if outcome.success:
        return False
    if outcome.error_kind is ErrorKind.SANDBOX_RESTRICTED:
        return True
    return has_sandbox_marker(outcome.error or "")


def classify_provider_error(error: ProviderErrorDetail, sender_address: str) -> ProviderError:
    """
    Turn a raw provider error into an actionable ``ProviderError``.

    Args:
        error: Error reported by the transport.
        sender_address: Sender the failed message was composed with.

    Returns:
        ProviderError (or SandboxRestriction) whose message is user-facing.
    """
    if is_domain_not_verified(error):
        return ProviderError(
            message=(
                f'Domain Verification Required: The domain for "{sender_address}" is not '
                f"verified in Resend. Please verify it at {DOMAINS_URL} or use "
                "'onboarding@resend.dev' for testing."
            ),
            kind=ErrorKind.DOMAIN_NOT_VERIFIED.value,
            name=error.name,
            provider_status=error.status_code,
        )
    if is_credential_rejected(error):
        return ProviderError(
            message="The API key provided is rejected by Resend. Please check your RESEND_API_KEY.",
            kind=ErrorKind.CREDENTIAL_REJECTED.value,
            name=error.name,
            provider_status=error.status_code,
        )
    if is_sandbox_restriction(error):
        return SandboxRestriction(
            message=error.message,
            name=error.name,
            provider_status=error.status_code,
        )
    return ProviderError(
        message=error.message,
        kind=ErrorKind.PROVIDER.value,
        name=error.name,
        provider_status=error.status_code,
    )
