import re
from typing import Optional

from email_validator import EmailNotValidError, validate_email

from tenant_service.core.errors import TenantValidationError


SUBDOMAIN_PATTERN = re.compile(r"^[a-z0-9]([a-z0-9-]*[a-z0-9])?$")
TENANT_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9\s\-_]+$")
TENANT_ID_PATTERN = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$")
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 100
MIN_SUBDOMAIN_LENGTH = 3
MAX_SUBDOMAIN_LENGTH = 63
MIN_PASSWORD_LENGTH = 8
MAX_PAGE_SIZE = 100

RESERVED_SUBDOMAINS = frozenset({
    "www", "api", "admin", "app", "mail", "ftp", "smtp", "pop", "imap",
    "ns1", "ns2", "dns", "web", "blog", "shop", "store", "help", "support",
    "status", "cdn", "static", "assets", "images", "files", "docs", "test",
    "dev", "staging", "beta", "alpha", "demo", "example", "localhost",
})


def validate_tenant_name(name: Optional[str]) -> None:
    if not name or not name.strip():
        raise TenantValidationError("Tenant name cannot be null or empty")
    if len(name) < MIN_NAME_LENGTH:
        raise TenantValidationError(f"Tenant name must be at least {MIN_NAME_LENGTH} characters long")
    if len(name) > MAX_NAME_LENGTH:
        raise TenantValidationError(f"Tenant name cannot exceed {MAX_NAME_LENGTH} characters")
    if not TENANT_NAME_PATTERN.match(name):
        raise TenantValidationError(
            "Tenant name contains invalid characters. "
            "Only letters, numbers, spaces, hyphens, and underscores are allowed"
        )


def validate_subdomain(subdomain: Optional[str]) -> None:
    if not subdomain or not subdomain.strip():
        raise TenantValidationError("Subdomain cannot be null or empty")
    if len(subdomain) < MIN_SUBDOMAIN_LENGTH:
        raise TenantValidationError(f"Subdomain must be at least {MIN_SUBDOMAIN_LENGTH} characters long")
    if len(subdomain) > MAX_SUBDOMAIN_LENGTH:
        raise TenantValidationError(f"Subdomain cannot exceed {MAX_SUBDOMAIN_LENGTH} characters")
    if not SUBDOMAIN_PATTERN.match(subdomain):
        raise TenantValidationError(
            "Subdomain contains invalid characters. Only lowercase letters, numbers, "
            "and hyphens are allowed. Cannot start or end with hyphen"
        )
    if subdomain.lower() in RESERVED_SUBDOMAINS:
        raise TenantValidationError(f"Subdomain '{subdomain}' is reserved and cannot be used")


def validate_tenant_id(tenant_id: Optional[str]) -> None:
    # UUID format also guarantees the id never contains the ':' identity delimiter
    if not tenant_id or not tenant_id.strip():
        raise TenantValidationError("Tenant ID cannot be null or empty")
    if not TENANT_ID_PATTERN.match(tenant_id):
        raise TenantValidationError("Invalid tenant ID format. Expected UUID format")


def validate_pagination(page: int, size: int) -> None:
    if page < 0:
        raise TenantValidationError("Page number cannot be negative")
    if size < 1:
        raise TenantValidationError("Page size must be at least 1")
    if size > MAX_PAGE_SIZE:
        raise TenantValidationError(f"Page size cannot exceed {MAX_PAGE_SIZE}")


def validate_password(password: Optional[str]) -> None:
    if password is not None and len(password) < MIN_PASSWORD_LENGTH:
        raise TenantValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")


def is_valid_email(email: Optional[str]) -> bool:
    if not email or not email.strip():
        return False
    return EMAIL_PATTERN.match(email) is not None


def normalize_email(email: Optional[str]) -> str:
    """Check an address the way request bodies are checked and return its normalized form.

    The domain is lowercased and special-use domains such as ``.local`` are rejected.
    """
    if not email or not email.strip():
        raise TenantValidationError("Email is required")
    try:
        return validate_email(email.strip(), check_deliverability=False).normalized
    except EmailNotValidError as exc:
        raise TenantValidationError(f"Invalid email format: {exc}") from exc
