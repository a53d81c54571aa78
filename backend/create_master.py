#!/usr/bin/env python3
"""
Create a tenant and its MASTER user, or reset the password of an existing one.
Run this inside the container: docker-compose exec backend python create_master.py --help
"""
import argparse
import logging
import os
import sys

# Add the backend directory to the path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from tenant_service.core.config import settings
from tenant_service.core.database import SessionLocal
from tenant_service.core.errors import TenantServiceError
from tenant_service.core.logging_config import configure_logging
from tenant_service.core.roles import UserRole
from tenant_service.core.security import hash_password
from tenant_service.core.validation import (
    normalize_email,
    validate_password,
    validate_subdomain,
    validate_tenant_name,
)
from tenant_service.models.tenant import Tenant, TenantStatus
from tenant_service.models.tenant_user import TenantUser


logger = logging.getLogger("create_master")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Create a tenant MASTER user")
    parser.add_argument("--tenant-name", default=os.getenv("MASTER_TENANT_NAME", "Main Tenant"))
    parser.add_argument("--subdomain", default=os.getenv("MASTER_SUBDOMAIN", "main-tenant"))
    parser.add_argument("--email", default=os.getenv("MASTER_EMAIL", "master@main-tenant.com"))
    parser.add_argument("--password", default=os.getenv("MASTER_PASSWORD"))
    return parser.parse_args(argv)


def create_master(
    tenant_name: str, subdomain: str, email: str, password: str, session_factory=SessionLocal
) -> TenantUser:
    email = normalize_email(email)
    validate_password(password)
    db = session_factory()
    try:
        tenant = db.query(Tenant).filter(Tenant.subdomain == subdomain).first()
        if not tenant:
            validate_tenant_name(tenant_name)
            validate_subdomain(subdomain)
            tenant = Tenant(name=tenant_name, subdomain=subdomain, status=TenantStatus.ACTIVE.value)
            db.add(tenant)
            db.flush()
            logger.info("Created tenant '%s' with ID: %s", subdomain, tenant.id)
        else:
            logger.info("Found tenant '%s' with ID: %s", subdomain, tenant.id)

        user = db.query(TenantUser).filter(TenantUser.tenant_id == tenant.id, TenantUser.email == email).first()
        if user:
            user.role = UserRole.MASTER.value
            user.password_hash = hash_password(password)
            user.is_active = True
            logger.info("User '%s' updated to MASTER role", email)
        else:
            user = TenantUser(
                tenant_id=tenant.id,
                email=email,
                password_hash=hash_password(password),
                role=UserRole.MASTER.value,
                is_active=True,
            )
            db.add(user)
            logger.info("MASTER user '%s' created", email)

        db.commit()
        db.refresh(user)
        return user
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def main(argv=None) -> int:
    configure_logging(settings.log_level)
    args = parse_args(argv)
    if not args.password:
        logger.error("A password is required (--password or MASTER_PASSWORD)")
        return 2
    try:
        user = create_master(args.tenant_name, args.subdomain, args.email, args.password)
    except TenantServiceError as exc:
        logger.error("Could not create MASTER user: %s", exc.message)
        return 1
    print(f"Tenant ID: {user.tenant_id}")
    print(f"Email: {user.email}")
    print(f"Role: {user.role}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
