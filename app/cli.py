"""Operational commands.

    storefront-deploy-check
    storefront-create-admin --name Admin --email admin@example.com --password ...
    storefront-create-admin --email existing@example.com   # promote
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from app.config import Settings
from app.context import AppContext
from storefront_common.exceptions import NotFoundError, StorefrontError
from storefront_common.logging import setup_logging

logger = logging.getLogger(__name__)


def deploy_check(settings: Optional[Settings] = None) -> int:
    """Return 0 when every deploy-critical variable is set, 1 otherwise."""
    settings = settings or Settings()
    logger.info("Checking deployment readiness")
    missing = settings.missing_required()
    if missing:
        logger.error("Missing required environment variables", extra={"missing": missing})
        return 1
    logger.info("Deployment readiness check passed")
    return 0


def create_admin(args: argparse.Namespace, ctx: AppContext) -> int:
    """Create an admin account, or promote the existing account with that email."""
    try:
        user = ctx.users.find_by_email(args.email)
    except NotFoundError:
        user = None

    if user is not None:
        if not user.is_admin:
            user.is_admin = True
            ctx.users.save(user)
            logger.info("Promoted user to admin", extra={"user_id": str(user.id)})
        else:
            logger.info("User is already an admin", extra={"user_id": str(user.id)})
        return 0

    if not args.name or not args.password:
        logger.error("--name and --password are required to create a new admin")
        return 2
    user = ctx.users.create(args.name, args.email, args.password, is_admin=True)
    logger.info("Created admin user", extra={"user_id": str(user.id)})
    return 0


def deploy_check_main() -> None:
    setup_logging("INFO")
    sys.exit(deploy_check())


def create_admin_main(argv: Optional[Sequence[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Create or promote an admin user")
    ap.add_argument("--email", required=True)
    ap.add_argument("--name")
    ap.add_argument("--password")
    args = ap.parse_args(argv)

    settings = Settings()
    setup_logging(settings.LOG_LEVEL)
    try:
        ctx = AppContext.from_settings(settings)
        sys.exit(create_admin(args, ctx))
    except (StorefrontError, ValueError) as exc:
        logger.error("Could not create admin", extra={"error": str(exc)})
        sys.exit(1)
