# src/stackit/scripts/create_admin.py
"""Create an administrator account, or promote an existing one."""
from __future__ import annotations

import argparse
import getpass
import logging
import sys

from sqlalchemy import select
from sqlalchemy.orm import Session

from stackit.core.errors import StackItError
from stackit.core.logging import setup_logging
from stackit.db.session import SessionLocal
from stackit.models import User
from stackit.models.user import ROLE_ADMIN, STATUS_ACTIVE
from stackit.services import accounts

logger = logging.getLogger(__name__)


def ensure_admin(db: Session, *, username: str, email: str, password: str | None) -> User:
    """Promote the account with this email to admin, creating it if needed."""
    user = db.scalar(select(User).where(User.email == email.strip().lower()))
    if user is None:
        if not password:
            raise StackItError("A password is required to create a new account")
        user = accounts.register_user(db, username=username, email=email, password=password)

    user.role = ROLE_ADMIN
    user.status = STATUS_ACTIVE
    db.commit()
    db.refresh(user)
    logger.info("User %s (%s) is now an administrator", user.id, user.username)
    return user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--username", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", help="prompted for when omitted")
    args = parser.parse_args(argv)

    setup_logging()
    password = args.password
    with SessionLocal() as db:
        exists = db.scalar(select(User.id).where(User.email == args.email.strip().lower()))
        if exists is None and not password:
            password = getpass.getpass("Password: ")
        try:
            ensure_admin(db, username=args.username, email=args.email, password=password)
        except StackItError as err:
            logger.error("Could not create admin: %s", err.message)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
