from __future__ import annotations

from dataclasses import dataclass

from .database.connection import DBConfig, DatabaseConnection
from .donations.mysql_donation_repository import MySQLDonationRepository
from .donations.service import DonationEventService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: MySQLUserRepository
    donations_repo: MySQLDonationRepository

    auth_service: AuthService
    donation_service: DonationEventService


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config))

    users_repo = MySQLUserRepository(conn)
    donations_repo = MySQLDonationRepository(conn)

    return Container(
        conn=conn,
        users_repo=users_repo,
        donations_repo=donations_repo,
        auth_service=AuthService(users_repo),
        donation_service=DonationEventService(donations_repo, users_repo),
    )
