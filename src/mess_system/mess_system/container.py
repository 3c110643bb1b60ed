from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_TOKEN_MINUTES
from .dashboard.mysql_dashboard_repository import MySQLDashboardRepository
from .dashboard.repository import DashboardRepository
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .messes.mysql_mess_repository import MySQLMessRepository
from .messes.repository import MessRepository
from .messes.service import MessService
from .plans.mysql_plan_repository import MySQLPlanRepository
from .plans.repository import PlanRepository
from .plans.service import PlanService
from .subscriptions.mysql_subscription_repository import MySQLSubscriptionRepository
from .subscriptions.repository import SubscriptionRepository
from .subscriptions.service import SubscriptionService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService
from .users.tokens import TokenService


@dataclass(frozen=True)
class Container:
    conn: Optional[Any]

    users_repo: UserRepository
    messes_repo: MessRepository
    plans_repo: PlanRepository
    subscriptions_repo: SubscriptionRepository
    attendance_repo: AttendanceRepository
    dashboard_repo: DashboardRepository

    auth_service: AuthService
    mess_service: MessService
    plan_service: PlanService
    subscription_service: SubscriptionService
    attendance_service: AttendanceService
    dashboard_service: DashboardService


def assemble(
    *,
    conn: Optional[Any],
    users_repo: UserRepository,
    messes_repo: MessRepository,
    plans_repo: PlanRepository,
    subscriptions_repo: SubscriptionRepository,
    attendance_repo: AttendanceRepository,
    dashboard_repo: DashboardRepository,
    tokens: TokenService,
) -> Container:
    """Wire services onto a given set of repositories."""
    return Container(
        conn=conn,
        users_repo=users_repo,
        messes_repo=messes_repo,
        plans_repo=plans_repo,
        subscriptions_repo=subscriptions_repo,
        attendance_repo=attendance_repo,
        dashboard_repo=dashboard_repo,
        auth_service=AuthService(users_repo, tokens),
        mess_service=MessService(messes_repo, plans_repo),
        plan_service=PlanService(plans_repo, messes_repo),
        subscription_service=SubscriptionService(subscriptions_repo, plans_repo, messes_repo, attendance_repo),
        attendance_service=AttendanceService(attendance_repo, subscriptions_repo),
        dashboard_service=DashboardService(messes_repo, dashboard_repo),
    )


def build_container(
    *,
    db_config: dict,
    jwt_secret: str,
    jwt_expires_minutes: int = DEFAULT_TOKEN_MINUTES,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return assemble(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        messes_repo=MySQLMessRepository(conn),
        plans_repo=MySQLPlanRepository(conn),
        subscriptions_repo=MySQLSubscriptionRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        dashboard_repo=MySQLDashboardRepository(conn),
        tokens=TokenService(jwt_secret, expires_minutes=jwt_expires_minutes),
    )
