"""
Attendance service - salesperson clock-in/out tracking.
One record per salesperson per UTC day.
"""
import logging
from datetime import date, datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vyaapar.models import AttendanceLog, AttendanceStatus
from vyaapar.exceptions import BusinessLogicError

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def calculate_hours(login_time: datetime, logout_time: datetime) -> Decimal:
    """Hours between two instants, rounded to 2 decimals."""
    if login_time.tzinfo is None:
        login_time = login_time.replace(tzinfo=timezone.utc)
    if logout_time.tzinfo is None:
        logout_time = logout_time.replace(tzinfo=timezone.utc)
    seconds = Decimal(str((logout_time - login_time).total_seconds()))
    return (seconds / Decimal('3600')).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)


def _get_log(session: Session, salesperson_id: str, day: date) -> Optional[AttendanceLog]:
    return session.query(AttendanceLog).filter(
        AttendanceLog.salesperson_id == salesperson_id,
        AttendanceLog.date == day
    ).first()


def record_login(session: Session, salesperson_id: str, now: Optional[datetime] = None) -> AttendanceLog:
    now = now or _utc_now()
    today = now.date()

    if _get_log(session, salesperson_id, today):
        raise BusinessLogicError('You have already logged in today')

    log = AttendanceLog(
        salesperson_id=salesperson_id,
        date=today,
        login_time=now,
        status=AttendanceStatus.LOGGED_IN
    )
    try:
        session.add(log)
        session.commit()
    except IntegrityError:
        session.rollback()
        raise BusinessLogicError('You have already logged in today')

    logger.info(f"Salesperson {salesperson_id} clocked in at {now.isoformat()}")
    return log


def record_logout(session: Session, salesperson_id: str, now: Optional[datetime] = None) -> AttendanceLog:
    now = now or _utc_now()

    log = _get_log(session, salesperson_id, now.date())
    if not log:
        raise BusinessLogicError('You have not logged in today. Please login first.')
    if log.status == AttendanceStatus.LOGGED_OUT:
        raise BusinessLogicError('You have already logged out today')

    log.logout_time = now
    log.total_hours = calculate_hours(log.login_time, now)
    log.status = AttendanceStatus.LOGGED_OUT
    session.commit()

    logger.info(f"Salesperson {salesperson_id} clocked out after {log.total_hours}h")
    return log


def get_history(
    session: Session,
    salesperson_id: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    limit: int = 100,
    offset: int = 0
):
    """Attendance logs, newest first, optionally filtered by salesperson and date range."""
    query = session.query(AttendanceLog)
    if salesperson_id:
        query = query.filter(AttendanceLog.salesperson_id == salesperson_id)
    if start_date:
        query = query.filter(AttendanceLog.date >= start_date)
    if end_date:
        query = query.filter(AttendanceLog.date <= end_date)

    total = query.count()
    logs = query.order_by(AttendanceLog.date.desc()).offset(offset).limit(limit).all()
    return logs, total
