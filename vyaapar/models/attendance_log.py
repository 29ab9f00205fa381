"""Attendance Log model - salesperson clock-in/out per day."""
import enum
import uuid
from sqlalchemy import Column, String, Date, DateTime, Numeric, Enum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from vyaapar.database import Base


class AttendanceStatus(enum.Enum):
    LOGGED_IN = 'LOGGED_IN'
    LOGGED_OUT = 'LOGGED_OUT'


class AttendanceLog(Base):
    """One attendance record per salesperson per (UTC) day."""

    __tablename__ = 'attendance_logs'
    __table_args__ = (
        UniqueConstraint('salesperson_id', 'date', name='uq_attendance_salesperson_date'),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    salesperson_id = Column(String(36), ForeignKey('users.id'), nullable=False, index=True)
    date = Column(Date, nullable=False)
    login_time = Column(DateTime(timezone=True), nullable=False)
    logout_time = Column(DateTime(timezone=True), nullable=True)
    total_hours = Column(Numeric(5, 2), nullable=True)
    status = Column(Enum(AttendanceStatus, name='attendance_status'), nullable=False,
                    default=AttendanceStatus.LOGGED_IN)

    salesperson = relationship('User')

    def __repr__(self):
        return f"<AttendanceLog(salesperson_id={self.salesperson_id}, date={self.date}, status={self.status.value})>"
