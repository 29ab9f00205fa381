"""
Integration tests for salesperson attendance.
"""

import pytest
from datetime import date, datetime, timezone
from decimal import Decimal
from vyaapar.exceptions import BusinessLogicError
from vyaapar.models import AttendanceStatus, UserRole
from vyaapar.services import attendance_service


class TestAttendanceService:

    def test_login_then_logout(self, session, salesperson):
        login_at = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)
        logout_at = datetime(2026, 3, 2, 17, 20, tzinfo=timezone.utc)

        log = attendance_service.record_login(session, salesperson.id, now=login_at)
        assert log.status == AttendanceStatus.LOGGED_IN
        assert log.date == date(2026, 3, 2)

        log = attendance_service.record_logout(session, salesperson.id, now=logout_at)
        assert log.status == AttendanceStatus.LOGGED_OUT
        assert log.total_hours == Decimal('8.33')

    def test_second_login_same_day(self, session, salesperson):
        now = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)
        attendance_service.record_login(session, salesperson.id, now=now)

        with pytest.raises(BusinessLogicError) as excinfo:
            attendance_service.record_login(session, salesperson.id, now=now.replace(hour=10))
        assert excinfo.value.message == 'You have already logged in today'

    def test_logout_without_login(self, session, salesperson):
        with pytest.raises(BusinessLogicError) as excinfo:
            attendance_service.record_logout(session, salesperson.id,
                                             now=datetime(2026, 3, 2, 17, 0, tzinfo=timezone.utc))
        assert 'Please login first' in excinfo.value.message

    def test_double_logout(self, session, salesperson):
        attendance_service.record_login(session, salesperson.id,
                                        now=datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc))
        attendance_service.record_logout(session, salesperson.id,
                                         now=datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc))

        with pytest.raises(BusinessLogicError) as excinfo:
            attendance_service.record_logout(session, salesperson.id,
                                             now=datetime(2026, 3, 2, 13, 0, tzinfo=timezone.utc))
        assert excinfo.value.message == 'You have already logged out today'

    def test_history_filters(self, session, salesperson, make_user):
        other = make_user(UserRole.SALESPERSON)
        for day in (1, 2, 3):
            attendance_service.record_login(session, salesperson.id,
                                            now=datetime(2026, 3, day, 9, 0, tzinfo=timezone.utc))
        attendance_service.record_login(session, other.id, now=datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc))

        logs, total = attendance_service.get_history(session, salesperson_id=salesperson.id)
        assert total == 3
        assert [log.date.day for log in logs] == [3, 2, 1]

        logs, total = attendance_service.get_history(
            session, start_date=date(2026, 3, 2), end_date=date(2026, 3, 2)
        )
        assert total == 2

    def test_calculate_hours_accepts_naive_datetimes(self):
        assert attendance_service.calculate_hours(
            datetime(2026, 3, 2, 9, 0), datetime(2026, 3, 2, 10, 30, tzinfo=timezone.utc)
        ) == Decimal('1.50')


class TestAttendanceApi:

    def test_clock_in_and_out(self, client, salesperson, admin, auth_headers):
        headers = auth_headers(salesperson)
        admin_headers = auth_headers(admin)
        salesperson_id = salesperson.id

        response = client.post('/attendance/login', headers=headers)
        assert response.status_code == 201
        assert response.get_json()['data']['status'] == 'LOGGED_IN'

        assert client.post('/attendance/login', headers=headers).status_code == 400

        response = client.post('/attendance/logout', headers=headers)
        assert response.status_code == 200
        assert response.get_json()['data']['status'] == 'LOGGED_OUT'

        history = client.get('/attendance/my-history', headers=headers).get_json()['data']
        assert history['pagination']['total'] == 1

        everyone = client.get(f'/attendance/all?salesperson_id={salesperson_id}',
                              headers=admin_headers).get_json()['data']
        assert everyone['logs'][0]['salesperson']['id'] == salesperson_id

    def test_all_is_admin_only(self, client, salesperson, auth_headers):
        assert client.get('/attendance/all', headers=auth_headers(salesperson)).status_code == 403
