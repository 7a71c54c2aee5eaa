from datetime import date, timedelta
from typing import Optional

from passport.auth import Principal
from passport.database import utcnow
from passport.models import Appointment, Message, Pregnancy, TestResult
from passport.repositories import Repository
from passport.schemas.clinician import ClinicianStatistics, TrimesterBreakdown


def trimester(start_date: date, today: date) -> Optional[str]:
    weeks = (today - start_date).days // 7
    if weeks < 0:
        return None
    if weeks < 14:
        return "first"
    if weeks < 28:
        return "second"
    return "third"


class StatisticsService:
    async def clinician_statistics(
        self, principal: Principal, repo: Repository, today: Optional[date] = None
    ) -> ClinicianStatistics:
        today = today or utcnow().date()
        week_start = today - timedelta(days=today.weekday())
        week_end = week_start + timedelta(days=7)

        patients = await repo.list_patients()
        appointments = [a for a in await repo.list_all(Appointment) if a.status != "cancelled"]
        appointment_days = [a.date_time.date() for a in appointments]

        durations = [a.duration for a in appointments if a.duration]
        average = round(sum(durations) / len(durations), 1) if durations else 0.0

        by_trimester = TrimesterBreakdown()
        for pregnancy in await repo.list_all(Pregnancy):
            if pregnancy.due_date and pregnancy.due_date < today:
                continue
            bucket = trimester(pregnancy.start_date, today)
            if bucket:
                setattr(by_trimester, bucket, getattr(by_trimester, bucket) + 1)

        return ClinicianStatistics(
            patient_count=len(patients),
            appointments_today=sum(1 for d in appointment_days if d == today),
            appointments_this_week=sum(1 for d in appointment_days if week_start <= d < week_end),
            pending_test_results=await repo.count(TestResult, status="follow_up"),
            unread_messages=await repo.count(Message, to_id=principal.id, read=False),
            average_appointment_duration=average,
            patients_by_trimester=by_trimester,
        )


statistics_service = StatisticsService()
