from passport.schemas.base import CamelModel


class TrimesterBreakdown(CamelModel):
    first: int = 0
    second: int = 0
    third: int = 0


class ClinicianStatistics(CamelModel):
    patient_count: int
    appointments_today: int
    appointments_this_week: int
    pending_test_results: int
    unread_messages: int
    average_appointment_duration: float
    patients_by_trimester: TrimesterBreakdown
