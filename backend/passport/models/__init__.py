from passport.models.user import User
from passport.models.pregnancy import Pregnancy
from passport.models.appointment import Appointment
from passport.models.vital_stat import VitalStat
from passport.models.test_result import TestResult
from passport.models.scan import Scan
from passport.models.message import Message
from passport.models.education_module import EducationModule
from passport.models.immunisation import ImmunisationHistory

__all__ = ["User", "Pregnancy", "Appointment", "VitalStat", "TestResult", "Scan", "Message",
           "EducationModule", "ImmunisationHistory"]
