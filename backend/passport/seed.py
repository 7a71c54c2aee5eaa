"""
Start-up data: the education library every deployment ships with, plus an
optional demo clinician/patient pair for local development.
"""

import logging
from datetime import timedelta

from passport.database import utcnow
from passport.models import (
    Appointment, EducationModule, ImmunisationHistory, Message, Pregnancy, Scan, TestResult, User, VitalStat,
)
from passport.repositories import Repository

logger = logging.getLogger(__name__)

_IMAGE = "https://images.unsplash.com/{}?ixlib=rb-4.0.3&auto=format&fit=crop&w=600&h=350"

EDUCATION_MODULES = [
    {
        "title": "Nutrition in the Second Trimester",
        "description": "Important nutrients for your baby's development during weeks 20-28.",
        "content": "During the second trimester, it's important to focus on foods rich in iron, calcium, "
                   "and omega-3 fatty acids...",
        "week_range": "20-28",
        "image_url": _IMAGE.format("photo-1493770348161-369560ae357d"),
    },
    {
        "title": "Safe Exercises in Mid-Pregnancy",
        "description": "Staying active safely as your body changes in the second trimester.",
        "content": "Exercise during pregnancy can help reduce back pain, promote healthy weight gain, "
                   "and improve sleep...",
        "week_range": "20-28",
        "image_url": _IMAGE.format("photo-1544367567-0f2fcb009e0b"),
    },
    {
        "title": "Preparing Your Birth Plan",
        "description": "What to consider when creating your personalized birth preferences.",
        "content": "A birth plan is a document that communicates your preferences for labor and delivery "
                   "to your healthcare providers...",
        "week_range": "20-40",
        "image_url": _IMAGE.format("photo-1527613426441-4da17471b66d"),
    },
    {
        "title": "First Trimester Development",
        "description": "Key developmental milestones during weeks 1-12 of pregnancy.",
        "content": "Your baby's development happens rapidly during the first trimester...",
        "week_range": "1-12",
        "image_url": _IMAGE.format("photo-1527787637257-50fd50f8cb7e"),
    },
    {
        "title": "Managing Third Trimester Discomfort",
        "description": "Tips for sleeping better and reducing common discomforts in late pregnancy.",
        "content": "As your baby grows larger, you may experience more discomfort...",
        "week_range": "29-40",
        "image_url": _IMAGE.format("photo-1544716278-ca5e3f4abd8c"),
    },
]


async def seed_education_modules(repo: Repository) -> int:
    """Insert the education library if it is empty. Idempotent."""
    if await repo.find_one(EducationModule):
        return 0
    for module in EDUCATION_MODULES:
        await repo.create(EducationModule, dict(module))
    logger.info("Seeded %d education modules", len(EDUCATION_MODULES))
    return len(EDUCATION_MODULES)


async def seed_demo_data(repo: Repository) -> None:
    """Create a demo clinician and patient with a populated pregnancy. Idempotent."""
    if await repo.get_user_by_external_ref("demo-clinician"):
        return

    clinician = await repo.create(User, {
        "username": "dr.demo", "email": "dr.demo@example.org", "first_name": "Dana",
        "last_name": "Demo", "role": "clinician", "external_identity_ref": "demo-clinician",
    })
    patient = await repo.create(User, {
        "username": "sarah.demo", "email": "sarah.demo@example.org", "first_name": "Sarah",
        "last_name": "Demo", "role": "patient", "external_identity_ref": "demo-patient",
    })

    today = utcnow().date()
    start = today - timedelta(weeks=24)
    pregnancy = await repo.create(Pregnancy, {
        "patient_id": patient.id,
        "start_date": start,
        "due_date": start + timedelta(weeks=40),
        "last_menstrual_period": start,
        "edb_determined_by": "dating scan",
        "pregnancy_type": "singleton",
        "blood_group": "O",
        "rh_factor": "positive",
        "gravidity": 1,
        "parity": 0,
    })

    now = utcnow().replace(minute=0, second=0, microsecond=0)
    await repo.create(Appointment, {
        "pregnancy_id": pregnancy.id, "title": "Routine antenatal check",
        "location": "Antenatal Clinic", "clinician_name": "Dr. Demo",
        "date_time": now + timedelta(days=7), "duration": 30,
    })
    await repo.create(Appointment, {
        "pregnancy_id": pregnancy.id, "title": "Glucose tolerance test",
        "location": "Pathology", "date_time": now + timedelta(days=21), "duration": 120,
    })
    await repo.create(VitalStat, {
        "pregnancy_id": pregnancy.id, "date": today - timedelta(days=14), "weight": 68,
        "blood_pressure_systolic": 118, "blood_pressure_diastolic": 76, "fundal_height": 22,
        "clinician_id": clinician.id,
    })
    await repo.create(TestResult, {
        "pregnancy_id": pregnancy.id, "date": today - timedelta(days=30), "title": "Full blood count",
        "category": "Blood", "status": "normal", "results": {"haemoglobin": "125 g/L"},
        "clinician_id": clinician.id,
    })
    await repo.create(Scan, {
        "pregnancy_id": pregnancy.id, "date": today - timedelta(weeks=4), "title": "Morphology scan",
        "notes": "Normal anatomy", "clinician_id": clinician.id,
    })
    await repo.create(ImmunisationHistory, {"pregnancy_id": pregnancy.id, "flu_date": today - timedelta(weeks=10)})
    await repo.create(Message, {
        "pregnancy_id": pregnancy.id, "from_id": clinician.id, "to_id": patient.id,
        "message": "Your morphology scan looked great. See you next week.",
    })
    logger.info("Seeded demo clinician=%s patient=%s pregnancy=%s", clinician.id, patient.id, pregnancy.id)


async def seed_store(repo: Repository, demo: bool = False) -> None:
    await seed_education_modules(repo)
    if demo:
        await seed_demo_data(repo)
