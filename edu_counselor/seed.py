"""
Load the sample reference data (colleges, scholarships, career paths).

Reference tables have no write policy for principals, so this runs as an
administrative process straight on the session. Tables that already hold
rows are left alone.

    python -m edu_counselor.seed
"""
import logging
from datetime import date

from sqlalchemy.orm import Session

from .models import CareerPath, College, Scholarship
from .shared.database import init_db, make_engine, make_session_factory

logger = logging.getLogger(__name__)

COLLEGES = [
    dict(name="IIT Delhi", type="engineering", location="New Delhi", state="Delhi",
         fees_per_year=200000, ranking=1, admission_criteria="JEE Advanced, rank-based admission"),
    dict(name="AIIMS Delhi", type="medical", location="New Delhi", state="Delhi",
         fees_per_year=25000, ranking=1, admission_criteria="NEET score 650+, counseling-based"),
    dict(name="NIT Trichy", type="engineering", location="Tiruchirappalli", state="Tamil Nadu",
         fees_per_year=150000, ranking=2, admission_criteria="JEE Main rank-based admission"),
    dict(name="JIPMER Puducherry", type="medical", location="Puducherry", state="Puducherry",
         fees_per_year=30000, ranking=2, admission_criteria="NEET score 640+, merit-based"),
    dict(name="IIT Bombay", type="engineering", location="Mumbai", state="Maharashtra",
         fees_per_year=200000, ranking=1, admission_criteria="JEE Advanced, top ranks only"),
]

SCHOLARSHIPS = [
    dict(title="National Merit Scholarship",
         description="Merit-based scholarship for students with exceptional academic performance",
         amount=50000, eligibility_criteria="90%+ marks in 12th grade, family income less than ₹8 lakh",
         deadline=date(2026, 3, 31), category="merit", application_link="https://scholarships.gov.in"),
    dict(title="SC/ST Pre-Matric Scholarship",
         description="Financial assistance for SC/ST students",
         amount=25000, eligibility_criteria="SC/ST category, family income less than ₹2.5 lakh",
         deadline=date(2025, 12, 31), category="minority", application_link="https://scholarships.gov.in"),
    dict(title="Central Sector Scholarship Scheme",
         description="Need-based scholarship for economically weaker students",
         amount=100000, eligibility_criteria="Family income less than ₹4.5 lakh, 80%+ in 12th",
         deadline=date(2026, 3, 15), category="need-based", application_link="https://scholarships.gov.in"),
    dict(title="Begum Hazrat Mahal Scholarship",
         description="Scholarship for minority girl students",
         amount=60000, eligibility_criteria="Minority community, girl students, 50%+ marks",
         deadline=date(2026, 2, 28), category="minority", application_link="https://scholarships.gov.in"),
]

CAREER_PATHS = [
    dict(title="Software Engineer",
         description="Design and develop software applications and systems",
         required_education="B.Tech/B.E. in Computer Science or related field",
         average_salary=800000, job_outlook="Excellent growth, high demand in tech industry",
         skills_required=["Programming", "Problem Solving", "Data Structures", "Algorithms"],
         related_courses=["Computer Science", "Information Technology"]),
    dict(title="Doctor",
         description="Diagnose and treat patients in various medical specialties",
         required_education="MBBS + MD/MS specialization",
         average_salary=1200000, job_outlook="Stable demand, respect in society",
         skills_required=["Medical Knowledge", "Empathy", "Decision Making", "Communication"],
         related_courses=["Medicine", "Surgery", "Pediatrics"]),
    dict(title="Civil Services Officer",
         description="Administrative roles in government at various levels",
         required_education="Any bachelor degree + UPSC exam",
         average_salary=900000, job_outlook="Prestigious, job security, opportunity to serve nation",
         skills_required=["Leadership", "Policy Making", "Communication", "Problem Solving"],
         related_courses=["Public Administration", "Political Science", "Economics"]),
    dict(title="Data Scientist",
         description="Analyze complex data to help organizations make decisions",
         required_education="B.Tech/M.Tech in CS/Stats or related field",
         average_salary=1000000, job_outlook="Rapidly growing field with high demand",
         skills_required=["Statistics", "Machine Learning", "Programming", "Data Visualization"],
         related_courses=["Computer Science", "Statistics", "Mathematics"]),
]


def seed_reference_data(db: Session) -> dict[str, int]:
    inserted: dict[str, int] = {}
    for model, rows in ((College, COLLEGES), (Scholarship, SCHOLARSHIPS), (CareerPath, CAREER_PATHS)):
        if db.query(model).first() is not None:
            inserted[model.__tablename__] = 0
            continue
        db.add_all(model(**row) for row in rows)
        inserted[model.__tablename__] = len(rows)
    db.commit()
    logger.info("Seeded reference data: %s", inserted)
    return inserted


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    engine = make_engine()
    init_db(engine)
    SessionLocal = make_session_factory(engine)
    with SessionLocal() as db:
        seed_reference_data(db)


if __name__ == "__main__":
    main()
