from edu_counselor.models import CareerPath, College, Scholarship
from edu_counselor.seed import seed_reference_data


def test_seed_is_idempotent(db):
    first = seed_reference_data(db)
    second = seed_reference_data(db)

    assert first == {"colleges": 5, "scholarships": 4, "career_paths": 4}
    assert second == {"colleges": 0, "scholarships": 0, "career_paths": 0}
    assert db.query(College).count() == 5
    assert db.query(Scholarship).filter(Scholarship.is_active.is_(True)).count() == 4


def test_seed_keeps_arrays(db):
    seed_reference_data(db)
    engineer = db.query(CareerPath).filter(CareerPath.title == "Software Engineer").one()
    assert engineer.skills_required == ["Programming", "Problem Solving", "Data Structures", "Algorithms"]
