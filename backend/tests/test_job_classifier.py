import pytest

from models.schemas.ats import JobType
from services.job_classifier import WEIGHT_PROFILES, detect_job_type, get_weight_profile


@pytest.mark.parametrize("job_type", list(JobType))
def test_weights_sum_to_one(job_type):
    w = WEIGHT_PROFILES[job_type]
    assert abs(w.keywords + w.formatting + w.sections - 1.0) < 1e-9


def test_every_job_type_has_a_profile():
    assert set(WEIGHT_PROFILES) == set(JobType)


def test_senior_signals_win():
    jd = "We are hiring a senior architect with 10+ years of experience."
    assert detect_job_type(jd) == JobType.SENIOR


def test_senior_beats_tech():
    jd = "Senior backend software engineer to lead our platform team."
    assert detect_job_type(jd) == JobType.SENIOR


def test_entry_level():
    jd = "Junior developer, entry-level role, new grads welcome."
    assert detect_job_type(jd) == JobType.ENTRY


def test_tech():
    jd = "Backend software engineer writing Python services."
    assert detect_job_type(jd) == JobType.TECH


def test_single_signal_is_not_enough():
    assert detect_job_type("Software role in retail.") == JobType.GENERAL


def test_general():
    assert detect_job_type("Retail cashier handling customer payments.") == JobType.GENERAL


def test_get_weight_profile():
    assert get_weight_profile(JobType.ENTRY).formatting == 0.40
