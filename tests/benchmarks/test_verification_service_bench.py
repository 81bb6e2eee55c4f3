"""Performance benchmarks for the verification workflow."""

import pytest
from pytest_codspeed import BenchmarkFixture
from sqlmodel import Session

from app.models.enums import VerificationStatus
from app.services import verification as verification_service
from app.services.status_mapper import map_status


@pytest.fixture(name="populated_queue")
def populated_queue_fixture(
    session: Session, employer_factory, bench_upload, mock_storage
) -> list[int]:
    """Fifty pending submissions to list and decide on."""
    record_ids = []
    for _ in range(50):
        employer = employer_factory()
        verification_service.submit_or_replace(
            session, employer.id_user, bench_upload
        )
        record = verification_service.get_verification_by_employer(
            session, employer.id_user
        )
        record_ids.append(record.id_verification)
    return record_ids


def test_status_mapping_performance(benchmark: BenchmarkFixture):
    """Benchmark the status to user flags projection."""

    @benchmark
    def project_all():
        return [map_status(status) for status in (None, *VerificationStatus)]


def test_submit_or_replace_performance(
    benchmark: BenchmarkFixture,
    session: Session,
    employer_factory,
    bench_upload,
    mock_storage,
):
    """Benchmark resubmission: upsert, user sync and notification."""
    employer = employer_factory()

    @benchmark
    def resubmit():
        return verification_service.submit_or_replace(
            session, employer.id_user, bench_upload
        )


def test_admin_list_performance(
    benchmark: BenchmarkFixture, session: Session, populated_queue
):
    """Benchmark the filtered, searched admin listing."""

    @benchmark
    def list_page():
        return verification_service.admin_list_verifications(
            session, status="pending", search="bench", page=2, page_size=20
        )


def test_admin_decide_performance(
    benchmark: BenchmarkFixture, session: Session, populated_queue
):
    """Benchmark an admin decision with projection sync and notification."""
    record_id = populated_queue[0]

    @benchmark
    def decide():
        return verification_service.admin_decide(
            session, record_id, "rejected", "Document is not legible"
        )
