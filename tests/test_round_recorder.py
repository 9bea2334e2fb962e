"""Tests for round recording."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from sartrack.core import round_recorder, session_manager
from sartrack.core.round_recorder import Outcome, parse_outcome
from sartrack.errors import NotFoundError, ValidationError


def _record(seed, **overrides):
    fields = {
        "session_id": seed.session_id,
        "dog_id": seed.dog_id,
        "exercise_id": seed.exercise_id,
        "planned_behavior_id": seed.behavior_id,
        "outcome": "success",
    }
    fields.update(overrides)
    return round_recorder.record_round(**fields)


class TestParseOutcome:
    """Tests for outcome parsing."""

    @pytest.mark.parametrize("raw", ["success", "SUCCESS", " Success "])
    def test_case_insensitive(self, raw):
        assert parse_outcome(raw) is Outcome.SUCCESS

    @pytest.mark.parametrize("raw", ["", "won", None, 3])
    def test_invalid(self, raw):
        with pytest.raises(ValidationError):
            parse_outcome(raw)


class TestRecordRound:
    """Tests for record_round."""

    def test_first_round_is_number_one(self, seed):
        round_ = _record(seed, score=9)
        assert round_.id > 0
        assert round_.round_number == 1
        assert round_.outcome == "success"
        assert round_.score == 9

    def test_outcome_stored_lowercase(self, seed):
        assert _record(seed, outcome="PARTIAL").outcome == "partial"

    def test_numbers_increment_per_dog(self, seed):
        assert _record(seed).round_number == 1
        assert _record(seed).round_number == 2
        assert _record(seed, dog_id=seed.other_dog_id).round_number == 1

    def test_numbers_restart_per_session(self, seed):
        _record(seed)
        other = session_manager.create_session()
        assert _record(seed, session_id=other.id).round_number == 1

    def test_exhibited_behavior_substitution(self, seed):
        round_ = _record(
            seed,
            outcome="fail",
            exhibited_behavior_id=seed.other_behavior_id,
            exhibited_free_text="came back instead of barking",
        )
        assert round_.planned_behavior_id == seed.behavior_id
        assert round_.exhibited_behavior_id == seed.other_behavior_id
        assert round_.exhibited_free_text == "came back instead of barking"

    def test_optional_fields_default_to_none(self, seed):
        round_ = _record(seed)
        assert round_.exhibited_behavior_id is None
        assert round_.exhibited_free_text is None
        assert round_.score is None
        assert round_.notes is None
        assert round_.started_at is None

    def test_timestamps_normalized(self, seed):
        round_ = _record(seed, started_at="2024-05-01T10:00:00+02:00")
        assert round_.started_at == "2024-05-01T08:00:00+00:00"

    def test_round_on_closed_session_allowed(self, seed):
        session_manager.close_session(seed.session_id)
        assert _record(seed).round_number == 1

    def test_unknown_session_is_not_found(self, seed):
        with pytest.raises(NotFoundError):
            _record(seed, session_id=999)

    @pytest.mark.parametrize(
        "field", ["dog_id", "exercise_id", "planned_behavior_id", "exhibited_behavior_id"]
    )
    def test_unknown_reference_is_validation_error(self, seed, field):
        with pytest.raises(ValidationError):
            _record(seed, **{field: 999})

    @pytest.mark.parametrize(
        "field", ["session_id", "dog_id", "exercise_id", "planned_behavior_id"]
    )
    def test_non_positive_ids(self, seed, field):
        with pytest.raises(ValidationError):
            _record(seed, **{field: 0})

    @pytest.mark.parametrize("score", [-1, 11, 7.5, True])
    def test_score_out_of_range(self, seed, score):
        with pytest.raises(ValidationError):
            _record(seed, score=score)

    def test_invalid_outcome(self, seed):
        with pytest.raises(ValidationError):
            _record(seed, outcome="excellent")

    def test_rejected_round_not_stored(self, seed):
        with pytest.raises(ValidationError):
            _record(seed, score=42)
        assert session_manager.list_session_rounds(seed.session_id) == []


class TestConcurrentRounds:
    """Round numbers stay dense under concurrent writers."""

    def test_parallel_inserts_get_unique_sequential_numbers(self, seed):
        """N parallel inserts for one (session, dog) yield exactly 1..N."""
        n = 20

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: _record(seed, outcome="partial"), range(n)))

        numbers = sorted(r.round_number for r in results)
        assert numbers == list(range(1, n + 1))

        stored = session_manager.list_session_rounds(seed.session_id)
        assert [r.round_number for r in stored] == list(range(1, n + 1))

    def test_parallel_inserts_for_two_dogs(self, seed):
        dogs = [seed.dog_id, seed.other_dog_id] * 10

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda dog_id: _record(seed, dog_id=dog_id), dogs))

        for dog_id in (seed.dog_id, seed.other_dog_id):
            numbers = sorted(r.round_number for r in results if r.dog_id == dog_id)
            assert numbers == list(range(1, 11))
