"""Unit tests for string-level ID helpers."""

from __future__ import annotations

import random

import pytest

from ulid_doubles import fixed_random
from ulidkit.constants import CROCKFORD_BASE32_ALPHABET, MAX_RANDOM, MAX_TIMESTAMP, ULID_LENGTH
from ulidkit.domain import ids
from ulidkit.domain.constructors import from_parts
from ulidkit.errors import InvalidCharError, InvalidLengthError, InvalidTimestampError
from ulidkit.sources import random_source_from_bytes


def _zero_bytes(size: int) -> bytes:
    return b"\x00" * size


def test_generate_ulid_no_collision_10000() -> None:
    generated = {ids.generate_ulid() for _ in range(10_000)}
    assert len(generated) == 10_000


def test_ulid_charset_length_and_reject_invalid_chars() -> None:
    ulid_value = ids.generate_ulid(timestamp_ms=123_456, random_source=lambda: MAX_RANDOM)
    assert len(ulid_value) == ULID_LENGTH
    assert ulid_value == ulid_value.upper()
    assert all(char in CROCKFORD_BASE32_ALPHABET for char in ulid_value)

    ids.validate_ulid(ulid_value.lower())

    with pytest.raises(InvalidLengthError, match="ulid length must be"):
        ids.validate_ulid("0" * 25)

    for invalid in ["U" + "0" * 25, "u" + "0" * 25, "*" + "0" * 25]:
        with pytest.raises(InvalidCharError, match="invalid ULID character"):
            ids.validate_ulid(invalid)


def test_ulid_overflow_and_timestamp_boundaries() -> None:
    ids.validate_ulid("7" + "Z" * 25)

    with pytest.raises(InvalidTimestampError):
        ids.validate_ulid("8" + "0" * 25)

    assert ids.parse_ulid_timestamp_ms("0" * 26) == 0

    top = ids.generate_ulid(
        timestamp_ms=MAX_TIMESTAMP,
        random_source=random_source_from_bytes(_zero_bytes),
    )
    assert top == "7ZZZZZZZZZ0000000000000000"
    assert ids.parse_ulid_timestamp_ms(top) == MAX_TIMESTAMP


def test_prefixed_id_layout_is_prefix_separator_and_full_ulid() -> None:
    run_id = ids.generate_prefixed_id("run", timestamp_ms=1, random_source=fixed_random(7))

    assert run_id == "run-00000000010000000000000007"
    assert len(run_id) == len("run-") + ULID_LENGTH
    assert ids.split_prefixed_id(run_id) == ("run", from_parts(1, 7))
    assert ids.validate_prefixed_id(run_id, "run") == from_parts(1, 7)


def test_prefixed_id_validation_failures() -> None:
    event_id = ids.generate_prefixed_id("evt", timestamp_ms=1)

    with pytest.raises(ValueError, match="wanted 'run'"):
        ids.validate_prefixed_id(event_id, "run")
    with pytest.raises(InvalidCharError):
        ids.validate_prefixed_id("run-" + "U" * 26, "run")
    with pytest.raises(ValueError, match="no '-'"):
        ids.split_prefixed_id("0" * 26)
    with pytest.raises(ValueError, match="non-empty"):
        ids.split_prefixed_id("-" + "0" * 26)

    for bad_prefix in ["", "a-b"]:
        with pytest.raises(ValueError, match="prefix"):
            ids.generate_prefixed_id(bad_prefix)


def test_short_id_keeps_trailing_characters() -> None:
    run_id = ids.generate_prefixed_id("run", timestamp_ms=1, random_source=fixed_random(7))

    short = ids.short_id(run_id)
    assert len(short) == ids.SHORT_ID_LENGTH
    assert short == "00000007"

    with pytest.raises(ValueError, match="shorter than 8"):
        ids.short_id("short")


def test_random_seed_does_not_change_ulid_engine(monkeypatch: pytest.MonkeyPatch) -> None:
    random.seed(123)

    def _boom(_: int) -> int:
        raise AssertionError("global random.getrandbits must not be used")

    monkeypatch.setattr(random, "getrandbits", _boom)
    ids.validate_ulid(ids.generate_ulid(timestamp_ms=42))
    monkeypatch.undo()

    first = ids.generate_ulid(timestamp_ms=42, random_source=fixed_random(0))
    second = ids.generate_ulid(timestamp_ms=42, random_source=fixed_random(0))
    assert first == second
