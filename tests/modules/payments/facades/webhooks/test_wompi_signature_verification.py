# -*- coding: utf-8 -*-
"""
backend/tests/modules/payments/facades/webhooks/test_wompi_signature_verification.py

Verificación de eventos de Wompi:
1. Checksum determinista y sensible a un solo carácter
2. Propiedades anidadas, faltantes y valores no-string
3. Ventana de antigüedad, entorno y header x-event-checksum
4. Orden de los chequeos en WompiEventValidator

Autor: Equipo Storefront
Fecha: 2026-10-07
"""

import hashlib
from datetime import datetime, timedelta, timezone

import pytest

from app.modules.payments.facades.webhooks import (
    VerificationFailure,
    WompiEventValidator,
    validate_environment,
    validate_event_age,
    validate_header_checksum,
    verify,
)
from app.modules.payments.schemas import WompiEvent
from app.modules.payments.services.webhooks.signature_verification import (
    checksums_match,
    compute_checksum,
    compute_integrity_signature,
    stringify_value,
)


def _event(payload) -> WompiEvent:
    return WompiEvent.model_validate(payload)


class TestComputeChecksum:
    def test_matches_reference_algorithm(self):
        data = {"transaction": {"id": "1234-1610641025-49201", "status": "APPROVED", "amount_in_cents": 4490000}}
        expected = hashlib.sha256(
            b"1234-1610641025-49201APPROVED44900001530291411prod_events_secret"
        ).hexdigest().upper()

        checksum = compute_checksum(
            data,
            ["transaction.id", "transaction.status", "transaction.amount_in_cents"],
            1530291411,
            "prod_events_secret",
        )

        assert checksum == expected
        assert checksum == checksum.upper()

    def test_missing_property_contributes_empty_string(self):
        data = {"transaction": {"id": "tx-1"}}
        with_missing = compute_checksum(data, ["transaction.id", "transaction.status"], 10, "s")
        without = compute_checksum(data, ["transaction.id"], 10, "s")
        assert with_missing == without

    def test_explicit_null_differs_from_missing(self):
        missing = compute_checksum({"transaction": {}}, ["transaction.status"], 10, "s")
        null = compute_checksum({"transaction": {"status": None}}, ["transaction.status"], 10, "s")
        assert missing != null

    @pytest.mark.parametrize(
        "value, expected",
        [(None, "null"), (True, "true"), (False, "false"), (4490000.0, "4490000"), (12, "12"), ("COP", "COP")],
    )
    def test_stringify_value(self, value, expected):
        assert stringify_value(value) == expected

    def test_checksums_match_is_case_insensitive(self):
        assert checksums_match("ABCDEF", "abcdef")
        assert not checksums_match("ABCDEF", "")
        assert not checksums_match("", "ABCDEF")


class TestVerify:
    def test_accepts_valid_event(self, wompi_event_factory, events_secret):
        assert verify(_event(wompi_event_factory()), events_secret) is True

    def test_single_character_flip_in_checksum_fails(self, wompi_event_factory, events_secret):
        payload = wompi_event_factory()
        checksum = payload["signature"]["checksum"]
        flipped = ("0" if checksum[0] != "0" else "1") + checksum[1:]
        payload["signature"]["checksum"] = flipped
        assert verify(_event(payload), events_secret) is False

    def test_tampered_amount_fails(self, wompi_event_factory, events_secret):
        payload = wompi_event_factory()
        payload["data"]["transaction"]["amount_in_cents"] = 100
        assert verify(_event(payload), events_secret) is False

    def test_wrong_secret_fails(self, wompi_event_factory):
        assert verify(_event(wompi_event_factory()), "other_secret") is False

    def test_lowercase_checksum_accepted(self, wompi_event_factory, events_secret):
        payload = wompi_event_factory()
        payload["signature"]["checksum"] = payload["signature"]["checksum"].lower()
        assert verify(_event(payload), events_secret) is True


class TestEventChecks:
    def test_event_age_window(self, wompi_event_factory):
        now = datetime(2026, 10, 6, 15, 0, tzinfo=timezone.utc)
        fresh = _event(wompi_event_factory(timestamp=int((now - timedelta(minutes=59)).timestamp())))
        old = _event(wompi_event_factory(timestamp=int((now - timedelta(minutes=61)).timestamp())))

        assert validate_event_age(fresh, 60, now=now) is True
        assert validate_event_age(old, 60, now=now) is False

    def test_environment(self, wompi_event_factory):
        event = _event(wompi_event_factory(environment="prod"))
        assert validate_environment(event, "prod") is True
        assert validate_environment(event, "test") is False

    def test_header_checksum_optional(self, wompi_event_factory):
        event = _event(wompi_event_factory())
        assert validate_header_checksum(event, None) is True
        assert validate_header_checksum(event, event.signature.checksum.lower()) is True
        assert validate_header_checksum(event, "DEADBEEF") is False


class TestWompiEventValidator:
    def _validator(self, secret, **kwargs) -> WompiEventValidator:
        return WompiEventValidator(secret=secret, expected_environment="test", **kwargs)

    def test_valid_event_passes(self, wompi_event_factory, events_secret):
        assert self._validator(events_secret).validate(_event(wompi_event_factory())) is None

    def test_header_mismatch_is_authentication_failure(self, wompi_event_factory, events_secret):
        failure = self._validator(events_secret).validate(
            _event(wompi_event_factory()),
            header_checksum="0" * 64,
        )
        assert failure is VerificationFailure.HEADER_MISMATCH
        assert failure.is_authentication

    def test_bad_signature_checked_before_age(self, wompi_event_factory):
        payload = wompi_event_factory(timestamp=1_000_000_000)
        failure = self._validator("wrong").validate(_event(payload))
        assert failure is VerificationFailure.INVALID_SIGNATURE

    def test_stale_event_is_not_authentication_failure(self, wompi_event_factory, events_secret):
        payload = wompi_event_factory(timestamp=1_000_000_000)
        failure = self._validator(events_secret).validate(_event(payload))
        assert failure is VerificationFailure.STALE_EVENT
        assert not failure.is_authentication

    def test_age_check_can_be_disabled(self, wompi_event_factory, events_secret):
        payload = wompi_event_factory(timestamp=1_000_000_000)
        assert self._validator(events_secret, check_age=False).validate(_event(payload)) is None

    def test_environment_mismatch(self, wompi_event_factory, events_secret):
        payload = wompi_event_factory(environment="prod")
        failure = self._validator(events_secret).validate(_event(payload))
        assert failure is VerificationFailure.ENVIRONMENT_MISMATCH


def test_integrity_signature():
    expected = hashlib.sha256(b"ORD-1001_1760000000000" b"5000000" b"COP" b"integrity").hexdigest()
    assert compute_integrity_signature("ORD-1001_1760000000000", 5_000_000, "COP", "integrity") == expected
