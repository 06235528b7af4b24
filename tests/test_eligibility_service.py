"""Tests for :mod:`subsidy_registry.services.eligibility_service`."""

import threading

import pytest

from subsidy_registry.exceptions import (
    AccessDeniedError,
    ConfigError,
    TransferFailedError,
)
from subsidy_registry.models import EligibilityPolicy
from subsidy_registry.services import (
    ApplicantMaskStore,
    AttributeRegistry,
    EligibilityService,
)
from subsidy_registry.utils.bitwise import BitArithmetic

from .constants import AUTHORITY, REQUIRED, SUBSIDY


def make_service(registry, store, ledger, **overrides) -> EligibilityService:
    options = dict(
        required_attributes=REQUIRED,
        eligible_attribute="toReceive",
        subsidy_amount=SUBSIDY,
    )
    options.update(overrides)
    return EligibilityService(registry=registry, store=store, ledger=ledger, **options)


def test_required_mask(service) -> None:
    assert service.required_mask() == 586
    assert service.required_mask(["female", "married"]) == 10
    assert service.required_mask([]) == 0


def test_successful_claim_consumes_eligible_bit(service, store, ledger) -> None:
    store.toggle(AUTHORITY, "alice", 2 | 8 | 64 | 512)

    result = service.claim("alice")

    assert result.mask_before == 586
    assert result.mask_after == 74
    assert result.amount == SUBSIDY
    assert store.get("alice") == 74
    assert ledger.balance_of("alice") == SUBSIDY
    assert service.claims == [result]


def test_second_claim_is_denied(service, store, ledger) -> None:
    store.toggle(AUTHORITY, "alice", 586)
    service.claim("alice")

    with pytest.raises(AccessDeniedError):
        service.claim("alice")
    assert ledger.balance_of("alice") == SUBSIDY
    assert store.get("alice") == 74


def test_subset_predicate_ignores_missing_bits(service) -> None:
    # only extraneous bits fail the subset check
    assert service.is_eligible(2 | 8 | 64) is True
    assert service.is_eligible(0) is True
    assert service.is_eligible(586 | 1) is False


def test_missing_eligible_bit_denies_claim(service, store, ledger) -> None:
    store.toggle(AUTHORITY, "bob", 2 | 8 | 64)

    with pytest.raises(AccessDeniedError, match="toReceive"):
        service.claim("bob")
    assert store.get("bob") == 74
    assert ledger.transfers == []


def test_reference_behaviour_without_eligible_bit_gate(registry, store, ledger) -> None:
    service = make_service(registry, store, ledger, require_eligible_bit=False)
    store.toggle(AUTHORITY, "bob", 2 | 8 | 64)

    result = service.claim("bob")

    assert result.mask_after == 74
    assert ledger.balance_of("bob") == SUBSIDY


def test_extraneous_attribute_denies_claim(service, store, ledger) -> None:
    # "male" is bit 0 and is not part of the requirement
    store.toggle(AUTHORITY, "carol", 586 | 1)

    with pytest.raises(AccessDeniedError) as excinfo:
        service.claim("carol")
    assert excinfo.value.applicant == "carol"
    assert store.get("carol") == 587
    assert ledger.transfers == []


@pytest.mark.parametrize(
    "policy, holder, expected",
    [
        (EligibilityPolicy.SUBSET, 74, True),
        (EligibilityPolicy.SUBSET, 587, False),
        (EligibilityPolicy.SUPERSET, 74, False),
        (EligibilityPolicy.SUPERSET, 587, True),
        (EligibilityPolicy.SUPERSET, 586, True),
        (EligibilityPolicy.EXACT, 586, True),
        (EligibilityPolicy.EXACT, 587, False),
        (EligibilityPolicy.EXACT, 74, False),
    ],
)
def test_policies(registry, store, ledger, policy, holder, expected) -> None:
    service = make_service(registry, store, ledger, policy=policy)
    assert service.is_eligible(holder) is expected


def test_superset_policy_claim(registry, store, ledger) -> None:
    service = make_service(registry, store, ledger, policy="superset")
    store.toggle(AUTHORITY, "dave", 586 | 128)

    result = service.claim("dave")

    assert result.mask_after == 74 | 128


def test_failed_transfer_leaves_mask_untouched(service, store, ledger) -> None:
    store.toggle(AUTHORITY, "alice", 586)
    ledger.fail_next_transfers()

    with pytest.raises(TransferFailedError) as excinfo:
        service.claim("alice")
    assert excinfo.value.__cause__ is not None
    assert store.get("alice") == 586
    assert service.claims == []

    # the applicant can retry once the ledger recovers
    assert service.claim("alice").mask_after == 74
    assert ledger.balance_of("alice") == SUBSIDY


def test_exhausted_treasury(registry, store) -> None:
    from subsidy_registry.services import InMemoryLedger

    ledger = InMemoryLedger(default_caller=AUTHORITY, treasury=SUBSIDY)
    service = make_service(registry, store, ledger)
    store.toggle(AUTHORITY, "alice", 586)
    store.toggle(AUTHORITY, "erin", 586)

    service.claim("alice")
    with pytest.raises(TransferFailedError):
        service.claim("erin")
    assert store.get("erin") == 586
    assert ledger.treasury == 0


def test_concurrent_claims_pay_once(service, store, ledger) -> None:
    store.toggle(AUTHORITY, "alice", 586)
    outcomes = []

    def attempt():
        try:
            service.claim("alice")
            outcomes.append("paid")
        except AccessDeniedError:
            outcomes.append("denied")

    threads = [threading.Thread(target=attempt) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert outcomes.count("paid") == 1
    assert outcomes.count("denied") == 7
    assert ledger.balance_of("alice") == SUBSIDY


@pytest.mark.parametrize("amount", [0, -5, 1.5])
def test_invalid_subsidy_amount(registry, store, ledger, amount) -> None:
    with pytest.raises(ConfigError):
        make_service(registry, store, ledger, subsidy_amount=amount)


def test_width_mismatch_rejected(registry, ledger) -> None:
    store = ApplicantMaskStore(AUTHORITY, BitArithmetic(64))
    with pytest.raises(ConfigError):
        make_service(registry, store, ledger)


def test_eligible_bit_at_sign_position(ledger) -> None:
    registry = AttributeRegistry([f"a{i}" for i in range(7)] + ["pay"], width=8)
    store = ApplicantMaskStore(AUTHORITY, registry.arithmetic)
    service = make_service(
        registry, store, ledger, required_attributes=["a1", "pay"], eligible_attribute="pay"
    )
    store.toggle(AUTHORITY, "alice", registry.combined_mask(["a1", "pay"]))
    assert store.get("alice") == -126

    assert service.claim("alice").mask_after == 2


@pytest.mark.parametrize(
    "required, eligible",
    [
        (REQUIRED, "bonus"),
        (["female", "widowed", "toReceive"], "toReceive"),
        (["female", "married"], "toReceive"),
        ("toReceive", "toReceive"),
    ],
)
def test_misconfigured_requirement_fails_at_construction(
    registry, store, ledger, required, eligible
) -> None:
    with pytest.raises(ConfigError):
        make_service(
            registry, store, ledger, required_attributes=required, eligible_attribute=eligible
        )
    assert store.snapshot() == {}


def test_fail_next_transfers_counts_down(service, store, ledger) -> None:
    store.toggle(AUTHORITY, "alice", 586)
    ledger.fail_next_transfers(2)

    for _ in range(2):
        with pytest.raises(TransferFailedError):
            service.claim("alice")

    assert service.claim("alice").mask_after == 74
    assert ledger.transfers == [("alice", SUBSIDY)]
