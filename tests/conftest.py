"""Shared fixtures for the subsidy registry tests."""

from __future__ import annotations

import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from subsidy_registry.services import (  # noqa: E402
    ApplicantMaskStore,
    AttributeRegistry,
    EligibilityService,
    InMemoryLedger,
    SubsidyProgram,
)

from .constants import ATTRIBUTES, AUTHORITY, REQUIRED, SUBSIDY  # noqa: E402


@pytest.fixture
def ledger() -> InMemoryLedger:
    return InMemoryLedger(default_caller=AUTHORITY)


@pytest.fixture
def registry() -> AttributeRegistry:
    return AttributeRegistry(ATTRIBUTES)


@pytest.fixture
def store(registry: AttributeRegistry) -> ApplicantMaskStore:
    return ApplicantMaskStore(AUTHORITY, registry.arithmetic)


@pytest.fixture
def service(registry, store, ledger) -> EligibilityService:
    return EligibilityService(
        registry=registry,
        store=store,
        ledger=ledger,
        required_attributes=REQUIRED,
        eligible_attribute="toReceive",
        subsidy_amount=SUBSIDY,
    )


@pytest.fixture
def program(ledger) -> SubsidyProgram:
    return SubsidyProgram(
        ledger=ledger,
        attribute_names=ATTRIBUTES,
        required_attributes=REQUIRED,
        eligible_attribute="toReceive",
        subsidy_amount=SUBSIDY,
    )
