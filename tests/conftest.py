"""Shared fixtures: a realistic design week, a fake LLM provider and a fixed clock."""

import json
import os
import time
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

# Keep litellm offline during tests: its import-time remote cost-map fetch
# starts a retry thread that can deadlock with the main-thread import.
os.environ.setdefault("LITELLM_LOCAL_MODEL_COST_MAP", "True")

from contracts import (
    BusinessRuleRecord,
    Company,
    DesignWeek,
    DigitalEmployee,
    ExtractedItem,
    ExtractedItemType as T,
    GenerationContext,
    IntegrationRecord,
    ItemStatus,
    ScopeClassification,
    ScopeItemRecord,
    Session,
    build_generation_context,
)
from agents.fallback_writer import synthesize_fallback
from providers import LLMProvider, LLMResponse

FIXED_NOW = datetime(2026, 1, 5, 9, 30, tzinfo=timezone.utc)


class SteppingClock:
    """Clock that advances a fixed step on every reading."""

    def __init__(self, start: datetime = FIXED_NOW, step_ms: int = 250):
        self.current = start
        self.step = timedelta(milliseconds=step_ms)
        self.readings = 0

    def __call__(self) -> datetime:
        value = self.current
        self.current += self.step
        self.readings += 1
        return value


class FakeProvider(LLMProvider):
    """Records calls and answers with canned content (or raises)."""

    def __init__(
        self,
        content: Optional[str] = None,
        error: Optional[Exception] = None,
        delay_seconds: float = 0.0,
        model: str = "claude-test-model",
    ):
        self.content = content
        self.error = error
        self.delay_seconds = delay_seconds
        self._model = model
        self.calls = []

    @property
    def name(self) -> str:
        return "fake"

    @property
    def default_model(self) -> str:
        return self._model

    def complete(self, system_prompt, user_message, model=None, max_tokens=4096, temperature=None):
        self.calls.append({
            "system_prompt": system_prompt,
            "user_message": user_message,
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
        })
        if self.delay_seconds:
            time.sleep(self.delay_seconds)
        if self.error is not None:
            raise self.error
        return LLMResponse(
            content=self.content,
            input_tokens=1200,
            output_tokens=3400,
            model=self._model,
            provider=self.name,
        )


def item(item_id, item_type, content="", status=ItemStatus.APPROVED, data=None) -> ExtractedItem:
    return ExtractedItem(
        id=item_id,
        type=item_type,
        content=content,
        status=status,
        structured_data=data,
    )


def make_design_week(
    sessions=None,
    scope_items=None,
    integrations=None,
    business_rules=None,
    description="Automates first-line claim intake",
) -> DesignWeek:
    return DesignWeek(
        id="dw-001",
        digital_employee=DigitalEmployee(
            id="de-001",
            name="ClaimBot",
            description=description,
            company=Company(name="Acme Insurance"),
        ),
        sessions=sessions or [],
        scope_items=scope_items or [],
        integrations=integrations or [],
        business_rules=business_rules or [],
    )


def content_json(context: GenerationContext, **section_overrides) -> str:
    """A valid model answer for ``context``, as JSON text."""
    data = synthesize_fallback(context, clock=lambda: FIXED_NOW).model_dump(
        mode="json", exclude={"generation_metadata"}
    )
    for section, values in section_overrides.items():
        data[section].update(values)
    return json.dumps(data)


@pytest.fixture
def clock() -> SteppingClock:
    return SteppingClock()


@pytest.fixture
def design_week() -> DesignWeek:
    kickoff = Session(id="s-1", extracted_items=[
        item("st-1", T.STAKEHOLDER, "Jane Smith - Claims Director"),
        item("st-2", T.STAKEHOLDER, "Bob", status=None,
             data={"name": "Bob Jones", "role": "IT Lead", "email": "bob@acme.test"}),
        item("g-1", T.GOAL, "Reduce Claim Time: process claims faster"),
        item("g-2", T.GOAL, "Rejected goal", status=ItemStatus.REJECTED),
        item("bc-1", T.BUSINESS_CASE, "Manual claim intake is slow"),
        item("k-1", T.KPI_TARGET, "Claim handling time",
             data={"name": "Claim handling time", "target": "40%", "unit": "reduction"}),
        item("k-2", T.KPI_TARGET, "Pending KPI: 99%", status=ItemStatus.PENDING),
        item("v-1", T.VOLUME_EXPECTATION, "Claims per month", data={"metric": "Claims", "value": 1200}),
        item("t-1", T.TIMELINE_CONSTRAINT, "Go-live by Q3 2026"),
    ])
    process = Session(id="s-2", extracted_items=[
        item("p-1", T.HAPPY_PATH_STEP, "Receive claim - via email"),
        item("p-2", T.HAPPY_PATH_STEP, "Validate",
             data={"stepNumber": 5, "name": "Validate policy", "description": "Check policy status"}),
        item("e-1", T.EXCEPTION_CASE, "Missing documents: claim lacks attachments"),
        item("ga-1", T.GUARDRAIL_ALWAYS, "Always log decisions"),
        item("lr-1", T.LEGAL_RESTRICTION, "Retain data no longer than 7 years"),
        item("gn-1", T.GUARDRAIL_NEVER, "Never approve claims above 10k"),
        item("fl-1", T.FINANCIAL_LIMIT, "Max payout 5000 EUR"),
        item("sec-1", T.SECURITY_REQUIREMENT, "SSO required"),
        item("ch-1", T.CHANNEL, "Email"),
        item("ch-2", T.CHANNEL, "Portal"),
        item("d-1", T.DECISION, "Auto-approve below 500 EUR"),
        item("si-1", T.SYSTEM_INTEGRATION, "Guidewire: policy lookup"),
        item("br-1", T.BUSINESS_RULE, "Fraud check: flag duplicate claims"),
        item("x-1", "SOMETHING_NEW", "Unknown type is ignored"),
    ])
    return make_design_week(
        sessions=[kickoff, process],
        scope_items=[
            ScopeItemRecord(id="sc-1", description="Register new claims",
                            classification=ScopeClassification.IN_SCOPE, skill="intake"),
            ScopeItemRecord(id="sc-2", description="Settle disputes",
                            classification=ScopeClassification.OUT_OF_SCOPE, notes="Legal team"),
            ScopeItemRecord(id="sc-3", description="Partial payouts",
                            classification=ScopeClassification.AMBIGUOUS),
            ScopeItemRecord(id="sc-4", description="Hidden item",
                            classification=ScopeClassification.IN_SCOPE, exclude_from_document=True),
        ],
        integrations=[
            IntegrationRecord(id="int-1", system_name="Guidewire ClaimCenter",
                              purpose="read", connection_type="REST"),
        ],
    )


@pytest.fixture
def sparse_design_week() -> DesignWeek:
    """Only one approved item, nothing else captured."""
    return make_design_week(sessions=[
        Session(id="s-1", extracted_items=[
            item("ch-1", T.CHANNEL, "Phone"),
            item("g-1", T.GOAL, "Pending goal", status=ItemStatus.PENDING),
        ]),
    ], description=None)


@pytest.fixture
def context(design_week) -> GenerationContext:
    return build_generation_context(design_week)


@pytest.fixture
def empty_context(sparse_design_week) -> GenerationContext:
    return build_generation_context(sparse_design_week)


@pytest.fixture
def business_rule_record() -> BusinessRuleRecord:
    return BusinessRuleRecord(
        id="rule-1",
        name="High value review",
        condition="Claim amount above 2500 EUR",
        action="Route to senior handler",
    )
