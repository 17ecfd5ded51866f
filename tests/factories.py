"""Builders and fakes shared by the test suites."""

from datetime import UTC, datetime, timedelta

from src.core.entities import BusinessCard, Template


class MockTimePort:
    """Deterministic clock for ledger tests."""

    def __init__(self, now: datetime | None = None) -> None:
        self._now = now or datetime(2026, 3, 14, 9, 0, 0, tzinfo=UTC)

    def now_utc(self) -> datetime:
        return self._now

    def set_now(self, now: datetime) -> None:
        self._now = now

    def advance(self, seconds: float) -> None:
        self._now = self._now + timedelta(seconds=seconds)


def make_template(**overrides) -> Template:
    data = {
        "id": "tpl-classic",
        "name": "Classic",
        "paper": {
            "size": "Business Card",
            "width": 90,
            "height": 55,
            "unit": "mm",
            "orientation": "landscape",
            "background": {"type": "color", "color": "#ffffff"},
        },
        "elements": [
            {
                "id": "el-name",
                "type": "text",
                "field": "name",
                "x": 10,
                "y": 10,
                "width": 60,
                "height": 8,
                "style": {"fontSize": 14, "fontWeight": 700, "color": "#111111"},
            },
            {
                "id": "el-title",
                "type": "text",
                "field": "jobTitle",
                "x": 10,
                "y": 20,
                "width": 60,
                "height": 6,
                "style": {"fontSize": 9},
            },
            {
                "id": "el-logo",
                "type": "picture",
                "field": "companyLogo",
                "x": 70,
                "y": 5,
                "width": 15,
                "height": 15,
            },
        ],
    }
    data.update(overrides)
    return Template.model_validate(data)


def make_card(**overrides) -> BusinessCard:
    data = {
        "id": "card1",
        "userId": "user-1",
        "name": "Anan Srisuk",
        "jobTitle": "Engineer",
        "company": "Acme",
        "phone": "+66 2 000 0000",
        "email": "anan@example.com",
        "companyLogoUrl": "https://cdn.example.com/acme.png",
        "templateId": "tpl-classic",
        "fieldValues": {},
    }
    data.update(overrides)
    return BusinessCard.model_validate(data)
