"""
Tests for the distribution facade.
"""

from __future__ import annotations

import pytest

from src.adapters.memory import InMemoryCardStore, InMemoryTemplateStore
from src.components.binding import NoLayout, RenderTree
from src.components.contact import ContactPayload
from src.components.distribution import (
    DistributionConfig,
    DistributionFacade,
    ExportContactInput,
    ExportPaperCardInput,
    QrPayload,
    QrPayloadInput,
    ResolveCardInput,
    build_public_url,
    run,
)
from src.components.paper import PrintLayout
from src.components.views import ViewLedger
from src.core.entities import BusinessCard, PaperCardSettings, Template
from src.core.errors import (
    CardNotFound,
    StoreUnavailable,
    TemplateMismatch,
    TemplateMissing,
    TemplateNotFound,
)
from tests.factories import make_card, make_template


class CountingTemplateStore(InMemoryTemplateStore):
    """Template store that counts reads."""

    def __init__(self, templates: list[Template]) -> None:
        super().__init__(templates)
        self.reads = 0

    def get_template(self, template_id: str) -> Template | None:
        self.reads += 1
        return super().get_template(template_id)


class WrongTemplateStore:
    """Returns a template whatever id is asked for."""

    def __init__(self, template: Template) -> None:
        self._template = template

    def get_template(self, template_id: str) -> Template | None:
        return self._template


class UnavailableCardStore:
    def get_card(self, card_id: str) -> BusinessCard | None:
        raise StoreUnavailable("card store", "database is locked")

    def update_card(self, card_id: str, patch: dict) -> None:
        raise StoreUnavailable("card store", "database is locked")

    def delete_card(self, card_id: str) -> None:
        raise StoreUnavailable("card store", "database is locked")


def _facade(cards, templates, ledger: ViewLedger) -> DistributionFacade:
    return DistributionFacade(cards=cards, templates=templates, ledger=ledger)


class TestPublicUrl:
    @pytest.mark.parametrize(
        "base,expected",
        [
            ("https://cards.example.com", "https://cards.example.com/card/abc"),
            ("https://cards.example.com/", "https://cards.example.com/card/abc"),
        ],
    )
    def test_build(self, base: str, expected: str) -> None:
        assert build_public_url(base, "abc") == expected

    def test_custom_prefix(self) -> None:
        assert build_public_url("https://x.test", "abc", "c/") == "https://x.test/c/abc"

    def test_facade_public_url(self, facade: DistributionFacade) -> None:
        assert facade.public_url("card1") == "https://cards.example.com/card/card1"


class TestResolveCard:
    def test_render_tree(self, facade: DistributionFacade) -> None:
        tree = facade.resolve_card("card1")
        assert isinstance(tree, RenderTree)
        assert tree.element("el-name").resolved_content == "Anan Srisuk"

    def test_unknown_card(self, facade: DistributionFacade) -> None:
        with pytest.raises(CardNotFound) as exc:
            facade.resolve_card("missing")
        assert exc.value.record_id == "missing"

    def test_no_template_is_no_layout(self, template: Template, ledger: ViewLedger) -> None:
        cards = InMemoryCardStore([make_card(templateId=None)])
        result = _facade(cards, InMemoryTemplateStore([template]), ledger).resolve_card("card1")
        assert result == NoLayout(card_id="card1", reason="no_template")

    def test_dangling_template(self, ledger: ViewLedger) -> None:
        cards = InMemoryCardStore([make_card()])
        with pytest.raises(TemplateNotFound):
            _facade(cards, InMemoryTemplateStore(), ledger).resolve_card("card1")

    def test_store_returns_wrong_template(self, ledger: ViewLedger) -> None:
        cards = InMemoryCardStore([make_card()])
        templates = WrongTemplateStore(make_template(id="tpl-other"))
        with pytest.raises(TemplateMismatch):
            _facade(cards, templates, ledger).resolve_card("card1")

    def test_template_fetched_every_call(self, template: Template, ledger: ViewLedger) -> None:
        templates = CountingTemplateStore([template])
        facade = _facade(InMemoryCardStore([make_card()]), templates, ledger)
        facade.resolve_card("card1")
        facade.resolve_card("card1")
        assert templates.reads == 2

    def test_store_unavailable_propagates(self, template: Template, ledger: ViewLedger) -> None:
        facade = _facade(UnavailableCardStore(), InMemoryTemplateStore([template]), ledger)
        with pytest.raises(StoreUnavailable) as exc:
            facade.resolve_card("card1")
        assert exc.value.reason == "database is locked"


class TestExportPaperCard:
    def test_default_settings(self, facade: DistributionFacade) -> None:
        layout = facade.export_paper_card("card1")
        assert layout.orientation == "portrait"
        assert layout.is_print_safe

    def test_card_settings_used(self, template: Template, ledger: ViewLedger) -> None:
        card = make_card(
            paperCardSettings={
                "size": {"name": "Business Card", "width": 90, "height": 55, "unit": "mm"},
                "layout": {"orientation": "landscape"},
                "printSettings": {"bleed": 3, "safeArea": 2, "resolution": 600},
            }
        )
        facade = _facade(InMemoryCardStore([card]), InMemoryTemplateStore([template]), ledger)
        layout = facade.export_paper_card("card1")
        assert layout.orientation == "landscape"
        assert layout.dpi == 600

    def test_configured_default(self, template: Template, ledger: ViewLedger) -> None:
        config = DistributionConfig(
            default_paper_settings=PaperCardSettings.model_validate(
                {"layout": {"orientation": "landscape"}}
            )
        )
        facade = DistributionFacade(
            cards=InMemoryCardStore([make_card()]),
            templates=InMemoryTemplateStore([template]),
            ledger=ledger,
            config=config,
        )
        assert facade.export_paper_card("card1").orientation == "landscape"

    def test_no_template_raises(self, template: Template, ledger: ViewLedger) -> None:
        cards = InMemoryCardStore([make_card(templateId=None)])
        with pytest.raises(TemplateMissing):
            _facade(cards, InMemoryTemplateStore([template]), ledger).export_paper_card("card1")


class TestExportContact:
    def test_payload(self, facade: DistributionFacade) -> None:
        payload = facade.export_contact("card1")
        assert payload.text.startswith("BEGIN:VCARD\r\n")
        assert payload.text.endswith("END:VCARD\r\n")

    def test_without_template(self, template: Template, ledger: ViewLedger) -> None:
        cards = InMemoryCardStore([make_card(templateId=None)])
        payload = _facade(cards, InMemoryTemplateStore([template]), ledger).export_contact("card1")
        assert "FN:Anan Srisuk" in payload.lines

    def test_dangling_template_still_exports(self, ledger: ViewLedger) -> None:
        cards = InMemoryCardStore([make_card()])
        payload = _facade(cards, InMemoryTemplateStore(), ledger).export_contact("card1")
        assert "ORG:Acme" in payload.lines

    def test_download_counts_as_view(self, facade: DistributionFacade, view_store) -> None:
        facade.export_contact("card1", viewer_identity="ip-A")
        (view,) = view_store.list_for_card("card1")
        assert view.device_info == "vCard Generated"

    def test_anonymous_download_not_recorded(self, facade: DistributionFacade, view_store) -> None:
        facade.export_contact("card1")
        assert view_store.list_for_card("card1") == []

    def test_unknown_card(self, facade: DistributionFacade) -> None:
        with pytest.raises(CardNotFound):
            facade.export_contact("missing")


class TestViewsAndStats:
    def test_record_and_stats(self, facade: DistributionFacade) -> None:
        first = facade.record_view("card1", "ip-A", "Chrome")
        assert facade.record_view("card1", "ip-A", "Chrome") == first
        stats = facade.get_stats("card1")
        assert stats.total_views == 1
        assert stats.unique_views == 1

    def test_stats_unknown_card(self, facade: DistributionFacade) -> None:
        with pytest.raises(CardNotFound):
            facade.get_stats("missing")


class TestQrPayload:
    def test_payload(self, facade: DistributionFacade) -> None:
        qr = facade.qr_payload("card1")
        assert qr == QrPayload(card_id="card1", data="https://cards.example.com/card/card1")
        assert qr.public_url == qr.data

    def test_unknown_card(self, facade: DistributionFacade) -> None:
        with pytest.raises(CardNotFound):
            facade.qr_payload("missing")


class TestCardMaintenance:
    def test_bind_template(
        self, facade: DistributionFacade, card_store: InMemoryCardStore, template_store
    ) -> None:
        template_store.save_template(make_template(id="tpl-two"))
        facade.bind_template("card1", "tpl-two")
        assert card_store.get_card("card1").template_id == "tpl-two"
        assert facade.resolve_card("card1").template_id == "tpl-two"

    def test_bind_unknown_template(self, facade: DistributionFacade) -> None:
        with pytest.raises(TemplateNotFound):
            facade.bind_template("card1", "tpl-none")

    def test_delete_card_removes_views(
        self, facade: DistributionFacade, card_store: InMemoryCardStore, view_store
    ) -> None:
        facade.record_view("card1", "ip-A")
        facade.delete_card("card1")
        assert card_store.get_card("card1") is None
        assert view_store.list_for_card("card1") == []


class TestRun:
    def test_dispatch(self, facade: DistributionFacade) -> None:
        assert isinstance(run(ResolveCardInput("card1"), facade=facade), RenderTree)
        assert isinstance(run(ExportPaperCardInput("card1"), facade=facade), PrintLayout)
        assert isinstance(run(ExportContactInput("card1"), facade=facade), ContactPayload)
        assert isinstance(run(QrPayloadInput("card1"), facade=facade), QrPayload)

    def test_unknown_input(self, facade: DistributionFacade) -> None:
        with pytest.raises(ValueError):
            run("card1", facade=facade)  # type: ignore[arg-type]
