import pytest

from src.adapters.memory import InMemoryCardStore, InMemoryTemplateStore, InMemoryViewStore
from src.components.distribution import DistributionConfig, DistributionFacade
from src.components.views import InMemoryViewWindow, ViewLedger
from src.core.entities import BusinessCard, Template
from tests.factories import MockTimePort, make_card, make_template


@pytest.fixture
def template() -> Template:
    return make_template()


@pytest.fixture
def card() -> BusinessCard:
    return make_card()


@pytest.fixture
def time_port() -> MockTimePort:
    return MockTimePort()


@pytest.fixture
def template_store(template: Template) -> InMemoryTemplateStore:
    return InMemoryTemplateStore([template])


@pytest.fixture
def card_store(card: BusinessCard) -> InMemoryCardStore:
    return InMemoryCardStore([card])


@pytest.fixture
def view_store() -> InMemoryViewStore:
    return InMemoryViewStore()


@pytest.fixture
def ledger(
    view_store: InMemoryViewStore,
    card_store: InMemoryCardStore,
    time_port: MockTimePort,
) -> ViewLedger:
    return ViewLedger(
        store=view_store,
        cards=card_store,
        window=InMemoryViewWindow(),
        time_port=time_port,
    )


@pytest.fixture
def facade(
    card_store: InMemoryCardStore,
    template_store: InMemoryTemplateStore,
    ledger: ViewLedger,
) -> DistributionFacade:
    return DistributionFacade(
        cards=card_store,
        templates=template_store,
        ledger=ledger,
        config=DistributionConfig(site_base_url="https://cards.example.com"),
    )
