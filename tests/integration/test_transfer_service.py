from collections import Counter

import pytest
from sqlalchemy import func, select

from flashdeck.core.exceptions import NotFoundError, StorageError, ValidationError
from flashdeck.models import Deck
from flashdeck.schemas.transfer import EXPORT_FORMAT_VERSION
from flashdeck.services import deck_service, flashcard_service, transfer_service

CARDS = [
    ("hola", "hello", "Greetings", ""),
    ("comer", "to eat", "Verbs", "c..."),
    ("beber", "to drink", "Verbs", ""),
    ("perro", "dog", "", "woof"),
]


@pytest.fixture
async def spanish_deck(test_session, media_store, png_bytes):
    deck = await deck_service.create_deck(test_session, "Spanish Basics", "Starter words")
    for question, answer, category, hint in CARDS:
        card = await flashcard_service.create_flashcard(
            test_session, deck.id, question, answer, category=category, hint=hint
        )
    await flashcard_service.set_flashcard_image(
        test_session, media_store, card.id, png_bytes, "image/png", "dog.png"
    )
    return deck


def _card_multiset(cards):
    return Counter((c["question"], c["answer"], c["category"], c["hint"]) for c in cards)


@pytest.mark.integration
class TestExport:
    """Export document shape"""

    async def test_export_document(self, test_session, spanish_deck):
        document = await transfer_service.export_deck(test_session, spanish_deck.id)
        data = document.model_dump(mode="json")

        assert data["version"] == EXPORT_FORMAT_VERSION == "1.0"
        assert data["deck"]["name"] == "Spanish Basics"
        assert data["deck"]["description"] == "Starter words"
        assert data["deck"]["created_at"]
        assert data["export_date"]
        assert [c["question"] for c in data["flashcards"]] == [q for q, *_ in CARDS]
        assert all("image" not in card for card in data["flashcards"])
        assert set(data["flashcards"][0]) == {"question", "answer", "category", "hint", "created_at"}

    async def test_export_missing_deck(self, test_session):
        with pytest.raises(NotFoundError):
            await transfer_service.export_deck(test_session, "missing")

    def test_export_filename(self):
        filename = transfer_service.export_filename("Spanish  Basics\tA1")
        assert filename.startswith("Spanish_Basics_A1_")
        assert filename.endswith(".json")


@pytest.mark.integration
class TestImport:
    """Importing creates a fresh deck"""

    async def test_round_trip(self, test_session, spanish_deck):
        document = (await transfer_service.export_deck(test_session, spanish_deck.id)).model_dump(mode="json")

        imported = await transfer_service.import_deck(
            test_session, {"deckData": document["deck"], "flashcardsData": document["flashcards"]}
        )

        assert imported.id != spanish_deck.id
        assert imported.name == "Spanish Basics"
        assert imported.card_count == len(CARDS)
        cards = await flashcard_service.list_flashcards(test_session, imported.id)
        assert all(card.image is None for card in cards)
        assert _card_multiset(
            {"question": c.question, "answer": c.answer, "category": c.category, "hint": c.hint}
            for c in cards
        ) == _card_multiset(document["flashcards"])

    async def test_supplied_ids_and_timestamps_are_ignored(self, test_session, spanish_deck):
        imported = await transfer_service.import_deck(
            test_session,
            {
                "deckData": {
                    "_id": spanish_deck.id,
                    "id": spanish_deck.id,
                    "name": "Copy",
                    "created_at": "1999-01-01T00:00:00Z",
                },
                "flashcardsData": [{"question": "Q", "answer": "A", "deck_id": "elsewhere"}],
            },
        )

        assert imported.id != spanish_deck.id
        assert imported.created_at.year != 1999
        (card,) = await flashcard_service.list_flashcards(test_session, imported.id)
        assert card.category == ""
        assert card.hint == ""

    async def test_numeric_fields_become_text(self, test_session):
        imported = await transfer_service.import_deck(
            test_session,
            {"deckData": {"name": 2024}, "flashcardsData": [{"question": "2+2", "answer": 4}]},
        )

        assert imported.name == "2024"
        (card,) = await flashcard_service.list_flashcards(test_session, imported.id)
        assert card.answer == "4"

    async def test_import_without_flashcards(self, test_session):
        imported = await transfer_service.import_deck(test_session, {"deckData": {"name": "Empty"}})
        assert imported.card_count == 0

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"deckData": None},
            {"deckData": {"description": "no name"}},
            {"deckData": {"name": "  "}},
            {"deckData": {"name": "Deck"}, "flashcardsData": [{"question": "Q"}]},
            {"deckData": {"name": "Deck"}, "flashcardsData": "not a list"},
        ],
    )
    async def test_invalid_payload_creates_nothing(self, test_session, payload):
        with pytest.raises(ValidationError):
            await transfer_service.import_deck(test_session, payload)

        assert await test_session.scalar(select(func.count(Deck.id))) == 0

    async def test_failed_card_insert_keeps_the_deck(self, test_session, monkeypatch):
        async def failing_commit(db, action):
            await db.rollback()
            raise StorageError(f"Failed to {action}")

        monkeypatch.setattr(transfer_service, "commit_or_raise", failing_commit)

        with pytest.raises(StorageError):
            await transfer_service.import_deck(
                test_session,
                {"deckData": {"name": "Half done"}, "flashcardsData": [{"question": "Q", "answer": "A"}]},
            )

        decks = await deck_service.list_decks(test_session)
        assert [(d.name, d.card_count) for d in decks] == [("Half done", 0)]
