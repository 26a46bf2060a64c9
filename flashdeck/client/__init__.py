from flashdeck.client.api import FlashcardAPIClient
from flashdeck.client.category_filter import CategoryFacet, CategoryFilter, derive_facets
from flashdeck.client.store import Action, AppState, AppStore, reduce
from flashdeck.client.study_session import SessionState, StudySession

__all__ = [
    "FlashcardAPIClient",
    "CategoryFacet",
    "CategoryFilter",
    "derive_facets",
    "Action",
    "AppState",
    "AppStore",
    "reduce",
    "SessionState",
    "StudySession",
]
