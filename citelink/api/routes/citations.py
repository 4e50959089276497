"""Citation detection, suggestion, navigation and history routes"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.security import HTTPBearer
from prometheus_client import Counter
from slowapi import Limiter
from slowapi.util import get_remote_address

from citelink.api.schemas import (
    CitationRecordResponse,
    DetectRequest,
    DetectResponse,
    HistoryEntryResponse,
    HistoryResponse,
    ManualEntryRequest,
    NavigationIntentResponse,
    ResolveRequest,
    SuggestionModel,
    SuggestRequest,
    SuggestResponse,
)
from citelink.config.citation_limits import RECENT_HISTORY_LIMIT
from citelink.core.citation.detector import detect_citation_context
from citelink.core.citation.manual_entry import validate_manual_entry
from citelink.core.citation.navigator import CitationNavigator
from citelink.core.citation.ranker import Suggestion, SuggestionRanker
from citelink.core.exceptions import ManualEntryError
from citelink.core.models.citation import create_citation
from citelink.core.models.exhibit import find_linked_file_id
from citelink.core.models.navigation import CitationClickPayload
from citelink.core.ports.directory import ExhibitDirectoryPort

logger = logging.getLogger(__name__)
limiter = Limiter(key_func=get_remote_address)

NAVIGATIONS = Counter(
    "citelink_navigations_total", "Citation navigations resolved", ["resolved"]
)


def _suggestion_models(suggestions: List[Suggestion]) -> List[SuggestionModel]:
    return [
        SuggestionModel(
            exhibit_ref=s.entry.exhibit_ref,
            title=s.entry.title,
            exhibit_type=s.entry.exhibit_type.value,
            file_id=s.entry.file_id,
            is_key_evidence=s.entry.is_key_evidence,
            relevance=s.relevance,
            display_text=s.display_text,
        )
        for s in suggestions
    ]


def create_citations_router(
    directory: ExhibitDirectoryPort,
    navigator: CitationNavigator,
    ranker: SuggestionRanker,
    verify_token_func,
) -> APIRouter:
    """Create citation router with dependency injection.

    Args:
        directory: Exhibit directory for the selected project
        navigator: Navigator wired to resolver and history tracker
        ranker: Suggestion ranker
        verify_token_func: Token verification function

    Returns:
        APIRouter configured with citation endpoints
    """
    router = APIRouter(tags=["Citations"])
    security = HTTPBearer()

    async def get_current_token(credentials=Depends(security)) -> str:
        """Dependency wrapper for verify_token"""
        return await verify_token_func(credentials)

    @router.post("/api/v1/citations/detect", response_model=DetectResponse)
    @limiter.limit("600/minute")
    async def detect_citation(
        request: Request,
        body: DetectRequest,
        token: str = Depends(get_current_token),
    ):
        """Detect a partial citation before the caret and rank completions"""
        context = detect_citation_context(body.text_before_caret)
        if not context.in_context:
            return DetectResponse(in_context=False)

        suggestions = []
        if context.is_rankable:
            suggestions = ranker.rank(context.partial_exhibit, directory.get_exhibits())

        return DetectResponse(
            in_context=True,
            partial_exhibit=context.partial_exhibit,
            has_page_separator=context.has_page_separator,
            partial_page=context.partial_page,
            suggestions=_suggestion_models(suggestions),
        )

    @router.post("/api/v1/citations/suggest", response_model=SuggestResponse)
    @limiter.limit("600/minute")
    async def suggest_citations(
        request: Request,
        body: SuggestRequest,
        token: str = Depends(get_current_token),
    ):
        """Rank exhibit completions for a partial reference"""
        suggestions = ranker.rank(body.partial, directory.get_exhibits())
        return SuggestResponse(suggestions=_suggestion_models(suggestions))

    @router.post("/api/v1/citations/resolve", response_model=NavigationIntentResponse)
    @limiter.limit("120/minute")
    async def resolve_citation(
        request: Request,
        body: ResolveRequest,
        token: str = Depends(get_current_token),
    ):
        """Resolve a clicked citation and record it in history"""
        payload = CitationClickPayload.from_reference(body.citation_reference, file_id=body.file_id)
        intent = navigator.navigate(payload, body.source)
        NAVIGATIONS.labels(resolved=str(intent.has_target).lower()).inc()
        return NavigationIntentResponse(has_target=intent.has_target, **intent.to_dict())

    @router.get("/api/v1/citations/history", response_model=HistoryResponse)
    @limiter.limit("60/minute")
    async def list_history(
        request: Request,
        limit: int = Query(RECENT_HISTORY_LIMIT, ge=1, le=500),
        token: str = Depends(get_current_token),
    ):
        """Citation history, most recently accessed first"""
        history = navigator.history
        entries = [
            HistoryEntryResponse(**entry.to_dict())
            for entry in history.recent(limit)
        ]
        return HistoryResponse(entries=entries, total=len(history))

    @router.delete("/api/v1/citations/history")
    @limiter.limit("10/minute")
    async def clear_history(
        request: Request,
        token: str = Depends(get_current_token),
    ):
        """Clear all citation history"""
        navigator.history.clear()
        return {"status": "cleared"}

    @router.post("/api/v1/citations/validate", response_model=CitationRecordResponse)
    @limiter.limit("60/minute")
    async def validate_citation(
        request: Request,
        body: ManualEntryRequest,
        token: str = Depends(get_current_token),
    ):
        """Validate insert-dialog fields and return the citation record"""
        try:
            payload = validate_manual_entry(body.exhibit, body.page, body.description)
        except ManualEntryError as e:
            raise HTTPException(status_code=422, detail={"errors": e.errors})

        citation = create_citation(
            exhibit_ref=payload.exhibit_ref,
            page_number=payload.page_number,
            description=payload.description,
            file_id=find_linked_file_id(directory.get_exhibits(), payload.exhibit_ref),
        )
        return CitationRecordResponse(
            citation=citation.to_dict(),
            text=citation.text,
            tooltip=citation.tooltip(),
        )

    return router
