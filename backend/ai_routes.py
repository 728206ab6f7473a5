"""
AI review routes.

Reviews are generated on demand per pull request and are not stored.
"""

import logging
from typing import Callable, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from pydantic import TypeAdapter, ValidationError

from backend.dependencies import get_reviewer_factory, require_auth_context
from models.data_models import AnalyzePRRequest, AuthContext
from reviewer.reviewer import PullRequestReviewer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])

ANALYZE_REQUEST_ADAPTER = TypeAdapter(Optional[AnalyzePRRequest])


async def read_analyze_request(request: Request) -> AnalyzePRRequest:
    """Parse the review request body. An empty or null body yields no fields."""
    body = (await request.body()).decode("utf-8", errors="replace")
    if not body.strip():
        return AnalyzePRRequest()
    try:
        payload = ANALYZE_REQUEST_ADAPTER.validate_json(body)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False), body=body)
    return payload or AnalyzePRRequest()


@router.post(
    "/analyze-pr",
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": AnalyzePRRequest.model_json_schema()}},
            "required": False,
        }
    },
)
async def analyze_pr(
    request: Request,
    auth: AuthContext = Depends(require_auth_context),
    reviewer_factory: Callable[[], PullRequestReviewer] = Depends(get_reviewer_factory)
):
    """
    Generate an AI review of one pull request.

    Request Body:
    - owner: Repository owner
    - repo: Repository name
    - pull_number: Pull request number

    Returns:
    - success: True
    - analysis: The generated review text, unmodified
    - pr: title, number and html_url of the reviewed PR

    Raises:
    - 401: If not signed in
    - 400: If owner, repo or pull_number is missing
    - 422: If the body is not valid JSON (checked after sign-in)
    - 500: If GitHub or the AI service fails
    """
    payload = await read_analyze_request(request)
    if not payload.owner or not payload.repo or not payload.pull_number:
        raise HTTPException(status_code=400, detail="Missing required parameters")

    pr_ref = f"{payload.owner}/{payload.repo}#{payload.pull_number}"

    try:
        reviewer = reviewer_factory()
        result = await reviewer.review_pull_request(
            auth.access_token,
            payload.owner,
            payload.repo,
            payload.pull_number,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error in PR analysis for {pr_ref}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to analyze PR: {str(e)}")

    logger.info(f"Analyzed {pr_ref} for {auth.user.login} ({len(result.analysis)} chars)")

    return {
        "success": True,
        "analysis": result.analysis,
        "pr": {
            "title": result.title,
            "number": result.number,
            "html_url": result.html_url,
        },
    }


@router.get("/analysis-history")
def analysis_history(auth: AuthContext = Depends(require_auth_context)):
    """Past reviews are not stored, so the history is always empty."""
    return []
