"""
One-shot transcript summarization through the Langflow summary flow.
"""
from fastapi import APIRouter, Depends

from checkin.dependencies import get_langflow_client
from checkin.models.conversation import SummarizeRequest, SummarizeResponse
from checkin.services import LangflowClient

router = APIRouter(tags=["Summaries"])


@router.post("/summarize", response_model=SummarizeResponse)
async def summarize(
    request: SummarizeRequest,
    langflow: LangflowClient = Depends(get_langflow_client),
):
    """Return the flow's summary of a transcript (502 on provider failure)."""
    summary = await langflow.summarize(request.transcript)
    return SummarizeResponse(summary=summary)
