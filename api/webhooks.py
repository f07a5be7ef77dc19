"""
Webhook endpoints for the voice-agent platform.

Provides the call-ended webhook: validates the method, skips calls without a
transcript, emails the formatted transcript and maps the delivery outcome to
the HTTP response.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config import Settings, get_settings
from schemas.call_event import CallEndedEvent
from schemas.notification import ErrorResponse, SkippedResponse, SuccessResponse
from services.email import BaseEmailClient, get_email_client
from services.notification import build_notification

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Webhooks"])

# Every method is routed here so non-POST requests get the JSON 405 body
# instead of FastAPI's default.
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _json(status_code: int, body: BaseModel) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


@router.api_route("", methods=ALL_METHODS, summary="Call-ended webhook")
async def handle_call_ended(
    request: Request,
    settings: Settings = Depends(get_settings),
    email_client: BaseEmailClient = Depends(get_email_client),
) -> JSONResponse:
    """
    Email the transcript of a finished call to the configured recipient.

    **Request Body:**
    ```json
    {
      "call_id": "call_8f2a1c",
      "from_number": "+13035550142",
      "call_duration_ms": 125000,
      "start_timestamp": 1767653100000,
      "transcript": "Hi, this is Dana. Please call me back."
    }
    ```

    **Responses:**
    - 200 `{"status": "success", "emailId": "...", "sentTo": "..."}`
    - 200 `{"status": "skipped", "reason": "no transcript"}`
    - 405 `{"error": "Method not allowed"}`
    - 500 `{"error": "Failed to send email", "details": "..."}`
    - 500 `{"error": "Internal server error", "message": "..."}`
    """
    if request.method != "POST":
        return _json(status.HTTP_405_METHOD_NOT_ALLOWED, ErrorResponse(error="Method not allowed"))

    try:
        payload: Any = await request.json()
        event = CallEndedEvent.model_validate(payload)

        logger.info(
            "Received call-ended webhook",
            extra={"call_id": event.call_id, "from_number": event.from_number},
        )

        transcript = event.resolve_transcript()
        if transcript is None:
            logger.info("Skipping call without transcript", extra={"call_id": event.call_id})
            return _json(status.HTTP_200_OK, SkippedResponse())

        notification = build_notification(event, transcript, settings)
        result = await email_client.send(notification)

        if result.error is not None:
            logger.error(
                f"Email error: {result.error.name}: {result.error.message}",
                extra={
                    "call_id": event.call_id,
                    "provider_status": result.error.status_code,
                },
            )
            return _json(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                ErrorResponse(error="Failed to send email", details=result.error.message),
            )

        logger.info(
            "Call notification sent",
            extra={"call_id": event.call_id, "email_id": result.email_id},
        )
        return _json(
            status.HTTP_200_OK,
            SuccessResponse(email_id=result.email_id, sent_to=notification.recipient),
        )

    except Exception as e:
        logger.exception(f"Webhook error: {e}")
        return _json(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorResponse(error="Internal server error", message=str(e)),
        )
