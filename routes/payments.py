import json
import logging
import time

from fastapi import APIRouter, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from core.config import settings
from core.errors import EduPayError
from core.logging import mask_key, order_id_ctx
from schemas.payment import GatewaySession, KeyCheckOut, PaymentErrorOut, PaymentIntent
from services import midtrans

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["payments"])


@router.post(
    "/payment/create",
    response_model=GatewaySession,
    responses={500: {"model": PaymentErrorOut}},
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": PaymentIntent.model_json_schema(by_alias=True)}},
        }
    },
)
async def create_payment(request: Request):
    # Credentials are checked before the body so a misconfigured relay always answers 500
    midtrans.ensure_credentials()

    raw = await request.body()
    try:
        intent = PaymentIntent.model_validate(json.loads(raw or b"null"))
    except json.JSONDecodeError:
        raise HTTPException(status_code=422, detail="Request body must be JSON")
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=jsonable_encoder(e.errors(include_url=False)))

    token = order_id_ctx.set(intent.order_id)
    try:
        logger.info("Creating transaction for order")
        session = await run_in_threadpool(midtrans.create_session, intent)
        logger.info("Transaction created")
        return session
    except EduPayError as e:
        logger.error("Midtrans error: %s", e.message, extra={"details": e.details})
        raise
    finally:
        order_id_ctx.reset(token)


@router.get("/test-key", response_model=KeyCheckOut, response_model_exclude_none=True)
def test_key():
    """Check the configured server key by creating a small throwaway transaction."""
    intent = PaymentIntent(order_id=f"TEST-{int(time.time() * 1000)}", amount=10000)
    try:
        session = midtrans.create_session(intent)
    except EduPayError as e:
        return KeyCheckOut(
            status="FAILED",
            message=e.message,
            server_key_used=mask_key(settings.MIDTRANS_SERVER_KEY),
        )
    return KeyCheckOut(status="SUCCESS", message="API key is valid!", token=session.token)
