# pyright: reportUnusedFunction=false

from typing import Annotated
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import PlainTextResponse
from loguru import logger

from figma_auth_relay.contracts.models import OAuthAccessTokenResponse
from figma_auth_relay.infrastructure.figma_mappers import map_token_response
from figma_auth_relay.services import Services, ServicesProviderSingleton

# Note: after editing the API, run `python openapi.py openapi.json` to regenerate the OpenAPI spec

router = APIRouter()


def authorization_code(
    request: Request,
    code: Annotated[str, Query(alias="Code")] = "",
) -> str:
    """
    The `Code` query parameter. If it is repeated, the first one counts.
    """
    if codes := request.query_params.getlist("Code"):
        return codes[0]
    return code


@router.get(
    "/integrations/figma/token",
    responses={400: {"description": "The code could not be exchanged"}},
)
async def figma_token_exchange(
    services: Annotated[Services, Depends(ServicesProviderSingleton.services)],
    code: Annotated[str, Depends(authorization_code)],
) -> OAuthAccessTokenResponse:
    """
    Exchange a Figma authorization code for an access token.

    Any failure is a bare 400, what went wrong upstream is only logged.
    """
    if not code:
        logger.warning("Token exchange requested without a code")

    raw = await services.figma_api.exchange_authorization_code(code)
    return map_token_response(raw)


@router.get("/ping", response_class=PlainTextResponse)
def ping() -> str:
    return "pong"
