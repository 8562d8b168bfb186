from figma_auth_relay.contracts.figma_models import OAuthAccessTokenResponseRaw
from figma_auth_relay.contracts.models import OAuthAccessTokenResponse


def map_token_response(raw: OAuthAccessTokenResponseRaw) -> OAuthAccessTokenResponse:
    return OAuthAccessTokenResponse(
        AccessToken=raw.access_token,
        RefreshToken=raw.refresh_token,
        ExpiresIn=raw.expires_in,
    )
