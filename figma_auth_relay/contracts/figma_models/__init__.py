from pydantic import BaseModel, ConfigDict, NonNegativeInt


class OAuthAccessTokenResponseRaw(BaseModel):
    """
    Body of a successful response from Figma's OAuth token endpoint.
    Other fields Figma sends along (e.g. `user_id`) are ignored.

    Strict: `"3600"`, `3600.0` or `true` as `expires_in` are not a token response.
    """

    model_config = ConfigDict(strict=True)

    access_token: str
    refresh_token: str
    expires_in: NonNegativeInt
