from pydantic import BaseModel, NonNegativeInt


class OAuthAccessTokenResponse(BaseModel):
    """
    What callers of the token endpoint get back.
    Same values as Figma's response, under the relay's own field names.
    """

    AccessToken: str
    RefreshToken: str
    ExpiresIn: NonNegativeInt
