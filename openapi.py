from sys import argv, stderr

from fastapi.testclient import TestClient


if __name__ == "__main__":
    from figma_auth_relay.infrastructure.in_memory_config import InMemoryConfig
    from figma_auth_relay.main import create_app

    # the schema doesn't depend on the credentials, placeholders are enough
    config = InMemoryConfig(
        {
            "FIGMA_CLIENT_ID": "client-id",
            "FIGMA_CLIENT_SECRET": "client-secret",
            "FIGMA_REDIRECT_URI": "http://localhost/callback",
        }
    )
    app = create_app(config)

    match argv:
        case [_, p]:
            out_path = p
        case _:
            print("Usage: python openapi.py <output path>", file=stderr)
            exit(1)

    with TestClient(app) as client:
        response = client.get("/openapi.json")
    assert response.status_code == 200

    with open(out_path, "w", encoding="utf-8") as f:
        f.write(response.text)
