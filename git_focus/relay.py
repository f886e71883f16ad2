"""
OAuth code-exchange relay.

The browser cannot hold the OAuth client secret, so it posts the authorization
code here and this service swaps it for an access token server-side.

Run with: uvicorn git_focus.relay:app
"""

import os
from typing import Any

import httpx
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from git_focus.config import get_verify_ssl

load_dotenv()

GITHUB_TOKEN_URL = "https://github.com/login/oauth/access_token"


def _allowed_origins() -> list[str]:
    raw = os.getenv("GIT_FOCUS_RELAY_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


async def exchange_code(code: str) -> dict[str, Any]:
    """
    Exchange an OAuth authorization code for an access token.

    Raises:
        httpx.HTTPError: If the upstream request fails.
    """
    async with httpx.AsyncClient(verify=get_verify_ssl(), timeout=10) as client:
        response = await client.post(
            GITHUB_TOKEN_URL,
            json={
                "client_id": os.getenv("GITHUB_CLIENT_ID"),
                "client_secret": os.getenv("GITHUB_CLIENT_SECRET"),
                "code": code,
            },
            headers={"Accept": "application/json"},
        )
        return response.json()


app = FastAPI(title="git-focus OAuth relay")

app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins(),
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(_request: Request, exc: StarletteHTTPException):
    if exc.status_code in (404, 405):
        return JSONResponse({"error": "not found"}, status_code=404)
    return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code)


@app.options("/{path:path}")
async def options_any(path: str):
    # Plain OPTIONS (no preflight headers) is not answered by CORSMiddleware
    return Response(
        status_code=200,
        headers={
            "Access-Control-Allow-Methods": "POST, OPTIONS",
            "Access-Control-Allow-Headers": "Content-Type",
        },
    )


@app.post("/exchange")
async def exchange(request: Request):
    try:
        body = await request.json()
        code = body.get("code") if isinstance(body, dict) else None
        if not code:
            return JSONResponse({"error": "missing code"}, status_code=400)
        return JSONResponse(await exchange_code(code))
    except Exception as e:
        return JSONResponse({"error": str(e)}, status_code=500)
