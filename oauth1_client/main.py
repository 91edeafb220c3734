"""
OAuth1 Client Web App.
GET /login redirects to the provider; GET|POST /callback exchanges the verifier for an
access token and wakes anyone waiting on the orchestrator. Port 8000 by default.
"""
import html
import logging

from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import FormData

from oauth1_client.config import CALLBACK_PATH, LOGIN_PATH
from oauth1_client.errors import CallbackValidationError, ProviderError
from oauth1_client.orchestrator import FlowOrchestrator
from oauth1_client.provider import OAuth1Provider

logger = logging.getLogger(__name__)

OAUTH_TOKEN_PARAM = "oauth_token"
OAUTH_VERIFIER_PARAM = "oauth_verifier"


def _page(title: str, message: str, status_code: int = 200) -> HTMLResponse:
    return HTMLResponse(
        f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>{html.escape(title)}</title></head>
<body>
  <h1>{html.escape(title)}</h1>
  <p>{html.escape(message)}</p>
  <p><a href="/">Home</a></p>
</body>
</html>""",
        status_code=status_code,
    )


def get_orchestrator(request: Request) -> FlowOrchestrator:
    return request.app.state.orchestrator


def create_app(
    orchestrator: FlowOrchestrator | None = None,
    *,
    login_path: str = LOGIN_PATH,
    callback_path: str = CALLBACK_PATH,
) -> FastAPI:
    """Build the app around one orchestrator; a default OAuth1Provider is used when none is given."""
    app = FastAPI(title="OAuth1 Client", version="0.1.0")
    app.state.orchestrator = orchestrator or FlowOrchestrator(OAuth1Provider())

    @app.get("/health")
    def health():
        """Health check endpoint."""
        return {"status": "ok", "service": "oauth1_client"}

    @app.get("/", response_class=HTMLResponse)
    def home(orchestrator: FlowOrchestrator = Depends(get_orchestrator)):
        """Home page with login link and whether an access token is held (never the secret)."""
        obtained_at = orchestrator.obtained_at
        status = f"Access token obtained at {obtained_at.isoformat()}" if obtained_at else "No access token yet"
        return HTMLResponse(
            f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>OAuth1 Client</title></head>
<body>
  <h1>OAuth1 Client</h1>
  <p><a href="{html.escape(login_path)}">Log in</a></p>
  <p>{html.escape(status)}</p>
</body>
</html>"""
        )

    def login(orchestrator: FlowOrchestrator = Depends(get_orchestrator)):
        """Get a request token and redirect the user to the provider's authorization page."""
        try:
            url = orchestrator.start_login()
        except ProviderError as e:
            logger.error("Failed to authorize: %s", e)
            return _page("Login error", "Could not start authorization with the provider.", status_code=500)
        return RedirectResponse(url=url, status_code=302)

    async def callback(request: Request, orchestrator: FlowOrchestrator = Depends(get_orchestrator)):
        """
        Provider redirect target. oauth_token is optional (falls back to the one from /login),
        oauth_verifier is required. Form fields take precedence over the query string.
        """
        form = await request.form() if request.method == "POST" else FormData()

        def first_value(name: str) -> str | None:
            # first occurrence wins, form fields before query string
            values = [v for v in form.getlist(name) if isinstance(v, str)] or request.query_params.getlist(name)
            return values[0] if values else None

        token = first_value(OAUTH_TOKEN_PARAM)
        verifier = first_value(OAUTH_VERIFIER_PARAM)

        try:
            await run_in_threadpool(orchestrator.complete, token, verifier)
        except CallbackValidationError as e:
            return _page("Error", str(e), status_code=400)
        except ProviderError as e:
            logger.error("Failed to get access token: %s", e)
            return _page("Token error", "Access token exchange failed.", status_code=500)
        return _page("Login success", "Access token received.")

    app.add_api_route(login_path, login, methods=["GET"])
    app.add_api_route(callback_path, callback, methods=["GET", "POST"], response_class=HTMLResponse)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "oauth1_client.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )
