import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, APIRouter, Depends, Request, Response, HTTPException, status
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException
from app.clients import PokeAPIClient
from app.cors import CORSRoute
from app.dependencies import get_settings, get_poke_client, get_greeting_service, close_clients
from app.errors import APIClientError, FetchError, FormParseError, TemplateRenderError, UpstreamStatusError
from app.forms import validate_form_request
from app.services import GreetingService

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting API...")
    yield
    logger.info("Stopping API...")
    await close_clients()


app = FastAPI(
    title="htmx Pokedex",
    description="Serves a static site and the HTML fragments its htmx widgets ask for.",
    lifespan=lifespan,
)
app.state.cors_allow_origin = settings.cors_allow_origin

# Every custom endpoint goes through CORSRoute and also answers OPTIONS
fragments = APIRouter(route_class=CORSRoute)


def error_text(detail: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> PlainTextResponse:
    return PlainTextResponse(f"error: {detail}", status_code=status_code)


@fragments.api_route(
    "/goodbyeworld.html",
    methods=["GET", "OPTIONS"],
    response_class=HTMLResponse,
    summary="Returns a fixed goodbye fragment",
)
async def goodbye_world(service: GreetingService = Depends(get_greeting_service)):
    try:
        return HTMLResponse(service.render_goodbye())
    except TemplateRenderError as e:
        return error_text(e.detail)


# Endpoint 1: greeting plus featured Pokemon data
@fragments.api_route(
    "/hello_world",
    methods=["GET", "OPTIONS"],
    response_class=HTMLResponse,
    summary="Returns a greeting fragment with the featured Pokemon's abilities",
)
async def hello_world(
    name: str | None = None,
    service: GreetingService = Depends(get_greeting_service),
):
    """Greets `name` ("World" when missing, empty or "null") and renders the featured Pokemon's data."""
    try:
        html = await service.render_hello_world(name)
    except FetchError as e:
        # Only reached when DEGRADE_ON_FETCH_ERROR is off
        return error_text(e.detail, status.HTTP_502_BAD_GATEWAY)
    except TemplateRenderError as e:
        return error_text(e.detail)
    return HTMLResponse(html, status_code=status.HTTP_200_OK)


# Endpoint 2: greeting from a submitted form
@fragments.api_route(
    "/hello_world_form",
    methods=["POST", "OPTIONS"],
    response_class=HTMLResponse,
    summary="Returns a greeting fragment for the posted form field `name`",
)
async def hello_world_form(
    request: Request,
    service: GreetingService = Depends(get_greeting_service),
):
    try:
        await validate_form_request(request)
        form = await request.form()
    except FormParseError as e:
        return error_text(e.detail)
    except StarletteHTTPException as e:
        # Starlette reports malformed multipart bodies as a 400; they surface as a 500 here
        return error_text(e.detail)
    except MultiPartException as e:
        return error_text(e.message)

    name = form.get("name", "")
    try:
        html = service.render_form_greeting(name if isinstance(name, str) else "")
    except TemplateRenderError:
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return HTMLResponse(html)


# Endpoint 3: full upstream payload, no fixed schema
@fragments.api_route(
    "/pokemon/{name}",
    methods=["GET", "OPTIONS"],
    summary="Returns the raw PokeAPI payload for a Pokemon",
)
async def get_pokemon_payload(
    name: str,
    poke_client: PokeAPIClient = Depends(get_poke_client),
):
    try:
        return await poke_client.fetch_raw(name)
    except UpstreamStatusError as e:
        if e.status_code == status.HTTP_404_NOT_FOUND:
            raise HTTPException(status_code=404, detail=f"Pokemon '{name}' not found.")
        raise APIClientError(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.detail)
    except FetchError as e:
        # Network and decoding failures map to a 503 for the API consumer
        raise APIClientError(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.detail)


app.include_router(fragments)

# Serve the pre-built site at the root url; mounted last so the endpoints above win
if settings.static_dir:
    site = StaticFiles(directory=settings.static_dir, html=True)
else:
    site = StaticFiles(packages=[("app", "public")], html=True)
app.mount("/", site, name="site")
