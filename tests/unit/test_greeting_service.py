import pytest
from unittest.mock import AsyncMock
from app.config import Settings
from app.errors import TemplateRenderError, TransportError, UpstreamStatusError
from app.models import AbilityEntry, AbilityRef, FetchResult, PokemonRecord
from app.rendering import FragmentRenderer
from app.services.greeting_service import GreetingService
from jinja2 import DictLoader, Environment, StrictUndefined

# Sample data returned by the MOCKED client
MOCK_DITTO_RECORD = PokemonRecord(
    height=3,
    abilities=[
        AbilityEntry(ability=AbilityRef(name="limber", url="https://pokeapi.co/api/v2/ability/7/"), is_hidden=False, slot=1),
        AbilityEntry(ability=AbilityRef(name="imposter", url="https://pokeapi.co/api/v2/ability/150/"), is_hidden=True, slot=3),
    ],
)

@pytest.fixture
def poke_client():
    # Use AsyncMock for methods that are awaited
    client = AsyncMock()
    client.try_fetch_record.return_value = FetchResult(record=MOCK_DITTO_RECORD)
    return client

def make_service(poke_client, **settings) -> GreetingService:
    return GreetingService(poke_client=poke_client, renderer=FragmentRenderer(), settings=Settings(**settings))

# --- NAME RESOLUTION RULES ---

@pytest.mark.parametrize("raw_name", [None, "", "null"])
def test_missing_name_defaults_to_world(poke_client, raw_name):
    assert make_service(poke_client).resolve_name(raw_name) == "World"

@pytest.mark.parametrize("raw_name", ["Ash", "NULL", "nil", " "])
def test_other_names_pass_through(poke_client, raw_name):
    assert make_service(poke_client).resolve_name(raw_name) == raw_name

def test_name_override_wins(poke_client):
    service = make_service(poke_client, greeting_name_override="Linh")

    assert service.resolve_name("Ash") == "Linh"
    assert service.resolve_name(None) == "Linh"

# --- HELLO WORLD FRAGMENT ---

@pytest.mark.asyncio
async def test_hello_world_renders_name_and_record(poke_client):
    """
    Verifies the service fetches the featured Pokemon and puts name, height and abilities in the fragment.
    """
    service = make_service(poke_client)

    html = await service.render_hello_world("Ash")

    poke_client.try_fetch_record.assert_called_once_with("ditto")
    assert "Hello, Ash!" in html
    assert "<strong>ditto</strong>" in html
    assert "<dd>3</dd>" in html
    assert "limber" in html
    assert "imposter</a> (hidden)" in html
    assert 'href="https://pokeapi.co/api/v2/ability/150/"' in html

@pytest.mark.asyncio
async def test_hello_world_uses_configured_featured_pokemon(poke_client):
    service = make_service(poke_client, featured_pokemon="mew")

    html = await service.render_hello_world(None)

    poke_client.try_fetch_record.assert_called_once_with("mew")
    assert "<strong>mew</strong>" in html
    assert "Hello, World!" in html

@pytest.mark.asyncio
async def test_hello_world_escapes_html_in_name(poke_client):
    html = await make_service(poke_client).render_hello_world("<b>Ash</b>")

    assert "<b>Ash</b>" not in html
    assert "&lt;b&gt;Ash&lt;/b&gt;" in html

@pytest.mark.asyncio
async def test_fetch_failure_degrades_to_empty_record(poke_client):
    """With degrading on (default), an upstream failure still renders, just without data."""
    poke_client.try_fetch_record.return_value = FetchResult(error=UpstreamStatusError(500))

    html = await make_service(poke_client).render_hello_world("Ash")

    assert "Hello, Ash!" in html
    assert "<dd>0</dd>" in html
    assert "No abilities available." in html

@pytest.mark.asyncio
async def test_fetch_failure_raises_when_degrading_is_disabled(poke_client):
    error = TransportError("failed to fetch Pokemon data: Connection refused")
    poke_client.try_fetch_record.return_value = FetchResult(error=error)
    service = make_service(poke_client, degrade_on_fetch_error=False)

    with pytest.raises(TransportError) as excinfo:
        await service.render_hello_world("Ash")

    assert excinfo.value is error

@pytest.mark.asyncio
async def test_template_failure_raises_render_error(poke_client):
    env = Environment(
        loader=DictLoader({"partials/helloworld.html": "{{ missing.value }}"}),
        undefined=StrictUndefined,
    )
    service = GreetingService(poke_client=poke_client, renderer=FragmentRenderer(env=env), settings=Settings())

    with pytest.raises(TemplateRenderError) as excinfo:
        await service.render_hello_world("Ash")

    assert excinfo.value.template_name == "partials/helloworld.html"
    assert "missing" in excinfo.value.detail

# --- STATIC FRAGMENTS ---

def test_form_greeting_has_no_default(poke_client):
    service = make_service(poke_client)

    assert "Hello, Misty!" in service.render_form_greeting("Misty")
    assert "Hello, !" in service.render_form_greeting("")

def test_form_greeting_ignores_name_override(poke_client):
    service = make_service(poke_client, greeting_name_override="Linh")

    assert "Hello, Misty!" in service.render_form_greeting("Misty")

def test_goodbye_fragment(poke_client):
    assert "Goodbye, world!" in make_service(poke_client).render_goodbye()
    poke_client.try_fetch_record.assert_not_called()

# --- FETCH RESULT ---

def test_fetch_result_keeps_error_instance():
    error = UpstreamStatusError(503)
    result = FetchResult(error=error)

    assert result.error is error
    assert not result.ok
    assert FetchResult(record=MOCK_DITTO_RECORD).ok
