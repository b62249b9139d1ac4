from functools import lru_cache
from app.clients import PokeAPIClient
from app.config import Settings
from app.rendering import FragmentRenderer
from app.services import GreetingService
from fastapi import Depends

_poke_client = None
_renderer = None

@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()

def get_poke_client(settings: Settings = Depends(get_settings)) -> PokeAPIClient:
    global _poke_client
    if _poke_client is None:
        _poke_client = PokeAPIClient(base_url=settings.pokeapi_base_url)
    return _poke_client

def get_renderer() -> FragmentRenderer:
    global _renderer
    if _renderer is None:
        _renderer = FragmentRenderer()
    return _renderer

def get_greeting_service(
    poke_client: PokeAPIClient = Depends(get_poke_client),
    renderer: FragmentRenderer = Depends(get_renderer),
    settings: Settings = Depends(get_settings),
) -> GreetingService:
    return GreetingService(poke_client=poke_client, renderer=renderer, settings=settings)

async def close_clients():
    global _poke_client
    if _poke_client is not None:
        await _poke_client.close()
        _poke_client = None
