import logging
from app.clients.pokeapi_client import PokeAPIClient
from app.config import Settings
from app.models import PokemonRecord
from app.rendering import (
    FragmentRenderer,
    HELLO_WORLD_TEMPLATE,
    HELLO_WORLD_GREETING_TEMPLATE,
    GOODBYE_WORLD_TEMPLATE,
)

logger = logging.getLogger(__name__)

DEFAULT_NAME = "World"

class GreetingService:
    # Service gets the client, the renderer and the settings via Dependency Injection
    def __init__(self, poke_client: PokeAPIClient, renderer: FragmentRenderer, settings: Settings):
        self._poke_client = poke_client
        self._renderer = renderer
        self._settings = settings

    def resolve_name(self, name: str | None) -> str:
        """
        Picks the name to greet.
        Rule: configured override wins. Otherwise missing, empty or "null" -> "World".
        """
        if self._settings.greeting_name_override:
            return self._settings.greeting_name_override
        # htmx sends the literal string "null" for an unset JS value
        if name is None or name == "" or name == "null":
            return DEFAULT_NAME
        return name

    async def render_hello_world(self, name: str | None) -> str:
        """
        Endpoint /hello_world: greets `name` and shows the featured Pokemon's abilities and height.
        Raises the FetchError when the upstream call failed and degrading is disabled.
        """
        pokemon_name = self._settings.featured_pokemon
        result = await self._poke_client.try_fetch_record(pokemon_name)

        # --- Explicit branch: degrade to an empty record, or give up ---
        if result.ok:
            pokemon_data = result.record
            logger.info(f"Pokemon data: {pokemon_data.model_dump_json(indent=2)}")
        elif self._settings.degrade_on_fetch_error:
            logger.warning(f"Rendering {pokemon_name} without upstream data: {result.error.detail}")
            pokemon_data = PokemonRecord()
        else:
            raise result.error

        return self._renderer.render(HELLO_WORLD_TEMPLATE, {
            "name": self.resolve_name(name),
            "pokemon_data": pokemon_data,
            "pokemon_name": pokemon_name,
        })

    def render_form_greeting(self, name: str) -> str:
        # No defaulting here: an empty form field renders an empty name
        return self._renderer.render(HELLO_WORLD_GREETING_TEMPLATE, {"name": name})

    def render_goodbye(self) -> str:
        return self._renderer.render(GOODBYE_WORLD_TEMPLATE)
