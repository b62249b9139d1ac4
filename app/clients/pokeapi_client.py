import httpx
import logging
from typing import Any
from pydantic import ValidationError
from app.errors import FetchError, TransportError, UpstreamStatusError, DecodeError
from app.models import PokemonRecord, FetchResult

logger = logging.getLogger(__name__)

class PokeAPIClient:
    BASE_URL = "https://pokeapi.co/api/v2"

    def __init__(self, base_url: str | None = None):
        # No timeout: the request blocks the handler until PokeAPI answers or the connection fails
        self.client = httpx.AsyncClient(base_url=base_url or self.BASE_URL, timeout=None)

    async def _fetch_json(self, pokemon_name: str) -> Any:
        """Internal method: one GET against /pokemon/{name}, mapped onto the FetchError taxonomy."""
        url = f"/pokemon/{pokemon_name}"
        logger.info(f"Fetching Pokemon data: {pokemon_name}")

        try:
            response = await self.client.get(url)
        except httpx.RequestError as e:
            # Connect failures and body read failures both land here
            logger.error(f"PokeAPI network error: {str(e)}")
            raise TransportError(f"failed to fetch Pokemon data: {str(e)}") from e

        if response.status_code != httpx.codes.OK:
            logger.error(f"PokeAPI returned status {response.status_code} for {pokemon_name}")
            raise UpstreamStatusError(response.status_code)

        try:
            return response.json()
        except ValueError as e:
            logger.error("PokeAPI response parsing error.")
            raise DecodeError(f"failed to decode Pokemon data: {str(e)}") from e

    async def fetch_record(self, name: str) -> PokemonRecord:
        """Fetches a Pokemon and validates it against the fixed abilities/height schema."""
        data = await self._fetch_json(name)
        try:
            return PokemonRecord.model_validate(data)
        except ValidationError as e:
            raise DecodeError(f"unexpected Pokemon data shape: {str(e)}") from e

    async def fetch_raw(self, name: str) -> dict[str, Any]:
        """Fetches the full upstream payload without imposing a schema."""
        data = await self._fetch_json(name)
        if not isinstance(data, dict):
            raise DecodeError(f"expected a JSON object, got {type(data).__name__}")
        return data

    async def try_fetch_record(self, name: str) -> FetchResult:
        """Like fetch_record, but hands the failure back to the caller instead of raising."""
        try:
            return FetchResult(record=await self.fetch_record(name))
        except FetchError as e:
            return FetchResult(error=e)

    async def close(self):
        """Close the HTTP connection pool (call on app shutdown)."""
        await self.client.aclose()
