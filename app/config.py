import os
from pydantic import BaseModel


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 1314
    pokeapi_base_url: str = "https://pokeapi.co/api/v2"
    # Subject whose abilities are shown in the /hello_world fragment
    featured_pokemon: str = "ditto"
    # When set, rendered instead of the requested name
    greeting_name_override: str | None = None
    degrade_on_fetch_error: bool = True
    # None serves the site bundled in app/public
    static_dir: str | None = None
    cors_allow_origin: str = "*"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Builds settings from environment variables, falling back to the defaults."""
        defaults = cls()
        return cls(
            host=os.getenv("HOST", defaults.host),
            port=os.getenv("PORT", defaults.port),
            pokeapi_base_url=os.getenv("POKEAPI_BASE_URL", defaults.pokeapi_base_url),
            featured_pokemon=os.getenv("FEATURED_POKEMON", defaults.featured_pokemon),
            greeting_name_override=os.getenv("GREETING_NAME_OVERRIDE") or None,
            degrade_on_fetch_error=_env_flag("DEGRADE_ON_FETCH_ERROR", defaults.degrade_on_fetch_error),
            static_dir=os.getenv("STATIC_DIR") or None,
            cors_allow_origin=os.getenv("CORS_ALLOW_ORIGIN", defaults.cors_allow_origin),
            log_level=os.getenv("LOG_LEVEL", defaults.log_level),
        )
