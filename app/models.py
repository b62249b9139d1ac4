from pydantic import BaseModel, ConfigDict, Field

from app.errors import FetchError


# Nested "ability" object as PokeAPI sends it
class AbilityRef(BaseModel):
    name: str
    url: str

# One entry of the "abilities" list (Internal Contract)
class AbilityEntry(BaseModel):
    ability: AbilityRef
    is_hidden: bool
    slot: int

    @property
    def name(self) -> str:
        return self.ability.name

    @property
    def url(self) -> str:
        return self.ability.url

# Subset of /pokemon/{name} used by the greeting fragment; other keys are ignored
class PokemonRecord(BaseModel):
    abilities: list[AbilityEntry] = Field(default_factory=list)
    height: int = 0


class FetchResult(BaseModel):
    """Outcome of a single upstream fetch: exactly one of record/error is set."""
    # FetchError is a plain exception, not a pydantic type
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    record: PokemonRecord | None = None
    error: FetchError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
