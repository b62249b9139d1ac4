"""htmx Pokedex fragment server."""
