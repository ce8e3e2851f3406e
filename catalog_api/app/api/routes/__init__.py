"""Resource routers (auth, categories, products)."""
