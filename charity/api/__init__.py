"""HTTP surface: dependencies, error translation and API routers."""
