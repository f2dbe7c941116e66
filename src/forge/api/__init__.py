"""FastAPI layer: dependencies, exception handlers, middleware and routers."""
