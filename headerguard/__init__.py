"""HeaderGuard: response header policies for FastAPI/Starlette applications."""
