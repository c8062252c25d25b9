"""In-memory task CRUD service built on Starlette."""
