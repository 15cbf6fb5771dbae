"""Infrastructure adapters: PostgreSQL, in-memory repositories, file storage."""
