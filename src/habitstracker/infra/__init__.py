"""Infrastructure: SQLModel database wiring and repositories."""
