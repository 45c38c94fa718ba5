"""Talanta Gallery.

Backend for the Talanta art gallery: a public storefront, an admin back-office
and a self-service artist portal, exposed as a REST API.

High-level architecture
-----------------------

- ``talanta_gallery.core``:

  - Logging and monitoring configuration.
  - Domain errors shared by services and HTTP handlers.
  - Password hashing and JWT helpers.
  - The database layer: SQLModel entities, async repositories and the
    request/response I/O schemas.

- ``talanta_gallery.notifications``:

  - Email rendering (Jinja2) and delivery (SMTP or SendGrid) for order
    receipts, artist approval notices and password resets.

- ``talanta_gallery.server``:

  - The FastAPI application, routers, auth dependencies, exception handlers
    and the services that implement multi-step workflows.

Artist lifecycle
----------------

1. An artist registers and is stored with ``approved=False``.
2. An admin approves (``approved=True``, ``approved_at`` set) or rejects
   (artist and user rows are deleted).
3. Only approved, active artists can obtain a token.

Emails are sent after the database change is committed; a failed send is
reported but never rolls the change back.
"""
