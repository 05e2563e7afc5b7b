"""Built-in CLI sub-commands registered by :func:`curvenote.app.main`."""
