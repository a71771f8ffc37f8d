"""Built-in CLI commands registered by :func:`apidesign.app.main`."""
